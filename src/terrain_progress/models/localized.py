"""Localized text value type."""

from dataclasses import dataclass, field

DEFAULT_LOCALE = "en-US"


@dataclass(frozen=True)
class LocalizedText:
    """Locale code -> text mapping (BCP-47 keys such as ``en-US``).

    Treated as an opaque value: the only rendering logic is picking the best
    match for a locale with a fallback to the default locale.
    """

    values: dict[str, str] = field(default_factory=dict)

    @classmethod
    def english(cls, text: str) -> "LocalizedText":
        return cls({DEFAULT_LOCALE: text})

    def get(self, locale: str) -> str | None:
        return self.values.get(locale)

    def localized(self, locale: str = DEFAULT_LOCALE) -> str:
        """Text for ``locale``, falling back to language match then en-US."""
        locale = locale.replace("_", "-")
        if locale in self.values:
            return self.values[locale]

        language = locale[:2]
        for key, value in self.values.items():
            if key.startswith(language):
                return value

        if DEFAULT_LOCALE in self.values:
            return self.values[DEFAULT_LOCALE]
        return next(iter(self.values.values()), "")

    @property
    def is_empty(self) -> bool:
        return not any(self.values.values())

    def __str__(self) -> str:
        return self.localized()

    def to_dict(self) -> dict:
        return dict(self.values)

    @classmethod
    def from_value(cls, data: "dict | str | None") -> "LocalizedText":
        """Create from a locale map or a bare string."""
        if data is None:
            return cls()
        if isinstance(data, str):
            return cls.english(data)
        return cls(dict(data))
