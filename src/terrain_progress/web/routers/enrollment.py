"""Active program enrollment routes."""

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...errors import EnrollmentNotFoundError
from ...services.enrollment import ActiveProgram, EnrollmentService
from ..dependencies import get_enrollment_service

router = APIRouter(prefix="/enrollment", tags=["enrollment"])


class EnrollRequest(BaseModel):
    program_id: str
    start_date: date | None = None


class ItemRequest(BaseModel):
    item_id: str
    day: int | None = None


def _summary(active: ActiveProgram) -> dict:
    enrollment = active.enrollment
    duration = active.program.duration_days
    return {
        "enrollment": enrollment.to_dict(),
        "program": {
            "id": active.program.id,
            "title": active.program.display_name,
            "duration_days": duration,
        },
        "state": enrollment.state.value,
        "completed_days": enrollment.completed_days,
        "progress": enrollment.progress_fraction(duration),
    }


@router.get("")
async def get_enrollment(service: EnrollmentService = Depends(get_enrollment_service)):
    """The active enrollment with its current day brought up to date."""
    active = await service.refresh_current_day()
    return _summary(active)


@router.post("", status_code=201)
async def enroll(
    body: EnrollRequest,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    """Start a program; any other active enrollment is deactivated."""
    active = await service.enroll(body.program_id, start_date=body.start_date)
    return _summary(active)


@router.delete("")
async def unenroll(service: EnrollmentService = Depends(get_enrollment_service)):
    """Leave the active program without completing it."""
    enrollment = await service.unenroll()
    if enrollment is None:
        raise EnrollmentNotFoundError()
    return {"status": "left", "enrollment": enrollment.to_dict()}


@router.get("/history")
async def history(service: EnrollmentService = Depends(get_enrollment_service)):
    """All enrollments, newest first."""
    return {
        "enrollments": [
            {
                **enrollment.to_dict(),
                "state": enrollment.state.value,
                "program_title": program.display_name if program else None,
            }
            for enrollment, program in await service.history()
        ]
    }


@router.get("/days/{day}")
async def day_plan(day: int, service: EnrollmentService = Depends(get_enrollment_service)):
    """Content and completion state of a program day."""
    plan = await service.day_plan(day)
    return plan.to_dict()


@router.post("/items")
async def complete_item(
    body: ItemRequest,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    """Check off an item, on the current day unless ``day`` is given."""
    added = await service.complete_item(body.item_id, body.day)
    plan = await service.day_plan(body.day)
    return {"added": added, "day": plan.to_dict()}


@router.delete("/items/{item_id}")
async def uncomplete_item(
    item_id: str,
    day: int | None = None,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    """Uncheck an item."""
    removed = await service.uncomplete_item(item_id, day)
    return {"removed": removed}


@router.post("/days/{day}/complete")
async def complete_day(day: int, service: EnrollmentService = Depends(get_enrollment_service)):
    """Mark a day complete. Completing the final day finishes the program."""
    active, milestone = await service.complete_day(day)
    return {"milestone": milestone.value, **_summary(active)}
