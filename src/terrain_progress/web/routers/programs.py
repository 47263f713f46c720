"""Program catalog routes."""

from fastapi import APIRouter, Depends

from ...db.repositories import ProgramRepository
from ...errors import ProgramNotFoundError
from ..dependencies import get_program_repo

router = APIRouter(prefix="/programs", tags=["programs"])


@router.get("")
async def list_programs(
    terrain: str | None = None,
    repo: ProgramRepository = Depends(get_program_repo),
):
    """List catalog programs, optionally only those fitting a terrain profile."""
    programs = await repo.list_all()
    return {
        "programs": [
            {
                "id": program.id,
                "title": program.display_name,
                "duration_days": program.duration_days,
                "tags": program.tags,
                "goals": program.goals,
            }
            for program in programs
            if program.fits_terrain(terrain)
        ]
    }


@router.get("/{program_id}")
async def get_program(program_id: str, repo: ProgramRepository = Depends(get_program_repo)):
    """Full program definition."""
    program = await repo.get(program_id)
    if program is None:
        raise ProgramNotFoundError(program_id)
    return program.to_dict()
