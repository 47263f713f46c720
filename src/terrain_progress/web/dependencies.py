"""Request-scoped dependencies built from app state."""

from fastapi import Request

from ..db import DailyLogRepository, EnrollmentRepository, ProgramRepository
from ..services import ActivityService, EnrollmentService


def get_program_repo(request: Request) -> ProgramRepository:
    return ProgramRepository(request.app.state.db_path)


def get_enrollment_service(request: Request) -> EnrollmentService:
    """Build the enrollment service from app state."""
    state = request.app.state
    return EnrollmentService(
        ProgramRepository(state.db_path),
        EnrollmentRepository(state.db_path, clock=state.clock),
        clock=state.clock,
    )


def get_activity_service(request: Request) -> ActivityService:
    """Build the activity service from app state."""
    state = request.app.state
    return ActivityService(
        DailyLogRepository(state.db_path),
        clock=state.clock,
        first_weekday=state.first_weekday,
    )
