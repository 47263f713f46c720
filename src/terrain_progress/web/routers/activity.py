"""Daily activity, streak and calendar routes."""

from datetime import date
from enum import Enum

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ...models.daily_log import RoutineLevel
from ...services.activity import ActivityService
from ..dependencies import get_activity_service

router = APIRouter(prefix="/activity", tags=["activity"])


class ItemKind(str, Enum):
    ROUTINE = "routine"
    MOVEMENT = "movement"


class LogRequest(BaseModel):
    item_id: str
    kind: ItemKind = ItemKind.ROUTINE
    level: RoutineLevel = RoutineLevel.FULL
    day: date | None = None


@router.post("/logs", status_code=201)
async def log_activity(
    body: LogRequest,
    service: ActivityService = Depends(get_activity_service),
):
    """Record a completed routine or movement."""
    if body.kind == ItemKind.MOVEMENT:
        log = await service.record_movement(body.item_id, body.day)
    else:
        log = await service.record_routine(body.item_id, body.level, body.day)
    return log.to_dict()


@router.get("/logs")
async def list_logs(service: ActivityService = Depends(get_activity_service)):
    """Daily logs, most recent first."""
    logs = await service.daily_log_repo.list_recent()
    return {"logs": [log.to_dict() for log in logs]}


@router.get("/streaks")
async def streaks(service: ActivityService = Depends(get_activity_service)):
    """Current streak, longest streak, totals and monthly counts."""
    summary = await service.streaks()
    return {**summary.to_dict(), "monthly": await service.monthly()}


@router.get("/calendar/{year}/{month}")
async def calendar_month(
    year: int,
    month: int,
    service: ActivityService = Depends(get_activity_service),
):
    """Month grid with completed/today/plain marks."""
    if not 1 <= month <= 12:
        raise HTTPException(status_code=422, detail=f"Invalid month {month}")
    grid = await service.calendar(year, month)
    return grid.to_dict()
