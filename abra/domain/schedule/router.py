"""Schedule router - FastAPI endpoints for jobs and worker assignments"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...storage import JSONStore, get_store
from .repository import encode_schedule
from .schemas import ClearAssignmentsRequest, JobCreate, JobReference, WorkersUpdate
from .service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["Schedule"])


def get_schedule_service(store: JSONStore = Depends(get_store)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(store)


@router.get("")
def get_schedule(
    start: Optional[str] = Query(None, description="First day of the range, DD-MM-YYYY"),
    days: Optional[int] = Query(None, description="Number of days in the range"),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get the schedule including projected recurring jobs"""
    return encode_schedule(service.get_schedule(start=start, days=days))


@router.post("/jobs", status_code=status.HTTP_201_CREATED)
def add_job(data: JobCreate, service: ScheduleService = Depends(get_schedule_service)):
    """Add a job to a team's day"""
    job = service.add_job(
        data.date,
        data.team_id,
        data.address,
        selected_workers=data.selected_workers,
        time_interval=data.time_interval,
        expected_hours=data.expected_hours,
    )
    return {"message": "Job added successfully", "job": job.to_json()}


@router.post("/jobs/cancel")
def cancel_job(data: JobReference, service: ScheduleService = Depends(get_schedule_service)):
    """Cancel a job (soft delete)"""
    job = service.cancel_job(data.date, data.team_id, data.job_id)
    return {"message": "Job cancelled successfully", "job": job.to_json()}


@router.delete("/{date}/{team_id}/jobs/{job_id}")
def delete_job(
    date: str,
    team_id: str,
    job_id: str,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Permanently remove a job"""
    job = service.delete_job(date, team_id, job_id)
    return {"message": "Job deleted successfully", "job": job.to_json()}


@router.put("/{date}/{team_id}/workers")
def update_workers(
    date: str,
    team_id: str,
    data: WorkersUpdate,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Replace the workers assigned to a team's day"""
    workers = service.update_workers(date, team_id, data.assigned_workers)
    return {
        "message": "Workers updated successfully",
        "date": date,
        "team_id": team_id,
        "assigned_workers": workers,
    }


@router.post("/clear-assignments")
def clear_assignments(
    data: ClearAssignmentsRequest, service: ScheduleService = Depends(get_schedule_service)
):
    """Clear worker assignments for several days at once"""
    cleared = service.clear_assignments(data.dates)
    return {"message": "Assignments cleared successfully", "cleared": cleared}
