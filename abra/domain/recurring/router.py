"""Recurring job router - FastAPI endpoints for recurring rules"""

from fastapi import APIRouter, Depends, status

from ...storage import JSONStore, get_store
from .schemas import RecurringExceptionCreate, RecurringJobCreate, RecurringJobUpdate
from .service import RecurringJobService

router = APIRouter(prefix="/recurring-jobs", tags=["Recurring Jobs"])


def get_recurring_service(store: JSONStore = Depends(get_store)) -> RecurringJobService:
    """Dependency injection for RecurringJobService"""
    return RecurringJobService(store)


@router.get("")
def get_recurring_jobs(service: RecurringJobService = Depends(get_recurring_service)):
    return [rule.to_json() for rule in service.get_rules()]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_recurring_job(
    data: RecurringJobCreate, service: RecurringJobService = Depends(get_recurring_service)
):
    """Create a weekly or fortnightly recurring job"""
    rule = service.create_rule(data)
    return {"message": "Recurring job created", "rule": rule.to_json()}


@router.patch("/{rule_id}")
def edit_recurring_job(
    rule_id: str,
    data: RecurringJobUpdate,
    service: RecurringJobService = Depends(get_recurring_service),
):
    """Update only the supplied fields of a recurring job (including pause)"""
    rule = service.edit_rule(rule_id, data)
    return {"message": "Recurring job updated", "rule": rule.to_json()}


@router.delete("/{rule_id}")
def delete_recurring_job(
    rule_id: str, service: RecurringJobService = Depends(get_recurring_service)
):
    rule = service.delete_rule(rule_id)
    return {"message": "Recurring job deleted", "rule": rule.to_json()}


@router.post("/{rule_id}/exceptions")
def cancel_recurring_instance(
    rule_id: str,
    data: RecurringExceptionCreate,
    service: RecurringJobService = Depends(get_recurring_service),
):
    """Cancel a single occurrence without changing the rule's pattern"""
    rule = service.cancel_instance(rule_id, data.date)
    return {"message": f"Recurring instance cancelled for {data.date}", "rule": rule.to_json()}
