"""Recurring job domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.constants import Frequency, TeamId
from ...shared.validators import stored_hours


class RecurringRule(BaseModel):
    """Template that projects a job onto every due date from start_date onwards"""

    model_config = ConfigDict(extra="allow")

    id: str
    client_name: str = ""
    street: str
    house_number: str
    notes: str = ""
    team_id: TeamId
    start_date: str
    frequency: Frequency
    time_interval: str = ""
    expected_hours: float = 0
    exceptions: list[str] = Field(default_factory=list)
    paused: bool = False
    created_at: Optional[str] = None

    @field_validator("expected_hours", mode="before")
    @classmethod
    def read_hours(cls, v):
        return stored_hours(v)

    def to_json(self) -> dict:
        return self.model_dump(mode="json")


class RecurringJobCreate(BaseModel):
    """Schema for creating a recurring job"""

    client_name: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    notes: Optional[str] = None
    team_id: Optional[str] = None
    start_date: Optional[str] = None
    frequency: Optional[str] = None
    time_interval: Optional[str] = None
    expected_hours: Optional[float] = None


class RecurringJobUpdate(BaseModel):
    """
    Schema for editing a recurring job.

    Only fields present in the request are applied; omitted fields keep their
    current value.
    """

    client_name: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    notes: Optional[str] = None
    team_id: Optional[str] = None
    start_date: Optional[str] = None
    frequency: Optional[str] = None
    time_interval: Optional[str] = None
    expected_hours: Optional[float] = None
    paused: Optional[bool] = None


class RecurringExceptionCreate(BaseModel):
    """Date on which a single occurrence is cancelled"""

    date: Optional[str] = None
