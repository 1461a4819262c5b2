"""Schedule domain schemas - Pydantic models for jobs, slots and requests"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.constants import Frequency, JobStatus
from ...shared.validators import stored_hours


class Job(BaseModel):
    """A cleaning job at one address; projected recurring instances carry recurring_id"""

    # Unknown keys on stored jobs survive a read/write cycle
    model_config = ConfigDict(extra="allow")

    id: str
    street: str
    house_number: str
    status: JobStatus = JobStatus.PENDING
    maps_url: str = ""
    expected_hours: float = 0
    client_name: Optional[str] = None
    notes: Optional[str] = None
    time_interval: Optional[str] = None  # Display label only, never parsed
    recurring_id: Optional[str] = None
    is_recurring: Optional[bool] = None
    frequency: Optional[Frequency] = None

    @field_validator("expected_hours", mode="before")
    @classmethod
    def read_hours(cls, v):
        return stored_hours(v)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class TeamDaySlot(BaseModel):
    """Workers and jobs for one team on one day"""

    model_config = ConfigDict(extra="allow")

    assigned_workers: list[str] = Field(default_factory=list)
    addresses: list[Job] = Field(default_factory=list)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


# date key -> team id -> slot
Schedule = dict[str, dict[str, TeamDaySlot]]


class AddressFields(BaseModel):
    street: Optional[str] = None
    house_number: Optional[str] = None
    status: Optional[str] = None
    client_name: Optional[str] = None
    notes: Optional[str] = None
    # Set when materialising a concrete instance of a recurring rule
    recurring_id: Optional[str] = None


class JobCreate(BaseModel):
    """Schema for adding a job to a day"""

    date: Optional[str] = None
    team_id: Optional[str] = None
    address: Optional[AddressFields] = None
    time_interval: Optional[str] = None
    selected_workers: Optional[list[str]] = None
    expected_hours: Optional[float] = None


class JobReference(BaseModel):
    date: Optional[str] = None
    team_id: Optional[str] = None
    job_id: Optional[str] = None


class WorkersUpdate(BaseModel):
    assigned_workers: list[str]


class ClearAssignmentsRequest(BaseModel):
    dates: list[str]
