"""Client domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.constants import ClientFrequency
from ...shared.validators import stored_hours


class Client(BaseModel):
    """Saved address used to pre-fill jobs and recurring jobs"""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    street: str
    house_number: str
    notes: str = ""
    expected_hours: float = 0
    default_frequency: ClientFrequency = ClientFrequency.NONE
    default_time_interval: str = ""

    @field_validator("expected_hours", mode="before")
    @classmethod
    def read_hours(cls, v):
        return stored_hours(v)

    @field_validator("default_frequency", mode="before")
    @classmethod
    def read_frequency(cls, v):
        # Unrecognised frequencies fall back to none
        try:
            return ClientFrequency(v)
        except ValueError:
            return ClientFrequency.NONE

    def to_json(self) -> dict:
        return self.model_dump(mode="json")


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    notes: Optional[str] = None
    expected_hours: Optional[float] = None
    default_frequency: Optional[str] = None
    default_time_interval: Optional[str] = None


class ClientUpdate(BaseModel):
    """Schema for updating an existing client; omitted fields are left unchanged"""

    name: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    notes: Optional[str] = None
    expected_hours: Optional[float] = None
    default_frequency: Optional[str] = None
    default_time_interval: Optional[str] = None
