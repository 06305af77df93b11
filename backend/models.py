"""
Pydantic models used across the backend.

Two shapes live here: the payload a client sends (`PainEntryIn`) and
the record the service stores and returns (`PainEntry`). They are kept
separate because the client never controls `id` or `timestamp`.

Guidelines:
- `PainEntryIn` only describes *shape*. Range and enum rules belong to
  `service_entries.validate_entry` so that a bad level or location is
  reported as a validation error, not as a decode error.
- `PainEntry.location` is a plain string for the same reason: the
  service builds the record first and validates it afterwards.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class Location(str, Enum):
    BACK = "back"
    NECK = "neck"
    SHOULDER = "shoulder"
    KNEE = "knee"
    ANKLE = "ankle"


LOCATIONS = {loc.value for loc in Location}


class PainEntryIn(BaseModel):
    """Input shape for an entry sent by clients.

    Fields:
    - `level`: integer severity. Floats and numeric strings are rejected.
    - `location`: body location name, checked later against `Location`.
    - `notes`: free text.
    - `id`, `timestamp`: accepted so that well-formed bodies echoing a
      previous response still decode, but the service overwrites both.

    Missing or null fields fall back to zero values; unknown fields are
    ignored.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    id: Optional[str] = None
    timestamp: Optional[datetime] = None
    level: int = 0
    location: str = ""
    notes: str = ""

    @field_validator("level", "location", "notes", mode="before")
    @classmethod
    def null_to_zero(cls, v, info: ValidationInfo):
        # JSON null leaves the field at its zero value, same as omitting it.
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class PainEntry(BaseModel):
    """A stored pain observation, serialized as-is in responses."""

    id: str
    timestamp: datetime
    level: int
    location: str
    notes: str = ""


class ErrorOut(BaseModel):
    error: str
