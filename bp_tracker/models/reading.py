"""Models for blood pressure readings and new-reading submissions."""

from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_serializer, field_validator

from bp_tracker.models.classification import ColorTier, classification_color
from bp_tracker.utils.timestamps import format_timestamp, parse_timestamp

READING_INPUT_FIELDS: Tuple[str, ...] = (
    "systolic1", "diastolic1", "pulse1",
    "systolic2", "diastolic2", "pulse2",
    "systolic3", "diastolic3", "pulse3",
)


class Reading(BaseModel):
    """A single averaged reading as stored by the server."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Server-assigned identifier")
    timestamp: datetime = Field(..., description="When the reading was taken (timezone aware)")
    systolic: int = Field(..., description="Systolic pressure in mmHg")
    diastolic: int = Field(..., description="Diastolic pressure in mmHg")
    pulse: int = Field(..., description="Pulse in beats per minute")
    classification: str = Field(..., description="Server-assigned classification label")

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_wire_timestamp(cls, value):
        """Decode fractional-second timestamps first, then whole-second ones."""
        return parse_timestamp(value)

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)

    @property
    def tier(self) -> ColorTier:
        return classification_color(self.classification)


class ReadingInput(BaseModel):
    """Three consecutive measurements submitted for server-side averaging."""

    model_config = ConfigDict(frozen=True)

    systolic1: StrictInt
    diastolic1: StrictInt
    pulse1: StrictInt

    systolic2: StrictInt
    diastolic2: StrictInt
    pulse2: StrictInt

    systolic3: StrictInt
    diastolic3: StrictInt
    pulse3: StrictInt

    def to_payload(self) -> bytes:
        """JSON request body for the submit endpoint."""
        return self.model_dump_json().encode("utf-8")
