import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from civicreport.models.report import ReportSeverity, ReportStatus


class ReportOut(BaseModel):
    id: str
    reported_by: str
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    description: str
    severity: ReportSeverity
    status: ReportStatus
    image_description: Optional[str] = None
    image_filename: Optional[str] = None
    reported_at: datetime
    resolved_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_validator("reported_at", "resolved_at")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite returns naive datetimes; everything is stored in UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class StatusUpdate(BaseModel):
    # Optional here so a missing value gets the dedicated 400 message
    status: Optional[ReportStatus] = None

    @field_validator("status", mode="before")
    @classmethod
    def blank_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


def parse_coordinate(value) -> Optional[float]:
    """Parse a form value as a coordinate, returning None for anything unusable."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number
