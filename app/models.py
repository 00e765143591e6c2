import datetime as dt
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

def to_datetime(value) -> Optional[dt.datetime]:
    if isinstance(value, dt.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value.astimezone(dt.timezone.utc)
    if isinstance(value, str):
        try:
            parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=dt.timezone.utc)
        return parsed.astimezone(dt.timezone.utc)
    return None

class Neighborhood(BaseModel):
    model_config = ConfigDict(extra="ignore")

    zipcode: str
    city: Optional[str] = None
    neighborhood: Optional[str] = None  # display label
    active_events: Optional[int] = 0

class Event(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    description: Optional[str] = None
    start_datetime: dt.datetime  # aware, UTC
    venue_name: Optional[str] = None
    category: Optional[str] = None
    zipcode: Optional[str] = None

    @field_validator("start_datetime", mode="before")
    @classmethod
    def _normalize_start(cls, value):
        parsed = to_datetime(value)
        if parsed is None:
            raise ValueError(f"invalid start_datetime: {value!r}")
        return parsed

    @classmethod
    def from_document(cls, doc: dict) -> "Event":
        data = dict(doc)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        return cls(**data)
