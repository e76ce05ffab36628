from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .references import Reference


class Details(BaseModel):
    """Time window of an event."""

    date: datetime | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None


class EventBase(BaseModel):
    name: str
    description: str | None = None
    image_path: str | None = None
    participant_limit: int | None = Field(default=None, ge=0)
    details: Details | None = None


class EventCreate(EventBase):
    pass


class EventUpdate(EventBase):
    id: str


class Event(EventBase):
    id: str
    playground_name: str | None = None
    participants: list[Reference] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)
