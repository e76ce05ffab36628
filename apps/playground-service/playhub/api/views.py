"""
Response models: hydrated views without credentials.
"""
from pydantic import BaseModel, Field

from playhub.db import schemas


class PlaygroundView(schemas.PlaygroundBase):
    assigned_pedagogues: list[schemas.UserPublic] = Field(default_factory=list)
    events: list[schemas.Event] = Field(default_factory=list)
    messages: list[schemas.Message] = Field(default_factory=list)


class UserView(schemas.UserBase):
    playground_ids: list[str] = Field(default_factory=list)
    events: list[schemas.Event] = Field(default_factory=list)


class EventView(schemas.EventBase):
    id: str
    playground_name: str | None = None
    participants: list[schemas.UserPublic] = Field(default_factory=list)


class Created(BaseModel):
    id: str


class Ack(BaseModel):
    n: int
    acknowledged: bool = True
