"""
Hydrated read views.

Reference stubs are replaced one level deep: a hydrated playground carries full
``Event`` documents, whose own participant sets are still stubs.
"""
from pydantic import Field

from .events import Event, EventBase
from .messages import Message
from .playgrounds import PlaygroundBase
from .users import User, UserBase


class PlaygroundDetail(PlaygroundBase):
    assigned_pedagogues: list[User] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    messages: list[Message] = Field(default_factory=list)


class UserDetail(UserBase):
    password_hash: str
    playground_ids: list[str] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)


class EventDetail(EventBase):
    id: str
    playground_name: str | None = None
    participants: list[User] = Field(default_factory=list)
