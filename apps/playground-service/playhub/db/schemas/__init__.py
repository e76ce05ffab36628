"""
Pydantic schemas for stored documents, inputs and hydrated views.

Stored documents hold ``Reference`` stubs; the ``*Detail`` views hold the
dereferenced entities.
"""

from .references import ReferenceKind, Reference
from .playgrounds import PlaygroundBase, PlaygroundCreate, PlaygroundUpdate, Playground
from .users import UserStatus, UserBase, UserCreate, UserUpdate, User, UserPublic, PasswordChange
from .events import Details, EventBase, EventCreate, EventUpdate, Event
from .messages import MessageBase, MessageCreate, MessageUpdate, Message
from .details import PlaygroundDetail, UserDetail, EventDetail

__all__ = [
    "ReferenceKind",
    "Reference",
    "PlaygroundBase",
    "PlaygroundCreate",
    "PlaygroundUpdate",
    "Playground",
    "UserStatus",
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "User",
    "UserPublic",
    "PasswordChange",
    "Details",
    "EventBase",
    "EventCreate",
    "EventUpdate",
    "Event",
    "MessageBase",
    "MessageCreate",
    "MessageUpdate",
    "Message",
    "PlaygroundDetail",
    "UserDetail",
    "EventDetail",
]
