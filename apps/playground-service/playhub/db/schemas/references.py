"""
Reference stubs stored in place of embedded documents.

A stub carries only the foreign key. Hydrated views (see ``details``) are
separate types, so a stub can never be mistaken for a loaded entity.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ReferenceKind(str, Enum):
    ID = "id"
    KEY = "key"


class Reference(BaseModel):
    kind: ReferenceKind
    value: str
    model_config = ConfigDict(frozen=True)

    @classmethod
    def by_id(cls, value: str) -> "Reference":
        return cls(kind=ReferenceKind.ID, value=value)

    @classmethod
    def by_key(cls, value: str) -> "Reference":
        return cls(kind=ReferenceKind.KEY, value=value)
