from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .references import Reference

UserStatus = Literal["admin", "pedagogue", "client"]


class UserBase(BaseModel):
    username: str
    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None
    status: UserStatus = "client"
    image_path: str | None = None
    phone_numbers: list[str] = Field(default_factory=list)
    website: str | None = None


class UserCreate(UserBase):
    password: str
    # Playgrounds the new user is assigned to as pedagogue
    playground_ids: list[str] = Field(default_factory=list)


class UserUpdate(UserBase):
    # None keeps the current assignments; a list is reconciled against them
    playground_ids: list[str] | None = None


class User(UserBase):
    password_hash: str
    playground_ids: list[str] = Field(default_factory=list)
    events: list[Reference] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


class UserPublic(UserBase):
    """User without credentials, for responses."""

    playground_ids: list[str] = Field(default_factory=list)
    events: list[Reference] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


class PasswordChange(BaseModel):
    password: str
