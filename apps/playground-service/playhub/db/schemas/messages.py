from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MessageBase(BaseModel):
    category: str | None = None
    body: str
    # Username of the author, if any
    author_id: str | None = None
    written_at: datetime | None = None


class MessageCreate(MessageBase):
    pass


class MessageUpdate(MessageBase):
    id: str


class Message(MessageBase):
    id: str
    playground_name: str | None = None
    model_config = ConfigDict(from_attributes=True)
