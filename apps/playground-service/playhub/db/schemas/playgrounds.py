from pydantic import BaseModel, ConfigDict, Field

from .references import Reference


class PlaygroundBase(BaseModel):
    name: str
    street_name: str | None = None
    street_number: int | None = None
    zip_code: int | None = None
    commune: str | None = None
    image_path: str | None = None
    toilet_possibilities: bool = False
    has_soccer_field: bool = False


class PlaygroundCreate(PlaygroundBase):
    pass


class PlaygroundUpdate(PlaygroundBase):
    pass


class Playground(PlaygroundBase):
    assigned_pedagogues: list[Reference] = Field(default_factory=list)
    events: list[Reference] = Field(default_factory=list)
    messages: list[Reference] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)
