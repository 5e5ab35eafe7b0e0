"""User schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)


class UserRead(BaseModel):
    id: str
    username: str

    model_config = ConfigDict(from_attributes=True)
