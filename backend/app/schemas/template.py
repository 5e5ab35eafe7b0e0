"""Invoice PDF template schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.schemas.common import InputModel, reject_null

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class TemplateCreate(InputModel):
    name: str = Field(min_length=1, max_length=255)
    logo_url: Optional[str] = Field(default=None, max_length=512)
    primary_color: str = Field(default="#3b82f6", pattern=HEX_COLOR_PATTERN)
    is_default: bool = False


class TemplateUpdate(InputModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    logo_url: Optional[str] = Field(default=None, max_length=512)
    primary_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    is_default: Optional[bool] = None

    @field_validator("name", "primary_color", "is_default", mode="before")
    @classmethod
    def required_columns(cls, value):
        return reject_null(value)


class TemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    logo_url: Optional[str] = None
    primary_color: str
    is_default: bool
    created_at: Optional[datetime] = None
