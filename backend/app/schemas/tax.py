"""Tax schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.schemas.common import InputModel, reject_null, round_cents


class TaxCreate(InputModel):
    name: str = Field(min_length=1, max_length=100)
    percentage: Decimal = Field(ge=0, le=100)

    @field_validator("percentage")
    @classmethod
    def two_decimals(cls, value):
        return round_cents(value)


class TaxUpdate(InputModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)

    @field_validator("percentage")
    @classmethod
    def two_decimals(cls, value):
        return round_cents(value)

    @field_validator("name", "percentage", mode="before")
    @classmethod
    def required_columns(cls, value):
        return reject_null(value)


class TaxRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    percentage: Decimal
    created_at: datetime
