"""Catalog item schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.schemas.common import InputModel, reject_null, round_cents
from backend.app.schemas.tax import TaxRead
from backend.app.services.totals import MAX_AMOUNT


class ItemCreate(InputModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    unit_price: Decimal = Field(ge=0, le=MAX_AMOUNT)
    tax_ids: List[str] = []

    @field_validator("unit_price")
    @classmethod
    def two_decimals(cls, value):
        return round_cents(value)


class ItemUpdate(InputModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    unit_price: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    # None keeps the current links; a list (even empty) replaces them all
    tax_ids: Optional[List[str]] = None

    @field_validator("name", "unit_price", mode="before")
    @classmethod
    def required_columns(cls, value):
        return reject_null(value)

    @field_validator("unit_price")
    @classmethod
    def two_decimals(cls, value):
        return round_cents(value)


class ItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    unit_price: Decimal
    created_at: datetime
    taxes: List[TaxRead] = []
