"""Customer schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from backend.app.schemas.common import InputModel, reject_null


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CustomerBase(InputModel):
    name: str = Field(min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    gstin: Optional[str] = Field(default=None, max_length=15)
    billing_address: Optional[str] = None

    @field_validator("email", "phone", "gstin", "billing_address", mode="before")
    @classmethod
    def blank_optional_fields(cls, value):
        return _blank_to_none(value)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(InputModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    gstin: Optional[str] = Field(default=None, max_length=15)
    billing_address: Optional[str] = None

    @field_validator("email", "phone", "gstin", "billing_address", mode="before")
    @classmethod
    def blank_optional_fields(cls, value):
        return _blank_to_none(value)

    @field_validator("name", mode="before")
    @classmethod
    def required_columns(cls, value):
        return reject_null(value)


class CustomerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    gstin: Optional[str] = None
    billing_address: Optional[str] = None
    created_at: datetime
