"""Invoice schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.schemas.common import InputModel, round_cents
from backend.app.schemas.customer import CustomerRead
from backend.app.services.totals import MAX_AMOUNT

InvoiceStatus = Literal["pending", "paid", "overdue"]


class LineItemInput(InputModel):
    item_id: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0, le=MAX_AMOUNT)
    # Accepted for compatibility with clients that send it; always recomputed
    total: Optional[Decimal] = None

    @field_validator("unit_price")
    @classmethod
    def two_decimals(cls, value):
        return round_cents(value)


class InvoiceCreate(InputModel):
    invoice_number: str = Field(min_length=1, max_length=64)
    customer_id: str = Field(min_length=1)
    issue_date: date
    due_date: Optional[date] = None
    discount: Decimal = Field(default=Decimal("0"), le=MAX_AMOUNT)
    status: InvoiceStatus = "pending"
    line_items: List[LineItemInput] = Field(min_length=1)


class InvoiceUpdate(InputModel):
    invoice_number: Optional[str] = Field(default=None, min_length=1, max_length=64)
    customer_id: Optional[str] = Field(default=None, min_length=1)
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    discount: Optional[Decimal] = Field(default=None, le=MAX_AMOUNT)
    status: Optional[InvoiceStatus] = None
    # None keeps the stored lines; a list replaces them all
    line_items: Optional[List[LineItemInput]] = Field(default=None, min_length=1)


class InvoicePreviewRequest(InputModel):
    line_items: List[LineItemInput] = []
    discount: Optional[Decimal] = Field(default=None, le=MAX_AMOUNT)


class LineItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    item_id: Optional[str] = None
    item_name: str
    quantity: int
    unit_price: Decimal
    total: Decimal


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    invoice_number: str
    customer_id: str
    issue_date: date
    due_date: Optional[date] = None
    subtotal: Decimal
    total_tax: Decimal
    discount: Decimal
    total: Decimal
    status: str
    created_at: datetime
    customer: CustomerRead
    line_items: List[LineItemRead] = []


class PreviewLine(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    tax_amount: Decimal


class InvoicePreview(BaseModel):
    subtotal: Decimal
    total_tax: Decimal
    discount: Decimal
    total: Decimal
    lines: List[PreviewLine]
    currency_symbol: str
    formatted_total: str
