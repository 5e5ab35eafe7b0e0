"""Shared pieces for request schemas."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from backend.app.services.totals import quantize_money


class InputModel(BaseModel):
    """Request body accepting snake_case or camelCase keys (``unit_price`` or ``unitPrice``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def round_cents(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return None
    return quantize_money(value)


def reject_null(value):
    """Partial updates may omit a required column but never set it to null."""
    if value is None:
        raise ValueError("may not be null")
    return value
