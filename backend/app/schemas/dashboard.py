"""Dashboard schemas."""

from pydantic import BaseModel


class InvoiceStats(BaseModel):
    total: int
    paid: int
    pending: int
    overdue: int
