"""Invoice line item model; price and total are frozen when the invoice is saved."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base, generate_id


class InvoiceLineItem(Base):
    __tablename__ = "invoice_line_items"

    id = Column(String(36), primary_key=True, default=generate_id)
    invoice_id = Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    # Nulled when the catalog item goes away; item_name keeps the label
    item_id = Column(String(36), ForeignKey("items.id", ondelete="SET NULL"), nullable=True, index=True)
    item_name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    invoice = relationship("Invoice", back_populates="line_items")
    item = relationship("Item", back_populates="line_items")
