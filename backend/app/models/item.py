"""Catalog item model and its tax links."""

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base, generate_id


class Item(Base):
    __tablename__ = "items"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    unit_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    tax_links = relationship("ItemTax", back_populates="item", cascade="all, delete-orphan", passive_deletes=True)
    taxes = relationship("Tax", secondary="item_taxes", viewonly=True, order_by="Tax.name")
    line_items = relationship("InvoiceLineItem", back_populates="item", passive_deletes=True)


class ItemTax(Base):
    __tablename__ = "item_taxes"
    __table_args__ = (UniqueConstraint("item_id", "tax_id", name="uq_item_taxes_item_tax"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    item_id = Column(String(36), ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    tax_id = Column(String(36), ForeignKey("taxes.id", ondelete="CASCADE"), nullable=False, index=True)

    item = relationship("Item", back_populates="tax_links")
    tax = relationship("Tax", back_populates="item_links")
