"""Tax rate model."""

from sqlalchemy import Column, DateTime, Numeric, String
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base, generate_id


class Tax(Base):
    __tablename__ = "taxes"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    percentage = Column(Numeric(5, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    item_links = relationship("ItemTax", back_populates="tax", cascade="all, delete-orphan", passive_deletes=True)
