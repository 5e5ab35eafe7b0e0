"""Invoice PDF template model; purely cosmetic settings."""

from sqlalchemy import Boolean, Column, DateTime, String

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base, generate_id


class Template(Base):
    __tablename__ = "templates"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    logo_url = Column(String(512), nullable=True)
    primary_color = Column(String(7), nullable=False, default="#3b82f6")
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
