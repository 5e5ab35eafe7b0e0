from sqlalchemy import Column, DateTime, String

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base, generate_id


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(150), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
