import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_id() -> str:
    """Opaque primary key for every table."""
    return str(uuid.uuid4())
