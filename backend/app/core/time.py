"""UTC clock used for the ``created_at`` column defaults."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Timezone-aware UTC timestamp for new customers, items, invoices and templates."""
    return datetime.now(UTC)
