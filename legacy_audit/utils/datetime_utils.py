"""
Timezone-aware datetime helpers.
- Store and compute in UTC in DB.
"""
from datetime import datetime, timezone

UTC = timezone.utc


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware). Use for created_at."""
    return datetime.now(UTC)
