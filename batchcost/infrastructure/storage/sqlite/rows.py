"""Row value conversions shared by the SQLite stores."""

from datetime import UTC, date, datetime


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO timestamp column, tolerating blanks and junk."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def iso(value: datetime | date | None) -> str | None:
    return value.isoformat() if value else None


def now() -> datetime:
    return datetime.now(UTC)
