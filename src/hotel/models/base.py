from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time as naive datetime (for PostgreSQL TIMESTAMP).

    Columns are TIMESTAMP WITHOUT TIME ZONE; every stored time is UTC.
    """
    return datetime.now(UTC).replace(tzinfo=None)
