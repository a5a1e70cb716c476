from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time as naive datetime (for TIMESTAMP WITHOUT TIME ZONE).

    All times are stored in UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)
