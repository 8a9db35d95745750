from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time as naive datetime.

    Stored documents and the SQL documents table both use naive UTC timestamps.
    """
    return datetime.now(UTC).replace(tzinfo=None)
