from datetime import datetime, timezone


def utcnow() -> datetime:
    # Naive UTC; SQLite DateTime columns do not keep tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)
