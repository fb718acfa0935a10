from datetime import datetime, timezone


def utcnow() -> datetime:
    # python-side default keeps sub-second precision on every backend
    return datetime.now(timezone.utc)
