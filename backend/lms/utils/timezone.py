from datetime import datetime, timezone


def utcnow() -> datetime:
    # stored naive; every timestamp in the loans table is UTC
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)
