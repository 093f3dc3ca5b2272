from __future__ import annotations

from datetime import date, datetime, time


def normalize_text(s: str | None) -> str:
    return (s or "").strip()


def is_blank(s: str | None) -> bool:
    return not normalize_text(s)


def parse_timestamp(s: str | None, *, end_of_day: bool = False) -> datetime | None:
    """
    Parse an ISO-8601 date or datetime from a query string / CLI argument.

    Blank input means "not supplied" and returns None. A bare date (any form
    `date.fromisoformat` accepts) becomes midnight, or 23:59:59.999999 when
    `end_of_day` is set so an end bound of 2023-12-31 still covers records
    created during that day.

    created_at is stored without a time zone, so values carrying a UTC offset
    are rejected rather than compared differently per backend.
    """
    v = normalize_text(s)
    if not v:
        return None
    try:
        d = date.fromisoformat(v)
    except ValueError:
        pass
    else:
        return datetime.combine(d, time.max if end_of_day else time.min)
    try:
        ts = datetime.fromisoformat(v)
    except ValueError as e:
        raise ValueError(f"Invalid timestamp {v!r}; expected YYYY-MM-DD or ISO-8601.") from e
    if ts.tzinfo is not None:
        raise ValueError(f"Timestamp {v!r} has a UTC offset; pass a naive local timestamp.")
    return ts
