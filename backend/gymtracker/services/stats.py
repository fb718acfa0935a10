"""Progress figures for one exercise's weight history.

Both functions are pure: they take plain sequences and return new values,
so the API, the report renderer and the tests all share one implementation.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Any, Iterable, Sequence


@dataclass(frozen=True, slots=True)
class ProgressStats:
    total_entries: int
    max_weight: float | None
    min_weight: float | None
    avg_weight: float | None
    latest_weight: float | None
    # None when the minimum is 0 and there is more than one entry
    progression: float | None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


EMPTY_STATS = ProgressStats(
    total_entries=0,
    max_weight=None,
    min_weight=None,
    avg_weight=None,
    latest_weight=None,
    progression=0.0,
)


def _as_pair(entry: Any) -> tuple[float, datetime]:
    if isinstance(entry, (tuple, list)):
        weight, ts = entry
    else:
        weight, ts = entry.weight, entry.created_at
    return float(weight), ts


def _within(ts: datetime, start: date | datetime | None, end: date | datetime | None) -> bool:
    # plain dates compare against the calendar day so both bounds stay inclusive
    if start is not None:
        lhs = ts if isinstance(start, datetime) else ts.date()
        if lhs < start:
            return False
    if end is not None:
        lhs = ts if isinstance(end, datetime) else ts.date()
        if lhs > end:
            return False
    return True


def filter_range(
    entries: Iterable[Any],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> list[tuple[float, datetime]]:
    pairs = (_as_pair(e) for e in entries)
    return [p for p in pairs if _within(p[1], start, end)]


def progression_pct(latest: float, minimum: float, count: int) -> float | None:
    if count <= 1:
        return 0.0
    if minimum == 0:
        return None
    return (latest - minimum) / minimum * 100


def compute_progress_stats(
    entries: Iterable[Any],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> ProgressStats:
    """
    Reduce ``(weight, timestamp)`` observations to summary figures.

    ``entries`` may hold tuples or objects exposing ``weight`` and
    ``created_at``. The optional bounds are inclusive and applied before
    aggregating. ``latest_weight`` is the value with the greatest timestamp;
    on a tie the later one in input order wins.
    """
    pairs = filter_range(entries, start, end)
    if not pairs:
        return EMPTY_STATS

    weights = [w for w, _ in pairs]
    latest_weight, latest_ts = pairs[0]
    for weight, ts in pairs[1:]:
        if ts >= latest_ts:
            latest_weight, latest_ts = weight, ts

    minimum = min(weights)
    return ProgressStats(
        total_entries=len(weights),
        max_weight=max(weights),
        min_weight=minimum,
        avg_weight=sum(weights) / len(weights),
        latest_weight=latest_weight,
        progression=progression_pct(latest_weight, minimum, len(weights)),
    )


def trend_line(values: Sequence[float]) -> list[float]:
    """Least-squares fit over index positions 0..n-1; short input comes back as is."""
    n = len(values)
    if n < 2:
        return list(values)

    sum_x = sum(range(n))
    sum_y = sum(values)
    sum_xy = sum(i * y for i, y in enumerate(values))
    sum_xx = sum(i * i for i in range(n))

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return [slope * i + intercept for i in range(n)]
