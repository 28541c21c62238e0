"""Graph Stats — pure aggregations over adjacency-list data.

Invariants:
    - No IO: inputs are already-loaded timestamps and id lists
    - Daily buckets use the UTC calendar date, formatted YYYY-MM-DD
    - Daily output sorted ascending by date; empty input yields []
    - Intersection order follows the first list; each id appears at most once

Design Decisions:
    - Naive datetimes are treated as UTC: SQLite drops tzinfo on read,
      PostgreSQL returns aware values (ADR: one code path for both stores)
    - Intersection hashes the smaller list only, then scans the first list:
      memory bounded by the smaller side, order preserved from the first list
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Iterable
from uuid import UUID

from followgraph.core.domain_types import DailyCount


def utc_date_key(ts: datetime) -> str:
    """Return the UTC calendar date of ts as YYYY-MM-DD."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%d")


def group_daily_counts(timestamps: Iterable[datetime]) -> list[DailyCount]:
    """Count follower edges per UTC date, ascending by date."""
    counts = Counter(utc_date_key(ts) for ts in timestamps)
    return [DailyCount(date=d, count=counts[d]) for d in sorted(counts)]


def intersect_ids(first: Iterable[UUID], second: Iterable[UUID]) -> list[UUID]:
    """Ids present in both sequences, in first-sequence order, deduplicated."""
    first = list(first)
    second = list(second)
    if len(second) <= len(first):
        lookup = set(second)
    else:
        lookup = set(first).intersection(second)
    seen: set[UUID] = set()
    common: list[UUID] = []
    for uid in first:
        if uid in lookup and uid not in seen:
            seen.add(uid)
            common.append(uid)
    return common
