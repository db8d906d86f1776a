"""
Usage aggregation.

Folds parsed records into date, (date, model) and model buckets. Records
with no date are skipped by every fold, and every output is sorted so that
repeated runs over the same files give identical results.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .token_counter import TokenUsage
from claude_token_tracker.storage.models import (
    DailyUsage,
    ModelDailyUsage,
    ModelUsage,
    ParsedRecord,
    UsageTotal,
)

Bucket = Union[DailyUsage, ModelDailyUsage, ModelUsage]


def aggregate_by_date(records: Iterable[ParsedRecord]) -> List[DailyUsage]:
    """Aggregate records by date, most recent date first.

    Dates are fixed-width ISO strings, so string order is date order.
    """
    totals: Dict[str, Tuple[TokenUsage, int]] = {}

    for record in records:
        day = record.date
        if not day:
            continue
        usage, count = totals.get(day, (TokenUsage(), 0))
        totals[day] = (usage + record.usage, count + 1)

    return [
        DailyUsage(date=day, usage=usage, request_count=count)
        for day, (usage, count) in sorted(totals.items(), key=lambda item: item[0], reverse=True)
    ]


def aggregate_by_date_and_model(records: Iterable[ParsedRecord]) -> List[ModelDailyUsage]:
    """Aggregate records by date and model.

    Sorted by date descending, then model ascending.
    """
    totals: Dict[Tuple[str, str], Tuple[TokenUsage, int]] = {}

    for record in records:
        day = record.date
        if not day:
            continue
        key = (day, record.model)
        usage, count = totals.get(key, (TokenUsage(), 0))
        totals[key] = (usage + record.usage, count + 1)

    # Two stable sorts: secondary key first
    ordered = sorted(totals.items(), key=lambda item: item[0][1])
    ordered.sort(key=lambda item: item[0][0], reverse=True)

    return [
        ModelDailyUsage(date=day, model=model, usage=usage, request_count=count)
        for (day, model), (usage, count) in ordered
    ]


def aggregate_by_model(
    entries: Iterable[Union[ParsedRecord, ModelDailyUsage]]
) -> List[ModelUsage]:
    """Collapse all dates into one bucket per model, sorted by model.

    Accepts raw records or (date, model) buckets; the latter keep their
    request counts.
    """
    totals: Dict[str, Tuple[TokenUsage, int]] = {}

    for entry in entries:
        if not entry.date:
            continue
        if isinstance(entry, ModelDailyUsage):
            requests = entry.request_count
        else:
            requests = 1
        usage, count = totals.get(entry.model, (TokenUsage(), 0))
        totals[entry.model] = (usage + entry.usage, count + requests)

    return [
        ModelUsage(model=model, usage=usage, request_count=count)
        for model, (usage, count) in sorted(totals.items(), key=lambda item: item[0])
    ]


def sum_usage(buckets: Iterable[Bucket]) -> UsageTotal:
    """Sum any sequence of buckets into a single total."""
    usage = TokenUsage()
    count = 0
    for bucket in buckets:
        usage = usage + bucket.usage
        count += bucket.request_count
    return UsageTotal(usage=usage, request_count=count)


def get_today_date(today: Optional[date] = None) -> str:
    """Today's date as YYYY-MM-DD in local time."""
    return (today or date.today()).strftime("%Y-%m-%d")


def find_date(daily_usage: Iterable[DailyUsage], day: str) -> Optional[DailyUsage]:
    """Bucket for a date, or None when there is no usage that day."""
    for bucket in daily_usage:
        if bucket.date == day:
            return bucket
    return None
