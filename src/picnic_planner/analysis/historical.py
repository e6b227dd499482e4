"""Aggregate one calendar date across past years.

Issues one point lookup per prior year, runs them concurrently, keeps the
years that answered and summarizes them. Archive data is often missing for
individual years, so a partial answer is a normal success; only an empty
answer is an error.

The lookup is injected, so this module does no I/O of its own.
"""

from __future__ import annotations

import calendar
import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from datetime import MINYEAR, date
from typing import TYPE_CHECKING

from picnic_planner.errors import NotFoundError
from picnic_planner.schemas import HistoricalSummary

if TYPE_CHECKING:
    from collections.abc import Callable

    from picnic_planner.schemas import Location, YearlyDataPoint

logger = logging.getLogger(__name__)

MIN_YEARS_BACK = 1
MAX_YEARS_BACK = 50
DEFAULT_MAX_WORKERS = 10


def clamp_years_back(years_back: int) -> int:
    """Limit the look-back window to 1-50 years."""
    return max(MIN_YEARS_BACK, min(MAX_YEARS_BACK, years_back))


def target_dates(day: date, years_back: int) -> list[date]:
    """
    Same month/day in each of the previous ``years_back`` years.

    Feb 29 is skipped (not attempted, not a failure) for non-leap years.

    Args:
        day: Requested date; its year is excluded.
        years_back: Number of prior years, clamped to 1-50.

    Returns:
        Dates ordered from most recent to oldest.
    """
    dates: list[date] = []
    for offset in range(1, clamp_years_back(years_back) + 1):
        year = day.year - offset
        if year < MINYEAR:
            break
        if day.month == 2 and day.day == 29 and not calendar.isleap(year):
            continue
        dates.append(date(year, day.month, day.day))
    return dates


def _outcome(future: Future[YearlyDataPoint], target: date) -> YearlyDataPoint | None:
    """Unwrap one lookup, turning any failure into None."""
    try:
        return future.result()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Historical lookup for %s failed: %s", target.isoformat(), exc)
        return None


def collect_yearly_points(
    location: Location,
    dates: list[date],
    lookup: Callable[[Location, date], YearlyDataPoint],
    *,
    timeout: float | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[YearlyDataPoint | None]:
    """
    Run ``lookup`` for every date concurrently (scatter/gather).

    Each lookup is isolated: an exception in one does not cancel the others.
    When ``timeout`` expires, unfinished lookups are abandoned (cancelled if
    not started yet) and recorded as failures. Nothing is retried.

    Returns:
        One entry per input date, in input order: the point, or None on failure.
    """
    results: list[YearlyDataPoint | None] = [None] * len(dates)
    if not dates:
        return results

    executor = ThreadPoolExecutor(
        max_workers=min(max_workers, len(dates)), thread_name_prefix="historical"
    )
    futures = {executor.submit(lookup, location, d): i for i, d in enumerate(dates)}
    try:
        for future in as_completed(futures, timeout=timeout):
            index = futures[future]
            results[index] = _outcome(future, dates[index])
    except TimeoutError:
        pending = sum(1 for f in futures if not f.done())
        logger.warning("Historical lookups timed out after %ss; %d abandoned", timeout, pending)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
    return results


def summarize_points(
    day: date, points: list[YearlyDataPoint | None], location: Location
) -> HistoricalSummary:
    """Build a summary from the successful points.

    Raises:
        NotFoundError: If every lookup failed.
    """
    successes = [p for p in points if p is not None]
    if not successes:
        msg = f"No historical weather data available for {day:%m-%d} at location {location}"
        raise NotFoundError(msg, code="Weather.HistoricalDataNotFound")
    return HistoricalSummary(date=day, yearly_data=successes)


def get_historical_summary(
    location: Location,
    day: date,
    years_back: int,
    lookup: Callable[[Location, date], YearlyDataPoint],
    *,
    timeout: float | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> HistoricalSummary:
    """
    Summarize weather on ``day``'s month/day over the previous years.

    Args:
        location: Where to look.
        day: Requested date; history covers the same month/day in prior years.
        years_back: How many prior years to query (clamped to 1-50).
        lookup: Per-year point lookup; any exception counts as a missing year.
        timeout: Overall deadline in seconds for all lookups.
        max_workers: Upper bound on concurrent lookups.

    Returns:
        Summary over the years that returned data (in no particular order).

    Raises:
        NotFoundError: If no year returned data.
    """
    dates = target_dates(day, years_back)
    points = collect_yearly_points(
        location, dates, lookup, timeout=timeout, max_workers=max_workers
    )
    succeeded = sum(1 for p in points if p is not None)
    logger.debug("Historical %s: %d of %d years returned data", day, succeeded, len(dates))
    return summarize_points(day, points, location)
