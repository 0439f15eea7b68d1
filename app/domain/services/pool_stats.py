from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from math import ceil

from app.domain.entities.pool_stats import PoolSnapshot, PoolsEntries, PoolsStats, StatsWindows
from app.domain.services.pool_ratio import STATS_CONTEXT, calculate_ratio

AVG_DAYS = 7
DAYS_IN_YEAR = 365

PENDING_PLACEHOLDER = "calculating.."
EARN_MULTIPLIER_PLACEHOLDER = "0"

_SIX_PLACES = Decimal("0.000001")
_HUNDRED = Decimal("100")
_ONE = Decimal("1")


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def stats_windows(now: datetime) -> StatsWindows:
    now_date = as_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)
    return StatsWindows(
        now_date=now_date,
        weekly_start=now_date - timedelta(days=AVG_DAYS),
        weekly_end=now_date - timedelta(days=AVG_DAYS - 1),
        yesterday_start=now_date - timedelta(days=1),
        yesterday_end=now_date,
    )


def days_elapsed_since_indexed(
    first_entry: PoolSnapshot | None,
    last_entry: PoolSnapshot | None,
) -> int:
    if first_entry is None or last_entry is None:
        return 0
    delta = as_utc(last_entry.block_time) - as_utc(first_entry.block_time)
    return int(ceil(delta.total_seconds() / 86400))


def _usable(value: Decimal | None) -> bool:
    return value is not None and value.is_finite()


def _format_percent(value: Decimal | None) -> str:
    if not _usable(value):
        return PENDING_PLACEHOLDER
    # Quantizing needs room for every integer digit plus six decimals.
    context = STATS_CONTEXT.copy()
    context.prec = max(context.prec, value.adjusted() + 8)
    rounded = value.quantize(_SIX_PLACES, rounding=ROUND_HALF_UP, context=context)
    if not rounded.is_finite():
        return PENDING_PLACEHOLDER
    return format(rounded, "f")


def _format_exact(value: Decimal | None) -> str:
    if not _usable(value):
        return EARN_MULTIPLIER_PLACEHOLDER
    return format(value.normalize(STATS_CONTEXT), "f")


def compute_pool_stats(address: str, entries: PoolsEntries) -> PoolsStats:
    """Derive APY/APR figures for one pool from its reference snapshots.

    Missing snapshots and zero-share snapshots never raise; every metric that
    depends on them resolves to its placeholder instead.
    """
    last_ratio = calculate_ratio(entries.last_entry)
    weekly_ratio = calculate_ratio(entries.weekly_entry)
    yesterday_ratio = calculate_ratio(entries.yesterday_entry)
    days_elapsed = days_elapsed_since_indexed(entries.first_entry, entries.last_entry)

    base_apy = None
    avg_apy = None
    daily_apr = None
    weekly_apr = None
    earn_multiplier = None

    with localcontext(STATS_CONTEXT):
        if _usable(last_ratio) and days_elapsed > 0:
            exponent = Decimal(DAYS_IN_YEAR) / Decimal(days_elapsed)
            base_apy = (last_ratio**exponent - _ONE) * _HUNDRED

        if _usable(last_ratio) and _usable(weekly_ratio):
            weekly_growth = last_ratio / weekly_ratio
            if weekly_growth.is_finite():
                periods_per_year = Decimal(DAYS_IN_YEAR) / Decimal(AVG_DAYS)
                avg_apy = (weekly_growth**periods_per_year - _ONE) * _HUNDRED
                weekly_apr = (weekly_growth - _ONE) * periods_per_year * _HUNDRED

        if _usable(last_ratio) and _usable(yesterday_ratio):
            daily_growth = last_ratio / yesterday_ratio
            if daily_growth.is_finite():
                daily_apr = (daily_growth - _ONE) * Decimal(DAYS_IN_YEAR) * _HUNDRED
            earn_multiplier = last_ratio - yesterday_ratio

    return PoolsStats(
        address=address,
        base_apy=_format_percent(base_apy),
        avg_apy=_format_percent(avg_apy),
        daily_based_apr=_format_percent(daily_apr),
        weekly_based_apr=_format_percent(weekly_apr),
        earn_multiplier=_format_exact(earn_multiplier),
    )
