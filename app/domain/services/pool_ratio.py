from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal, localcontext

from app.domain.entities.pool_stats import PoolSnapshot

USD_SCALE = Decimal("1000000")
SHARES_SCALE = Decimal("1000000")

# No traps: x/0 and 0/0 yield Infinity/NaN instead of raising.
STATS_CONTEXT = Context(prec=40, rounding=ROUND_HALF_UP, traps=[])


def calculate_ratio(snapshot: PoolSnapshot | None) -> Decimal | None:
    """Return the USD balance per share of a snapshot.

    Amounts are stored as fixed-point integers scaled by 1e6. A snapshot with
    zero shares gives a non-finite result, callers must check ``is_finite()``.
    """
    if snapshot is None:
        return None

    with localcontext(STATS_CONTEXT):
        usd_balance = Decimal(str(snapshot.current_usd_balance)) / USD_SCALE
        total_shares = Decimal(str(snapshot.total_shares)) / SHARES_SCALE
        return usd_balance / total_shares
