from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
import unittest

from app.domain.entities.pool_stats import PoolSnapshot
from app.domain.services.pool_ratio import calculate_ratio


def _snapshot(*, total_shares: str, current_usd_balance: str) -> PoolSnapshot:
    return PoolSnapshot(
        address="0xpool",
        block=100,
        block_time=datetime(2026, 3, 1, tzinfo=timezone.utc),
        total_shares=total_shares,
        current_usd_balance=current_usd_balance,
    )


class CalculateRatioTests(unittest.TestCase):
    def test_returns_none_without_snapshot(self):
        self.assertIsNone(calculate_ratio(None))

    def test_scales_down_fixed_point_amounts(self):
        ratio = calculate_ratio(_snapshot(total_shares="1000000", current_usd_balance="1100000"))
        self.assertEqual(ratio, Decimal("1.1"))

    def test_keeps_exact_decimal_result(self):
        ratio = calculate_ratio(_snapshot(total_shares="4000000", current_usd_balance="1000000"))
        self.assertEqual(ratio, Decimal("0.25"))
        self.assertEqual(str(ratio), "0.25")

    def test_zero_shares_and_zero_balance_is_nan(self):
        ratio = calculate_ratio(_snapshot(total_shares="0", current_usd_balance="0"))
        self.assertTrue(ratio.is_nan())

    def test_zero_shares_does_not_raise(self):
        ratio = calculate_ratio(_snapshot(total_shares="0", current_usd_balance="1000000"))
        self.assertFalse(ratio.is_finite())


if __name__ == "__main__":
    unittest.main()
