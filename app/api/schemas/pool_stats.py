from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PoolStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str
    base_apy: str = Field(..., alias="baseApy", description="APY since the first snapshot.")
    avg_apy: str = Field(..., alias="avgApy", description="APY annualized from the last 7 days.")
    daily_based_apr: str = Field(
        ..., alias="dailyBasedApr", description="APR extrapolated from the last day."
    )
    weekly_based_apr: str = Field(
        ..., alias="weeklyBasedApr", description="APR extrapolated from the last 7 days."
    )
    earn_multiplier: str = Field(
        ..., alias="earnMultiplier", description="Ratio change since yesterday."
    )
