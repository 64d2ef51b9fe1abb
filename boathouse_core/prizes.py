"""Prize pool distribution in exact decimal arithmetic.

The platform fee is taken from the gross pool and the podium shares split the
remaining net pool, so first + second + third + platform_fee == prize_pool
exactly. Amounts are not rounded to pence here; that would break the
conservation property and is left to the ledger collaborator.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from .config import EngineConfig, PrizeTiers, resolve_config

_MIN_PRECISION = 28

ZERO = Decimal("0")


def _width(value: Decimal) -> int:
    """Digits needed to hold `value` down to its last decimal place."""
    sign, digits, exponent = value.as_tuple()
    return len(digits) + abs(exponent)


def _precision_for_split(pool: Decimal, tiers: PrizeTiers) -> int:
    # A product of decimals is exact when the context holds the combined width.
    tier_width = max(_width(t) for t in (tiers.first, tiers.second, tiers.third))
    fee_width = max(_width(tiers.platform_fee), _width(tiers.net_share))
    return max(_MIN_PRECISION, _width(pool) + fee_width + tier_width + 2)


def exact_sum(*values: Decimal) -> Decimal:
    """Sum `values` in a context wide enough that no digit is rounded away."""
    nonzero = [v for v in values if v]
    if not nonzero:
        return ZERO
    top = max(v.adjusted() for v in nonzero)
    bottom = min(v.as_tuple().exponent for v in nonzero)
    with localcontext() as ctx:
        ctx.prec = max(_MIN_PRECISION, top - bottom + 2)
        return sum(values, ZERO)


@dataclass(frozen=True)
class PrizeDistribution:
    first: Decimal
    second: Decimal
    third: Decimal
    platform_fee: Decimal

    @property
    def net_pool(self) -> Decimal:
        return exact_sum(self.first, self.second, self.third)

    @property
    def total(self) -> Decimal:
        return exact_sum(self.first, self.second, self.third, self.platform_fee)

    def prize_for_rank(self, rank: int) -> Decimal:
        if rank == 1:
            return self.first
        if rank == 2:
            return self.second
        if rank == 3:
            return self.third
        return ZERO


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("prize pool cannot be a bool")
    if isinstance(value, float):
        # str() keeps the short repr (0.1 -> '0.1') instead of the binary expansion.
        return Decimal(str(value))
    return Decimal(value)


def calculate_prizes(
    prize_pool: Decimal | int | float | str,
    config: EngineConfig | None = None,
) -> PrizeDistribution:
    """
    Split `prize_pool` into podium tiers and the platform fee.

    Raises:
        ValueError: If the pool is negative or not a finite number
    """
    tiers = resolve_config(config).prize_tiers
    pool = to_decimal(prize_pool)
    if not pool.is_finite():
        raise ValueError(f"prize pool must be finite, got {pool}")
    if pool < 0:
        raise ValueError(f"prize pool cannot be negative, got {pool}")

    with localcontext() as ctx:
        ctx.prec = _precision_for_split(pool, tiers)
        net_pool = pool * tiers.net_share
        return PrizeDistribution(
            first=net_pool * tiers.first,
            second=net_pool * tiers.second,
            third=net_pool * tiers.third,
            platform_fee=pool * tiers.platform_fee,
        )


__all__ = ["PrizeDistribution", "ZERO", "calculate_prizes", "exact_sum", "to_decimal"]
