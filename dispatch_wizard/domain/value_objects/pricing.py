"""
Pricing value objects.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Optional, Union

CENTS = Decimal("0.01")


def to_money(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """Normalize a numeric value to a two-decimal amount."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class PricingMethod(str, Enum):
    """How a catalog service is priced."""

    PER_VISIT = "per_visit"
    PER_HOUR = "per_hour"
    FLAT_RATE = "flat_rate"

    def scales_with_visits(self) -> bool:
        """Check if the total grows with the number of visits."""
        return self != self.FLAT_RATE


class OverrideMethod(str, Enum):
    """How a manual price override is applied."""

    PER_VISIT = "per_visit"
    FLAT_FOR_JOB = "flat_for_job"


@dataclass(frozen=True)
class PriceOverride:
    """Manual price replacing the computed service cost."""

    method: OverrideMethod
    amount: Decimal

    def __post_init__(self):
        """Validate override amount."""
        if self.amount is None:
            raise ValueError("Override amount is required")
        amount = to_money(self.amount)
        if amount < 0:
            raise ValueError("Override amount cannot be negative")
        object.__setattr__(self, "amount", amount)

    def apply(self, visit_count: int) -> Decimal:
        """Resolve the override to a total for the given visit count."""
        if self.method == OverrideMethod.PER_VISIT:
            return to_money(self.amount * visit_count)
        return self.amount

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"method": self.method.value, "amount": str(self.amount)}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> Optional["PriceOverride"]:
        """Build from dictionary, returning None for empty payloads."""
        if not data:
            return None
        return cls(method=OverrideMethod(data["method"]), amount=Decimal(str(data["amount"])))
