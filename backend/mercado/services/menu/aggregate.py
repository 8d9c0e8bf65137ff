"""
Weekly nutrition and cost totals.

Sums are exact. The two daily averages round differently:
calories truncate to an integer, cost is an exact Decimal quotient.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from mercado.storage.models import Recipe

DAYS_PER_WEEK = 7


def truncating_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def plan_name(start: datetime) -> str:
    return f"Weekly menu - {start.day}/{start.month}"


@dataclass
class WeeklyTotals:
    total_calories: int = 0
    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))

    def add(self, recipe: Recipe) -> None:
        # Stated per-recipe values, no serving scaling
        self.total_calories += int(recipe.calories)
        self.total_cost += Decimal(str(recipe.estimated_cost))

    @property
    def average_daily_calories(self) -> int:
        return truncating_div(self.total_calories, DAYS_PER_WEEK)

    @property
    def average_daily_cost(self) -> Decimal:
        return self.total_cost / Decimal(DAYS_PER_WEEK)
