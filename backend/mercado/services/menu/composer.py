"""Weekly menu composition. Pure: no store access, randomness is injected."""

import random
from datetime import datetime, timedelta
from typing import Optional, Sequence

from mercado.errors import InsufficientCategory
from mercado.logging import get_logger
from mercado.services.menu.aggregate import DAYS_PER_WEEK, WeeklyTotals, plan_name
from mercado.storage.models import MEAL_SLOTS, Category, MenuPlan, Recipe

logger = get_logger(__name__)


def partition_by_category(recipes: Sequence[Recipe]) -> dict[Category, list[Recipe]]:
    """Breakfast/lunch/dinner pools. Category match is exact and case-sensitive."""
    pools: dict[Category, list[Recipe]] = {slot: [] for slot in MEAL_SLOTS}
    for recipe in recipes:
        for slot in MEAL_SLOTS:
            if recipe.category == slot.value:
                pools[slot].append(recipe)
                break
    return pools


def compose_week(
    user_id: str,
    recipes: Sequence[Recipe],
    rng: random.Random,
    now: Optional[datetime] = None,
) -> MenuPlan:
    """
    Build an unsaved, active plan from already-compatible recipes.
    Each day draws one recipe per pool uniformly, with replacement.
    Raises InsufficientCategory for the first empty pool.
    """
    pools = partition_by_category(recipes)
    for slot in MEAL_SLOTS:
        if not pools[slot]:
            raise InsufficientCategory(slot.value)

    totals = WeeklyTotals()
    days: list[list[int]] = []
    for _ in range(DAYS_PER_WEEK):
        day: list[int] = []
        for slot in MEAL_SLOTS:
            choice = rng.choice(pools[slot])
            day.append(choice.id)
            totals.add(choice)
        days.append(day)

    start = now or datetime.utcnow()
    logger.info(
        "menu.composed user_id=%s pools=%s total_calories=%s total_cost=%s",
        user_id,
        {slot.value: len(pools[slot]) for slot in MEAL_SLOTS},
        totals.total_calories,
        totals.total_cost,
    )
    return MenuPlan(
        user_id=user_id,
        name=plan_name(start),
        start_date=start,
        end_date=start + timedelta(days=DAYS_PER_WEEK - 1),
        days=days,
        total_calories=totals.total_calories,
        total_cost=totals.total_cost,
        average_daily_calories=totals.average_daily_calories,
        average_daily_cost=totals.average_daily_cost,
        is_active=True,
        is_favorite=False,
        created_at=start,
    )
