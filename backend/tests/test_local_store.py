from datetime import datetime
from decimal import Decimal

from factories import make_recipe, make_user

from mercado.storage.models import MenuPlan


def _plan(user_id="u1", **extra):
    fields = dict(
        user_id=user_id,
        name="Weekly menu - 6/1",
        start_date=datetime(2025, 1, 6),
        end_date=datetime(2025, 1, 12),
        days=[[1, 2, 3]] * 7,
        total_cost=Decimal("0.1") + Decimal("0.2"),
        average_daily_cost=Decimal("0.3") / Decimal(7),
    )
    fields.update(extra)
    return MenuPlan(**fields)


def test_decimals_round_trip_exactly(local):
    local.put_recipes([make_recipe(1, "Lunch", cost="2.35")])
    plan = local.put_plan(_plan())
    assert local.get_recipe(1).estimated_cost == Decimal("2.35")
    stored = local.get_plan(plan.id)
    assert stored.total_cost == Decimal("0.3")
    assert stored.average_daily_cost == Decimal("0.3") / Decimal(7)


def test_put_recipes_overwrites_by_id(local):
    local.put_recipes([make_recipe(1, "Lunch", name="Old"), make_recipe(2, "Dinner")])
    local.put_recipes([make_recipe(1, "Lunch", name="New")])
    assert local.recipe_count() == 2
    assert local.get_recipe(1).name == "New"
    assert local.next_recipe_id() == 3


def test_next_recipe_id_on_empty_store(local):
    assert local.next_recipe_id() == 1


def test_increment_usage_counts_each_id_once(local):
    local.put_recipes([make_recipe(1, "Lunch"), make_recipe(2, "Dinner")])
    assert local.increment_usage([1, 1, 2, 1]) == 2
    assert local.get_recipe(1).times_used == 1
    assert local.get_recipe(2).times_used == 1
    assert local.increment_usage([]) == 0


def test_popular_recipes_order(local):
    local.put_recipes(
        [
            make_recipe(1, "Lunch", rating=4.0, times_used=9),
            make_recipe(2, "Lunch", rating=4.8, times_used=1),
            make_recipe(3, "Lunch", rating=4.0, times_used=12),
            make_recipe(4, "Lunch", rating=4.0, times_used=12),
        ]
    )
    assert [r.id for r in local.popular_recipes(limit=3)] == [2, 3, 4]


def test_put_user_overwrites(local):
    local.put_user(make_user("u1", name="Ana"))
    local.put_user(make_user("u1", name="Ana María"))
    assert local.get_user("u1").name == "Ana María"


def test_plan_lifecycle(local):
    first = local.put_plan(_plan())
    second = local.put_plan(_plan())
    local.put_plan(_plan("u2"))

    assert local.deactivate_all_plans("u1") == 2
    assert local.get_active_plan("u1") is None
    assert local.get_active_plan("u2") is not None

    second.is_favorite = True
    local.put_plan(second)
    assert [p.id for p in local.list_favorite_plans("u1")] == [second.id]

    assert local.delete_plan(first.id) is True
    assert local.delete_plan(first.id) is False
    assert [p.id for p in local.list_plans("u1")] == [second.id]
