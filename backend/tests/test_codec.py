from datetime import datetime
from decimal import Decimal

import pytest
from factories import make_recipe

from mercado.errors import DecodeError
from mercado.services.remote.codec import (
    doc_to_recipe,
    doc_to_user,
    parse_category,
    parse_goal,
    plan_doc_key,
    plan_to_doc,
    recipe_to_doc,
)
from mercado.storage.models import Category, MenuPlan


def test_plan_doc_key():
    assert plan_doc_key("abc", 12) == "abc_12"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Breakfast", Category.BREAKFAST),
        ("desayuno", Category.BREAKFAST),
        ("Almuerzo", Category.LUNCH),
        (" cena ", Category.DINNER),
        ("postre", Category.DESSERT),
    ],
)
def test_parse_category_accepts_aliases(raw, expected):
    assert parse_category(raw) is expected


def test_parse_category_rejects_unknown():
    with pytest.raises(ValueError):
        parse_category("Brunch")


def test_parse_goal_defaults_and_aliases():
    assert parse_goal(None).value == "maintain"
    assert parse_goal("perder_peso").value == "lose"
    with pytest.raises(ValueError):
        parse_goal("bulk")


def test_recipe_document_keeps_exact_decimals():
    recipe = make_recipe(3, "Breakfast", cost="2.35", protein=Decimal("12.5"))
    doc = recipe_to_doc(recipe)
    assert doc["estimatedCost"] == "2.35"
    assert doc["protein"] == "12.5"
    decoded = doc_to_recipe(doc)
    assert decoded.estimated_cost == Decimal("2.35")
    assert decoded.protein == Decimal("12.5")


def test_doc_to_recipe_uses_document_id_when_field_missing():
    doc = recipe_to_doc(make_recipe(4, "Dinner"))
    del doc["id"]
    assert doc_to_recipe(doc, "4").id == 4


def test_doc_to_recipe_accepts_float_like_ids():
    doc = recipe_to_doc(make_recipe(4, "Dinner"))
    doc["id"] = "4.0"
    assert doc_to_recipe(doc).id == 4


@pytest.mark.parametrize(
    "change,reason",
    [
        ({"id": 0}, "invalid id"),
        ({"name": ""}, "blank name"),
        ({"servings": 0}, "servings"),
        ({"rating": 5.5}, "rating"),
        ({"category": "Brunch"}, "category"),
        ({"calories": "lots"}, ""),
        ({"allergens": 12}, "expected list"),
    ],
)
def test_doc_to_recipe_rejects_bad_documents(change, reason):
    doc = recipe_to_doc(make_recipe(9, "Lunch"))
    doc.update(change)
    with pytest.raises(DecodeError) as exc_info:
        doc_to_recipe(doc, "9")
    assert exc_info.value.doc_id == "9"
    assert reason in exc_info.value.reason


def test_doc_to_recipe_rejects_non_objects():
    with pytest.raises(DecodeError):
        doc_to_recipe(["not", "a", "doc"], "x")


def test_doc_to_user_splits_legacy_strings():
    user = doc_to_user(
        {"name": "Ana", "medicalConditions": "diabetes, hipertension", "allergies": "", "monthlyBudget": 300},
        "u1",
    )
    assert user.id == "u1"
    assert user.medical_conditions == ["diabetes", "hipertension"]
    assert user.allergies == []
    assert user.monthly_budget == Decimal("300")


def test_plan_document_has_one_list_per_day():
    plan = MenuPlan(
        id=5,
        user_id="u1",
        name="Weekly menu - 6/1",
        start_date=datetime(2025, 1, 6),
        end_date=datetime(2025, 1, 12),
        days=[[1, 2, 4]] * 7,
        total_calories=700,
        total_cost=Decimal("14.70"),
        average_daily_calories=100,
        average_daily_cost=Decimal("2.1"),
        is_active=True,
    )
    doc = plan_to_doc(plan)
    assert doc["id"] == 5
    assert doc["userId"] == "u1"
    assert doc["monday"] == [1, 2, 4]
    assert doc["sunday"] == [1, 2, 4]
    assert doc["totalCost"] == "14.70"
    assert doc["isActive"] is True
    assert doc["startDate"] == 1736121600000


@pytest.mark.parametrize("field", ["estimatedCost", "protein", "sugar"])
@pytest.mark.parametrize("value", ["NaN", "sNaN", "Infinity", "-Infinity"])
def test_doc_to_recipe_rejects_non_finite_amounts(field, value):
    doc = recipe_to_doc(make_recipe(9, "Lunch"))
    doc[field] = value
    with pytest.raises(DecodeError) as exc_info:
        doc_to_recipe(doc, "9")
    assert "finite" in exc_info.value.reason


def test_doc_to_recipe_rejects_out_of_range_timestamp():
    doc = recipe_to_doc(make_recipe(9, "Lunch"))
    doc["createdAt"] = -1e20
    with pytest.raises(DecodeError) as exc_info:
        doc_to_recipe(doc, "9")
    assert "timestamp" in exc_info.value.reason


def test_doc_to_user_rejects_non_finite_budget():
    with pytest.raises(DecodeError):
        doc_to_user({"name": "Ana", "monthlyBudget": "Infinity"}, "u1")


def test_doc_to_user_ignores_embedded_id():
    assert doc_to_user({"id": "other", "name": "Ana"}, "u1").id == "u1"
