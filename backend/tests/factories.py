from decimal import Decimal

from mercado.storage.models import Recipe, User


def make_recipe(recipe_id, category, *, suitable_for=("diabetes",), allergens=(), calories=100, cost="1.00", **extra):
    return Recipe(
        id=recipe_id,
        name=extra.pop("name", f"Recipe {recipe_id}"),
        category=category,
        calories=calories,
        estimated_cost=Decimal(cost),
        suitable_for=list(suitable_for),
        allergens=list(allergens),
        **extra,
    )


def make_user(user_id="u1", *, conditions=("diabetes",), allergies=(), **extra):
    fields = dict(
        id=user_id,
        name="Ana",
        email="ana@example.com",
        age=30,
        weight=70.0,
        height=170.0,
        bmi=70.0 / (1.7 * 1.7),
        medical_conditions=list(conditions),
        allergies=list(allergies),
        monthly_budget=Decimal("400"),
    )
    fields.update(extra)
    return User(**fields)
