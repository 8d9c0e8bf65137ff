"""
Remote document <-> local model conversion.

Documents use the field names of the shared remote collections (camelCase),
timestamps as epoch milliseconds and decimals as strings. Decoding accepts
older shapes too: older documents carry tag lists as comma-separated strings,
ingredient/instruction lists as semicolon-separated strings and Spanish
category/difficulty/goal labels.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from mercado.errors import DecodeError
from mercado.storage.models import (
    DAY_NAMES,
    Category,
    Difficulty,
    MenuPlan,
    NutritionalGoal,
    Recipe,
    User,
)

USERS_COLLECTION = "users"
RECIPES_COLLECTION = "recipes"
MENU_PLANS_COLLECTION = "menu_plans"

_CATEGORY_ALIASES = {
    "desayuno": Category.BREAKFAST,
    "almuerzo": Category.LUNCH,
    "cena": Category.DINNER,
    "snack": Category.SNACK,
    "postre": Category.DESSERT,
}
_DIFFICULTY_ALIASES = {
    "fácil": Difficulty.EASY,
    "facil": Difficulty.EASY,
    "media": Difficulty.MEDIUM,
    "difícil": Difficulty.HARD,
    "dificil": Difficulty.HARD,
}
_GOAL_ALIASES = {
    "perder_peso": NutritionalGoal.LOSE,
    "mantener": NutritionalGoal.MAINTAIN,
    "ganar_musculo": NutritionalGoal.GAIN,
}


def plan_doc_key(user_id: str, plan_id: int) -> str:
    return f"{user_id}_{plan_id}"


def _millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def _from_millis(value: Any) -> datetime:
    if value is None:
        return datetime.utcnow()
    millis = float(value)
    try:
        stamp = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"timestamp out of range: {value!r}") from e
    return stamp.replace(tzinfo=None)


def _split(value: Any, sep: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(sep)
    elif isinstance(value, (list, tuple)):
        parts = [str(v) for v in value]
    else:
        raise TypeError(f"expected list or string, got {type(value).__name__}")
    return [p.strip() for p in parts if p.strip()]


def _decimal(value: Any, default: str = "0") -> Decimal:
    if value is None:
        return Decimal(default)
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return amount


def _int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    number = Decimal(str(value))
    return int(number)


def parse_category(value: Any) -> Category:
    text = str(value or "").strip()
    try:
        return Category(text)
    except ValueError:
        pass
    alias = _CATEGORY_ALIASES.get(text.lower())
    if alias is None:
        raise ValueError(f"unknown category {text!r}")
    return alias


def parse_difficulty(value: Any) -> Difficulty:
    text = str(value or "").strip()
    if not text:
        return Difficulty.EASY
    try:
        return Difficulty(text)
    except ValueError:
        pass
    return _DIFFICULTY_ALIASES.get(text.lower(), Difficulty.MEDIUM)


def parse_goal(value: Any) -> NutritionalGoal:
    text = str(value or "").strip().lower()
    if not text:
        return NutritionalGoal.MAINTAIN
    try:
        return NutritionalGoal(text)
    except ValueError:
        pass
    alias = _GOAL_ALIASES.get(text)
    if alias is None:
        raise ValueError(f"unknown nutritional goal {text!r}")
    return alias


# recipes


def recipe_to_doc(recipe: Recipe) -> dict:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "description": recipe.description,
        "category": recipe.category,
        "imageUrl": recipe.image_url,
        "calories": recipe.calories,
        "protein": str(recipe.protein),
        "carbohydrates": str(recipe.carbohydrates),
        "fats": str(recipe.fats),
        "fiber": str(recipe.fiber),
        "sodium": str(recipe.sodium),
        "sugar": str(recipe.sugar),
        "suitableFor": list(recipe.suitable_for),
        "allergens": list(recipe.allergens),
        "ingredients": list(recipe.ingredients),
        "instructions": list(recipe.instructions),
        "preparationTime": recipe.preparation_time,
        "difficulty": recipe.difficulty,
        "servings": recipe.servings,
        "estimatedCost": str(recipe.estimated_cost),
        "rating": recipe.rating,
        "timesUsed": recipe.times_used,
        "createdAt": _millis(recipe.created_at),
    }


def doc_to_recipe(doc: Mapping[str, Any], doc_id: Any = None) -> Recipe:
    """Decode one recipe document. Raises DecodeError; never a partial Recipe."""
    ref = doc_id if doc_id is not None else doc.get("id") if isinstance(doc, Mapping) else None
    if not isinstance(doc, Mapping):
        raise DecodeError(ref, "document is not an object")
    try:
        raw_id = doc.get("id", doc_id)
        if raw_id is None:
            raise ValueError("missing id")
        recipe_id = _int(raw_id)
        if recipe_id <= 0:
            raise ValueError(f"invalid id {recipe_id}")
        name = str(doc.get("name") or "").strip()
        if not name:
            raise ValueError("blank name")
        servings = _int(doc.get("servings"), default=1)
        if servings < 1:
            raise ValueError(f"servings must be >= 1, got {servings}")
        rating = float(doc.get("rating") or 0.0)
        if not 0.0 <= rating <= 5.0:
            raise ValueError(f"rating out of range: {rating}")
        return Recipe(
            id=recipe_id,
            name=name,
            description=str(doc.get("description") or ""),
            category=parse_category(doc.get("category")).value,
            image_url=str(doc.get("imageUrl") or ""),
            calories=_int(doc.get("calories")),
            protein=_decimal(doc.get("protein")),
            carbohydrates=_decimal(doc.get("carbohydrates")),
            fats=_decimal(doc.get("fats")),
            fiber=_decimal(doc.get("fiber")),
            sodium=_decimal(doc.get("sodium")),
            sugar=_decimal(doc.get("sugar")),
            suitable_for=_split(doc.get("suitableFor"), ","),
            allergens=_split(doc.get("allergens"), ","),
            ingredients=_split(doc.get("ingredients"), ";"),
            instructions=_split(doc.get("instructions"), ";"),
            preparation_time=_int(doc.get("preparationTime")),
            difficulty=parse_difficulty(doc.get("difficulty")).value,
            servings=servings,
            estimated_cost=_decimal(doc.get("estimatedCost")),
            rating=rating,
            times_used=_int(doc.get("timesUsed")),
            created_at=_from_millis(doc.get("createdAt")),
        )
    except (ValueError, TypeError, InvalidOperation, OverflowError) as e:
        raise DecodeError(ref, str(e)) from e


# users


def user_to_doc(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "age": user.age,
        "gender": user.gender,
        "weight": user.weight,
        "height": user.height,
        "bmi": user.bmi,
        "medicalConditions": list(user.medical_conditions),
        "allergies": list(user.allergies),
        "nutritionalGoal": user.nutritional_goal,
        "monthlyBudget": str(user.monthly_budget),
        "createdAt": _millis(user.created_at),
        "updatedAt": _millis(user.updated_at),
    }


def doc_to_user(doc: Mapping[str, Any], user_id: str) -> User:
    if not isinstance(doc, Mapping):
        raise DecodeError(user_id, "document is not an object")
    try:
        return User(
            id=user_id,
            name=str(doc.get("name") or ""),
            email=str(doc.get("email") or ""),
            age=_int(doc.get("age")),
            gender=str(doc.get("gender") or ""),
            weight=float(doc.get("weight") or 0.0),
            height=float(doc.get("height") or 0.0),
            bmi=float(doc.get("bmi") or 0.0),
            medical_conditions=_split(doc.get("medicalConditions"), ","),
            allergies=_split(doc.get("allergies"), ","),
            nutritional_goal=parse_goal(doc.get("nutritionalGoal")).value,
            monthly_budget=_decimal(doc.get("monthlyBudget")),
            created_at=_from_millis(doc.get("createdAt")),
            updated_at=_from_millis(doc.get("updatedAt")),
        )
    except (ValueError, TypeError, InvalidOperation, OverflowError) as e:
        raise DecodeError(user_id, str(e)) from e


# menu plans (push-only)


def plan_to_doc(plan: MenuPlan) -> dict:
    doc = {
        "id": plan.id,
        "userId": plan.user_id,
        "name": plan.name,
        "startDate": _millis(plan.start_date),
        "endDate": _millis(plan.end_date),
        "totalCalories": plan.total_calories,
        "totalCost": str(plan.total_cost),
        "averageDailyCalories": plan.average_daily_calories,
        "averageDailyCost": str(plan.average_daily_cost),
        "isActive": plan.is_active,
        "isFavorite": plan.is_favorite,
        "createdAt": _millis(plan.created_at),
    }
    for day, day_name in enumerate(DAY_NAMES):
        doc[day_name.lower()] = plan.recipes_for_day(day)
    return doc
