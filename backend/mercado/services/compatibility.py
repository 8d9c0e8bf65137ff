"""
Recipe compatibility for a user profile.

A recipe is compatible when it is suitable for at least one of the user's
medical conditions and shares no allergen tag with the user's allergies.
A user with no declared conditions accepts every recipe that passes the
allergen check. Tags compare by exact string after trimming.
"""

from typing import Iterable, Sequence

from mercado.storage.models import Recipe, User


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Trim, drop blanks and duplicates, keep first-seen order."""
    out: dict[str, None] = {}
    for tag in tags or ():
        text = str(tag).strip()
        if text:
            out.setdefault(text, None)
    return list(out)


def is_compatible(recipe: Recipe, conditions: Iterable[str], allergies: Iterable[str]) -> bool:
    allergy_set = set(normalize_tags(allergies))
    if allergy_set.intersection(normalize_tags(recipe.allergens)):
        return False
    condition_set = set(normalize_tags(conditions))
    if not condition_set:
        return True
    return bool(condition_set.intersection(normalize_tags(recipe.suitable_for)))


def filter_compatible(
    recipes: Sequence[Recipe], conditions: Iterable[str], allergies: Iterable[str]
) -> list[Recipe]:
    conditions = normalize_tags(conditions)
    allergies = normalize_tags(allergies)
    return [r for r in recipes if is_compatible(r, conditions, allergies)]


def filter_for_user(recipes: Sequence[Recipe], user: User) -> list[Recipe]:
    return filter_compatible(recipes, user.medical_conditions, user.allergies)
