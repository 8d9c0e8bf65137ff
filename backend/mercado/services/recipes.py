"""Catalog browsing helpers and single-recipe additions."""

from typing import Iterable, Optional

from mercado.errors import ValidationError
from mercado.logging import get_logger
from mercado.services.compatibility import normalize_tags
from mercado.services.remote.codec import parse_category
from mercado.services.sync.reconciler import SyncReconciler, SyncResult
from mercado.storage.local_store import LocalStore
from mercado.storage.models import Recipe

logger = get_logger(__name__)


def search(recipes: Iterable[Recipe], query: str) -> list[Recipe]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(recipes)
    out = []
    for recipe in recipes:
        fields = [recipe.name, recipe.description, *recipe.ingredients]
        if any(needle in (text or "").lower() for text in fields):
            out.append(recipe)
    return out


def by_category(recipes: Iterable[Recipe], category: str) -> list[Recipe]:
    return [r for r in recipes if r.category == category]


def by_condition(recipes: Iterable[Recipe], condition: str) -> list[Recipe]:
    tag = condition.strip()
    return [r for r in recipes if tag in normalize_tags(r.suitable_for)]


class RecipeCatalog:
    def __init__(self, local: LocalStore, sync: SyncReconciler) -> None:
        self._local = local
        self._sync = sync

    def browse(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        condition: Optional[str] = None,
    ) -> list[Recipe]:
        recipes = search(self._local.get_all_recipes(), query or "")
        if category:
            recipes = by_category(recipes, category)
        if condition:
            recipes = by_condition(recipes, condition)
        return recipes

    def popular(self, limit: int = 10) -> list[Recipe]:
        return self._local.popular_recipes(limit)

    async def add(self, recipe: Recipe) -> tuple[Recipe, SyncResult]:
        """Local insert first (assigns the id), then best-effort remote write."""
        if not (recipe.name or "").strip():
            raise ValidationError("name", "name is required")
        try:
            recipe.category = parse_category(recipe.category).value
        except ValueError as e:
            raise ValidationError("category", "unknown category") from e
        if recipe.servings < 1:
            raise ValidationError("servings", "servings must be at least 1")
        if not 0 <= recipe.rating <= 5:
            raise ValidationError("rating", "rating must be between 0 and 5")
        recipe.id = self._local.next_recipe_id()
        recipe.suitable_for = normalize_tags(recipe.suitable_for)
        recipe.allergens = normalize_tags(recipe.allergens)
        self._local.put_recipes([recipe])
        logger.info("recipe.added id=%s name=%s", recipe.id, recipe.name)
        return recipe, await self._sync.push_recipe(recipe)

    async def sync(self) -> SyncResult:
        return await self._sync.pull_recipes()
