"""Tests for the recipe compatibility filter."""

from factories import make_recipe, make_user

from mercado.services.catalog_seed import seed_recipes
from mercado.services.compatibility import (
    filter_compatible,
    filter_for_user,
    is_compatible,
    normalize_tags,
)


def test_normalize_tags_trims_and_dedupes():
    assert normalize_tags([" diabetes", "diabetes ", "", "  ", "obesidad"]) == ["diabetes", "obesidad"]
    assert normalize_tags(None) == []


def test_condition_overlap_required():
    recipe = make_recipe(1, "Lunch", suitable_for=["hipertension"])
    assert not is_compatible(recipe, ["diabetes"], [])
    assert is_compatible(recipe, ["diabetes", "hipertension"], [])


def test_single_shared_allergen_disqualifies():
    recipe = make_recipe(1, "Lunch", suitable_for=["diabetes"], allergens=["gluten", "lacteos"])
    assert not is_compatible(recipe, ["diabetes"], ["lacteos"])
    assert is_compatible(recipe, ["diabetes"], ["mariscos"])


def test_tags_compare_exactly_after_trim():
    recipe = make_recipe(1, "Lunch", suitable_for=[" Diabetes "], allergens=[" lacteos"])
    assert not is_compatible(recipe, ["diabetes"], [])
    assert is_compatible(recipe, ["Diabetes"], [])
    assert not is_compatible(recipe, ["Diabetes"], ["lacteos  "])


def test_no_declared_conditions_accepts_allergen_free_recipes():
    tagged = make_recipe(1, "Lunch", suitable_for=["diabetes"])
    untagged = make_recipe(2, "Lunch", suitable_for=[])
    with_allergen = make_recipe(3, "Lunch", suitable_for=["diabetes"], allergens=["huevo"])
    result = filter_compatible([tagged, untagged, with_allergen], [], ["huevo"])
    assert [r.id for r in result] == [1, 2]


def test_untagged_recipe_never_matches_declared_conditions():
    untagged = make_recipe(2, "Lunch", suitable_for=[])
    assert not is_compatible(untagged, ["diabetes"], [])


def test_filter_is_deterministic_and_does_not_mutate():
    recipes = seed_recipes()
    snapshot = [(r.id, list(r.suitable_for), list(r.allergens)) for r in recipes]
    user = make_user(conditions=["diabetes"], allergies=["lacteos"])
    first = filter_for_user(recipes, user)
    second = filter_for_user(recipes, user)
    assert [r.id for r in first] == [r.id for r in second]
    assert [(r.id, list(r.suitable_for), list(r.allergens)) for r in recipes] == snapshot


def test_every_filtered_recipe_satisfies_both_rules():
    user = make_user(conditions=["diabetes"], allergies=["lacteos", "pescado"])
    for recipe in filter_for_user(seed_recipes(), user):
        assert set(recipe.suitable_for) & {"diabetes"}
        assert not set(recipe.allergens) & {"lacteos", "pescado"}


def test_seed_catalog_for_diabetic_with_dairy_allergy():
    user = make_user(conditions=["diabetes"], allergies=["lacteos"])
    ids = sorted(r.id for r in filter_for_user(seed_recipes(), user))
    # 3 and 7 carry lacteos, 6 is not tagged for diabetes
    assert ids == [1, 2, 4, 5, 8]
