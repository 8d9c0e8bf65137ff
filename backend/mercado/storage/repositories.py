from typing import Iterable

from sqlalchemy import update
from sqlmodel import Session, col, select

from mercado.logging import get_logger
from mercado.storage.models import MenuPlan, Recipe, User

logger = get_logger(__name__)


def get_user(session: Session, user_id: str) -> User | None:
    return session.get(User, user_id)


def upsert_user(session: Session, user: User) -> User:
    """Full replace by id."""
    merged = session.merge(user)
    session.commit()
    session.refresh(merged)
    logger.info("user.upserted id=%s", merged.id)
    return merged


def get_all_recipes(session: Session) -> list[Recipe]:
    return list(session.exec(select(Recipe).order_by(Recipe.id)))


def get_recipe(session: Session, recipe_id: int) -> Recipe | None:
    return session.get(Recipe, recipe_id)


def get_recipes_by_ids(session: Session, recipe_ids: Iterable[int]) -> list[Recipe]:
    ids = list(recipe_ids)
    if not ids:
        return []
    return list(session.exec(select(Recipe).where(col(Recipe.id).in_(ids))))


def upsert_recipes(session: Session, recipes: Iterable[Recipe]) -> int:
    """Insert or overwrite by id. Never deletes rows missing from `recipes`."""
    count = 0
    for recipe in recipes:
        session.merge(recipe)
        count += 1
    session.commit()
    logger.info("recipes.upserted count=%s", count)
    return count


def next_recipe_id(session: Session) -> int:
    last = session.exec(select(Recipe.id).order_by(col(Recipe.id).desc())).first()
    return (last or 0) + 1


def count_recipes(session: Session) -> int:
    return len(list(session.exec(select(Recipe.id))))


def increment_times_used(session: Session, recipe_ids: Iterable[int]) -> int:
    ids = list(dict.fromkeys(recipe_ids))
    if not ids:
        return 0
    session.exec(
        update(Recipe).where(col(Recipe.id).in_(ids)).values(times_used=Recipe.times_used + 1)
    )
    session.commit()
    logger.info("recipes.times_used.incremented count=%s", len(ids))
    return len(ids)


def get_popular_recipes(session: Session, limit: int = 10) -> list[Recipe]:
    stmt = (
        select(Recipe)
        .order_by(col(Recipe.rating).desc(), col(Recipe.times_used).desc(), Recipe.id)
        .limit(limit)
    )
    return list(session.exec(stmt))


def get_plan(session: Session, plan_id: int) -> MenuPlan | None:
    return session.get(MenuPlan, plan_id)


def get_active_plan(session: Session, user_id: str) -> MenuPlan | None:
    return session.exec(
        select(MenuPlan).where(MenuPlan.user_id == user_id, MenuPlan.is_active == True)  # noqa: E712
    ).first()


def get_plans_by_user(session: Session, user_id: str) -> list[MenuPlan]:
    return list(
        session.exec(
            select(MenuPlan)
            .where(MenuPlan.user_id == user_id)
            .order_by(col(MenuPlan.created_at).desc(), col(MenuPlan.id).desc())
        )
    )


def get_favorite_plans(session: Session, user_id: str) -> list[MenuPlan]:
    return [plan for plan in get_plans_by_user(session, user_id) if plan.is_favorite]


def insert_plan(session: Session, plan: MenuPlan) -> MenuPlan:
    session.add(plan)
    session.commit()
    session.refresh(plan)
    logger.info(
        "menu_plan.created id=%s user_id=%s active=%s total_calories=%s",
        plan.id,
        plan.user_id,
        plan.is_active,
        plan.total_calories,
    )
    return plan


def update_plan(session: Session, plan: MenuPlan) -> MenuPlan:
    merged = session.merge(plan)
    session.commit()
    session.refresh(merged)
    return merged


def deactivate_all_plans(session: Session, user_id: str) -> int:
    result = session.exec(
        update(MenuPlan)
        .where(MenuPlan.user_id == user_id, MenuPlan.is_active == True)  # noqa: E712
        .values(is_active=False)
    )
    session.commit()
    logger.info("menu_plan.deactivated user_id=%s count=%s", user_id, result.rowcount)
    return result.rowcount


def delete_plan(session: Session, plan_id: int) -> bool:
    plan = session.get(MenuPlan, plan_id)
    if not plan:
        return False
    session.delete(plan)
    session.commit()
    logger.info("menu_plan.deleted id=%s", plan_id)
    return True
