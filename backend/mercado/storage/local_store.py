"""Local persistence boundary. Fast and assumed available; errors propagate."""

from contextlib import contextmanager
from typing import Iterable, Iterator

from sqlalchemy.engine import Engine
from sqlmodel import Session

from mercado.storage import repositories as repo
from mercado.storage.models import MenuPlan, Recipe, User


class LocalStore:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with Session(self._engine, expire_on_commit=False) as session:
            yield session

    # users

    def get_user(self, user_id: str) -> User | None:
        with self._session() as session:
            return repo.get_user(session, user_id)

    def put_user(self, user: User) -> User:
        with self._session() as session:
            return repo.upsert_user(session, user)

    # recipes

    def get_all_recipes(self) -> list[Recipe]:
        with self._session() as session:
            return repo.get_all_recipes(session)

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        with self._session() as session:
            return repo.get_recipe(session, recipe_id)

    def put_recipes(self, recipes: Iterable[Recipe]) -> int:
        with self._session() as session:
            return repo.upsert_recipes(session, recipes)

    def get_recipes_by_ids(self, recipe_ids: Iterable[int]) -> list[Recipe]:
        with self._session() as session:
            return repo.get_recipes_by_ids(session, recipe_ids)

    def next_recipe_id(self) -> int:
        with self._session() as session:
            return repo.next_recipe_id(session)

    def recipe_count(self) -> int:
        with self._session() as session:
            return repo.count_recipes(session)

    def increment_usage(self, recipe_ids: Iterable[int]) -> int:
        with self._session() as session:
            return repo.increment_times_used(session, recipe_ids)

    def popular_recipes(self, limit: int = 10) -> list[Recipe]:
        with self._session() as session:
            return repo.get_popular_recipes(session, limit)

    # menu plans

    def get_plan(self, plan_id: int) -> MenuPlan | None:
        with self._session() as session:
            return repo.get_plan(session, plan_id)

    def get_active_plan(self, user_id: str) -> MenuPlan | None:
        with self._session() as session:
            return repo.get_active_plan(session, user_id)

    def put_plan(self, plan: MenuPlan) -> MenuPlan:
        """Insert when `plan.id` is unset, otherwise overwrite."""
        with self._session() as session:
            if plan.id is None:
                return repo.insert_plan(session, plan)
            return repo.update_plan(session, plan)

    def deactivate_all_plans(self, user_id: str) -> int:
        with self._session() as session:
            return repo.deactivate_all_plans(session, user_id)

    def delete_plan(self, plan_id: int) -> bool:
        with self._session() as session:
            return repo.delete_plan(session, plan_id)

    def list_plans(self, user_id: str) -> list[MenuPlan]:
        with self._session() as session:
            return repo.get_plans_by_user(session, user_id)

    def list_favorite_plans(self, user_id: str) -> list[MenuPlan]:
        with self._session() as session:
            return repo.get_favorite_plans(session, user_id)
