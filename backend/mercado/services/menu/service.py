"""Generate, commit and manage weekly menu plans for a user."""

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from mercado.config import settings
from mercado.errors import InsufficientCategory, MercadoError, NotFound
from mercado.logging import get_logger
from mercado.services.compatibility import filter_for_user
from mercado.services.menu.composer import compose_week
from mercado.services.menu.locks import PlanCommitLocks
from mercado.services.sync.reconciler import SyncReconciler, SyncResult
from mercado.storage.local_store import LocalStore
from mercado.storage.models import MenuPlan, Recipe, User

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Success carries `plan`; failure carries `error` and writes nothing."""

    plan: Optional[MenuPlan] = None
    error: Optional[MercadoError] = None
    usage_recorded: bool = False
    pushes: list[SyncResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and self.plan is not None

    @property
    def error_kind(self) -> Optional[str]:
        return type(self.error).__name__ if self.error else None

    @property
    def message(self) -> str:
        return self.error.user_message if self.error else ""


@dataclass
class PlanView:
    plan: MenuPlan
    # day index (0=Monday) -> recipes in breakfast/lunch/dinner order
    days: dict[int, list[Recipe]]


class MenuService:
    def __init__(
        self,
        local: LocalStore,
        sync: SyncReconciler,
        locks: Optional[PlanCommitLocks] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._local = local
        self._sync = sync
        self._locks = locks or PlanCommitLocks()
        self._rng = rng or random.Random(settings.random_seed)
        self._clock = clock

    def _require_user(self, user_id: str) -> User:
        user = self._local.get_user(user_id)
        if user is None:
            raise NotFound("user", user_id)
        return user

    def _require_plan(self, plan_id: int) -> MenuPlan:
        plan = self._local.get_plan(plan_id)
        if plan is None:
            raise NotFound("menu plan", plan_id)
        return plan

    async def generate_for(self, user_id: str) -> GenerationResult:
        return await self.generate_weekly_menu(self._require_user(user_id))

    async def generate_weekly_menu(self, user: User) -> GenerationResult:
        compatible = filter_for_user(self._local.get_all_recipes(), user)
        try:
            plan = compose_week(user.id, compatible, self._rng, now=self._clock())
        except InsufficientCategory as e:
            logger.info("menu.generate.insufficient user_id=%s category=%s", user.id, e.category)
            return GenerationResult(error=e)

        async with self._locks.hold(user.id):
            previous = self._local.get_active_plan(user.id)
            self._local.deactivate_all_plans(user.id)
            plan = self._local.put_plan(plan)

        result = GenerationResult(plan=plan)
        try:
            self._local.increment_usage(plan.all_recipe_ids())
            result.usage_recorded = True
        except SQLAlchemyError as e:
            # Popularity signal only; the plan stays committed
            logger.warning("menu.generate.usage_not_recorded plan_id=%s error=%s", plan.id, e)

        result.pushes.append(await self._sync.push_plan(plan))
        if previous is not None and previous.id != plan.id:
            previous.is_active = False
            result.pushes.append(await self._sync.push_plan(previous))

        logger.info(
            "menu.generate.done user_id=%s plan_id=%s avg_calories=%s avg_cost=%s",
            user.id,
            plan.id,
            plan.average_daily_calories,
            plan.average_daily_cost,
        )
        return result

    def _view(self, plan: MenuPlan) -> PlanView:
        by_id = {r.id: r for r in self._local.get_recipes_by_ids(plan.all_recipe_ids())}
        days = {}
        for day in range(len(plan.days)):
            days[day] = [by_id[rid] for rid in plan.recipes_for_day(day) if rid in by_id]
        return PlanView(plan=plan, days=days)

    def active_plan(self, user_id: str) -> Optional[PlanView]:
        plan = self._local.get_active_plan(user_id)
        return self._view(plan) if plan else None

    def history(self, user_id: str, favorites_only: bool = False) -> list[MenuPlan]:
        if favorites_only:
            return self._local.list_favorite_plans(user_id)
        return self._local.list_plans(user_id)

    def within_budget(self, plan: MenuPlan, user: User) -> bool:
        return plan.is_within_budget(user.monthly_budget, settings.weeks_per_month)

    async def toggle_favorite(self, plan_id: int) -> MenuPlan:
        plan = self._require_plan(plan_id)
        plan.is_favorite = not plan.is_favorite
        plan = self._local.put_plan(plan)
        await self._sync.push_plan(plan)
        return plan

    async def delete_plan(self, plan_id: int) -> SyncResult:
        if not self._local.delete_plan(plan_id):
            raise NotFound("menu plan", plan_id)
        return await self._sync.delete_plan_remote(plan_id)
