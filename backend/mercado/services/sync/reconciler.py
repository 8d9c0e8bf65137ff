"""
Local <-> remote reconciliation.

Three streams with their own policies:
- user:       pull on login (remote wins), push after every local edit.
- recipes:    pull on login; an empty remote catalog is bootstrapped from the
              seed set, written locally and remotely in one best-effort batch.
              Undecodable documents are skipped one by one. Never deletes.
- menu plans: push-only, one document per "<user>_<plan>" key; deletion
              queries by plan id and removes every match.

Every operation runs once per trigger: Idle -> Pulling/Pushing -> Committed
or Skipped. Remote failures end in Skipped with the error attached and local
state untouched. Local store errors propagate to the caller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from mercado.errors import DecodeError, RemoteUnavailable
from mercado.logging import get_logger
from mercado.services.catalog_seed import seed_recipes
from mercado.services.remote.codec import (
    doc_to_recipe,
    doc_to_user,
    plan_doc_key,
    plan_to_doc,
    recipe_to_doc,
    user_to_doc,
)
from mercado.services.remote.document_client import RemoteStore
from mercado.storage.local_store import LocalStore
from mercado.storage.models import MenuPlan, Recipe, User

logger = get_logger(__name__)


class SyncState(str, Enum):
    IDLE = "idle"
    PULLING = "pulling"
    PUSHING = "pushing"
    COMMITTED = "committed"
    SKIPPED = "skipped"


class Stream(str, Enum):
    USER = "user"
    RECIPES = "recipes"
    MENU_PLANS = "menu_plans"


@dataclass
class SyncResult:
    stream: Stream
    direction: str  # pull | push | delete
    state: SyncState
    count: int = 0
    error: Optional[Exception] = None
    seeded: bool = False
    decode_failures: list[DecodeError] = field(default_factory=list)

    @property
    def committed(self) -> bool:
        return self.state is SyncState.COMMITTED


@dataclass
class LoginSync:
    user: SyncResult
    recipes: SyncResult


class SyncReconciler:
    def __init__(
        self,
        local: LocalStore,
        remote: RemoteStore,
        seed: Callable[[], list[Recipe]] = seed_recipes,
    ) -> None:
        self._local = local
        self._remote = remote
        self._seed = seed
        self._states: dict[Stream, SyncState] = {stream: SyncState.IDLE for stream in Stream}

    def state(self, stream: Stream) -> SyncState:
        return self._states[stream]

    def _begin(self, stream: Stream, state: SyncState) -> None:
        self._states[stream] = state

    def _skip(self, stream: Stream, direction: str, error: Exception, **extra) -> SyncResult:
        self._states[stream] = SyncState.SKIPPED
        logger.warning("sync.%s.%s.skipped error=%s", stream.value, direction, error)
        return SyncResult(stream, direction, SyncState.SKIPPED, error=error, **extra)

    def _commit(self, stream: Stream, direction: str, count: int, **extra) -> SyncResult:
        self._states[stream] = SyncState.COMMITTED
        logger.info("sync.%s.%s.committed count=%s", stream.value, direction, count)
        return SyncResult(stream, direction, SyncState.COMMITTED, count=count, **extra)

    # user stream

    async def pull_user(self, user_id: str) -> SyncResult:
        self._begin(Stream.USER, SyncState.PULLING)
        try:
            doc = await self._remote.fetch_user_doc(user_id)
        except RemoteUnavailable as e:
            return self._skip(Stream.USER, "pull", e)
        if doc is None:
            self._states[Stream.USER] = SyncState.SKIPPED
            logger.info("sync.user.pull.no_remote_doc user_id=%s", user_id)
            return SyncResult(Stream.USER, "pull", SyncState.SKIPPED)
        try:
            user = doc_to_user(doc, user_id)
        except DecodeError as e:
            return self._skip(Stream.USER, "pull", e, decode_failures=[e])
        self._local.put_user(user)
        return self._commit(Stream.USER, "pull", 1)

    async def push_user(self, user: User) -> SyncResult:
        self._begin(Stream.USER, SyncState.PUSHING)
        try:
            await self._remote.put_user_doc(user.id, user_to_doc(user))
        except RemoteUnavailable as e:
            return self._skip(Stream.USER, "push", e)
        return self._commit(Stream.USER, "push", 1)

    # recipe stream

    async def pull_recipes(self) -> SyncResult:
        self._begin(Stream.RECIPES, SyncState.PULLING)
        try:
            entries = await self._remote.fetch_all_recipe_docs()
        except RemoteUnavailable as e:
            return self._skip(Stream.RECIPES, "pull", e)

        if not entries:
            logger.info("sync.recipes.pull.remote_empty seeding catalog")
            return await self.seed_catalog()

        decoded: list[Recipe] = []
        failures: list[DecodeError] = []
        for doc_id, doc in entries:
            try:
                decoded.append(doc_to_recipe(doc, doc_id or None))
            except DecodeError as e:
                failures.append(e)
                logger.warning("sync.recipes.decode_failed doc_id=%s reason=%s", e.doc_id, e.reason)

        if decoded:
            self._local.put_recipes(decoded)
        return self._commit(Stream.RECIPES, "pull", len(decoded), decode_failures=failures)

    async def seed_catalog(self) -> SyncResult:
        """Write the seed set locally (must succeed) then remotely (best effort)."""
        recipes = self._seed()
        self._local.put_recipes(recipes)
        self._begin(Stream.RECIPES, SyncState.PUSHING)
        error: Optional[Exception] = None
        try:
            await self._remote.batch_put_recipe_docs([(str(r.id), recipe_to_doc(r)) for r in recipes])
        except RemoteUnavailable as e:
            error = e
            logger.warning("sync.recipes.seed.remote_failed count=%s error=%s", len(recipes), e)
        result = self._commit(Stream.RECIPES, "pull", len(recipes), seeded=True)
        result.error = error
        return result

    async def push_recipe(self, recipe: Recipe) -> SyncResult:
        self._begin(Stream.RECIPES, SyncState.PUSHING)
        try:
            await self._remote.put_recipe_doc(str(recipe.id), recipe_to_doc(recipe))
        except RemoteUnavailable as e:
            return self._skip(Stream.RECIPES, "push", e)
        return self._commit(Stream.RECIPES, "push", 1)

    # menu plan stream

    async def push_plan(self, plan: MenuPlan) -> SyncResult:
        if plan.id is None:
            raise ValueError("plan must be stored locally before it is pushed")
        self._begin(Stream.MENU_PLANS, SyncState.PUSHING)
        try:
            await self._remote.put_plan_doc(plan_doc_key(plan.user_id, plan.id), plan_to_doc(plan))
        except RemoteUnavailable as e:
            return self._skip(Stream.MENU_PLANS, "push", e)
        return self._commit(Stream.MENU_PLANS, "push", 1)

    async def delete_plan_remote(self, plan_id: int) -> SyncResult:
        self._begin(Stream.MENU_PLANS, SyncState.PUSHING)
        try:
            deleted = await self._remote.delete_plan_docs_matching(plan_id)
        except RemoteUnavailable as e:
            return self._skip(Stream.MENU_PLANS, "delete", e)
        return self._commit(Stream.MENU_PLANS, "delete", deleted)

    # session start

    async def on_login(self, user_id: str) -> LoginSync:
        """User pull, then recipe pull (or seed). Strictly sequential."""
        user = await self.pull_user(user_id)
        recipes = await self.pull_recipes()
        logger.info(
            "sync.login.done user_id=%s user=%s recipes=%s count=%s seeded=%s",
            user_id,
            user.state.value,
            recipes.state.value,
            recipes.count,
            recipes.seeded,
        )
        return LoginSync(user=user, recipes=recipes)
