"""Session start: authenticate, then bring the local cache up to date."""

from dataclasses import dataclass

from mercado.logging import get_logger
from mercado.services.profile import ProfileService
from mercado.services.remote.auth_client import Authenticator
from mercado.services.sync.reconciler import LoginSync, SyncReconciler, SyncResult
from mercado.storage.models import User

logger = get_logger(__name__)


@dataclass
class SessionStart:
    user_id: str
    sync: LoginSync


@dataclass
class Registration:
    user: User
    recipes: SyncResult


class SessionService:
    def __init__(self, authenticator: Authenticator, sync: SyncReconciler, profiles: ProfileService) -> None:
        self._auth = authenticator
        self._sync = sync
        self._profiles = profiles

    async def login(self, email: str, password: str) -> SessionStart:
        """Returns only after the recipe pull (or seed) finished; menus may be composed after."""
        user_id = await self._auth.authenticate(email, password)
        sync = await self._sync.on_login(user_id)
        logger.info("session.started user_id=%s", user_id)
        return SessionStart(user_id=user_id, sync=sync)

    async def register(self, **fields) -> Registration:
        user = await self._profiles.register(**fields)
        recipes = await self._sync.pull_recipes()
        return Registration(user=user, recipes=recipes)
