import random
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from mercado import main
from mercado.api.deps import build_services
from mercado.errors import AuthError, RemoteUnavailable
from mercado.services.menu.locks import PlanCommitLocks
from mercado.services.sync.reconciler import SyncReconciler
from mercado.storage import models  # noqa: F401
from mercado.storage.local_store import LocalStore


class FakeRemoteStore:
    """In-memory document store. Flip `online` to simulate lost connectivity."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict]] = {"users": {}, "recipes": {}, "menu_plans": {}}
        self.online = True
        self.calls: list[str] = []
        self.failing: set[str] = set()

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if not self.online or operation in self.failing:
            raise RemoteUnavailable(operation, ConnectionError("offline"))

    async def fetch_user_doc(self, user_id):
        self._check("fetch_user_doc")
        doc = self.collections["users"].get(user_id)
        return dict(doc) if doc is not None else None

    async def put_user_doc(self, user_id, doc):
        self._check("put_user_doc")
        self.collections["users"][user_id] = dict(doc)

    async def fetch_all_recipe_docs(self):
        self._check("fetch_all_recipe_docs")
        return [(doc_id, dict(doc)) for doc_id, doc in self.collections["recipes"].items()]

    async def batch_put_recipe_docs(self, docs):
        self._check("batch_put_recipe_docs")
        for doc_id, doc in docs:
            self.collections["recipes"][doc_id] = dict(doc)

    async def put_recipe_doc(self, doc_id, doc):
        self._check("put_recipe_doc")
        self.collections["recipes"][doc_id] = dict(doc)

    async def put_plan_doc(self, composite_key, doc):
        self._check("put_plan_doc")
        self.collections["menu_plans"][composite_key] = dict(doc)

    async def delete_plan_docs_matching(self, plan_id):
        self._check("delete_plan_docs_matching")
        plans = self.collections["menu_plans"]
        matches = [key for key, doc in plans.items() if doc.get("id") == plan_id]
        for key in matches:
            del plans[key]
        return len(matches)


class FakeAuthenticator:
    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, str]] = {}

    async def authenticate(self, email, password):
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthError("invalid email or password")
        return account[1]

    async def create_account(self, email, password):
        if email in self.accounts:
            raise AuthError("could not create account")
        user_id = f"uid-{len(self.accounts) + 1}"
        self.accounts[email] = (password, user_id)
        return user_id


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture(name="local")
def local_fixture(engine):
    return LocalStore(engine)


@pytest.fixture(name="remote")
def remote_fixture():
    return FakeRemoteStore()


@pytest.fixture(name="authenticator")
def authenticator_fixture():
    return FakeAuthenticator()


@pytest.fixture(name="reconciler")
def reconciler_fixture(local, remote):
    return SyncReconciler(local, remote)


@pytest.fixture(name="rng")
def rng_fixture():
    return random.Random(42)


@pytest.fixture(name="services")
def services_fixture(engine, remote, authenticator, rng):
    return build_services(
        engine,
        remote=remote,
        authenticator=authenticator,
        rng=rng,
        locks=PlanCommitLocks(redis_url=""),
    )


@pytest.fixture(name="client")
def client_fixture(monkeypatch, services):
    monkeypatch.setattr(main.app.state, "services", services, raising=False)
    return TestClient(main.app)
