"""Service wiring. Store handles are built once and injected, never global."""

import random
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from sqlalchemy.engine import Engine

from mercado.config import settings
from mercado.services.menu.locks import PlanCommitLocks
from mercado.services.menu.service import MenuService
from mercado.services.profile import ProfileService
from mercado.services.recipes import RecipeCatalog
from mercado.services.remote.auth_client import Authenticator, HttpAuthenticator
from mercado.services.remote.document_client import HttpRemoteStore, RemoteStore
from mercado.services.session import SessionService
from mercado.services.sync.reconciler import SyncReconciler
from mercado.storage.local_store import LocalStore


@dataclass
class Services:
    local: LocalStore
    sync: SyncReconciler
    menus: MenuService
    profiles: ProfileService
    sessions: SessionService
    recipes: RecipeCatalog


def build_services(
    engine: Engine,
    remote: Optional[RemoteStore] = None,
    authenticator: Optional[Authenticator] = None,
    rng: Optional[random.Random] = None,
    locks: Optional[PlanCommitLocks] = None,
) -> Services:
    local = LocalStore(engine)
    remote = remote or HttpRemoteStore()
    authenticator = authenticator or HttpAuthenticator()
    sync = SyncReconciler(local, remote)
    profiles = ProfileService(local, sync, authenticator)
    return Services(
        local=local,
        sync=sync,
        menus=MenuService(local, sync, locks=locks, rng=rng or random.Random(settings.random_seed)),
        profiles=profiles,
        sessions=SessionService(authenticator, sync, profiles),
        recipes=RecipeCatalog(local, sync),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
