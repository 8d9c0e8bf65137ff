from fastapi import APIRouter

from mercado.api.health import router as health_router
from mercado.api.plans import router as plans_router
from mercado.api.recipes import router as recipes_router
from mercado.api.sessions import router as sessions_router
from mercado.api.users import router as users_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(sessions_router)
router.include_router(users_router)
router.include_router(recipes_router)
router.include_router(plans_router)
