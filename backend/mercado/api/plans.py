from fastapi import APIRouter, Depends

from mercado.api.deps import Services, get_services
from mercado.logging import get_logger
from mercado.schemas.plan import ActivePlanResponse, DayMenu, GenerationResponse, PlanResponse
from mercado.schemas.recipe import RecipeResponse
from mercado.storage.models import MenuPlan

router = APIRouter()
logger = get_logger(__name__)


@router.post("/users/{user_id}/menu-plans", response_model=GenerationResponse, status_code=201)
async def generate_menu(user_id: str, services: Services = Depends(get_services)) -> GenerationResponse:
    result = await services.menus.generate_for(user_id)
    if not result.ok:
        raise result.error
    return GenerationResponse(
        plan=PlanResponse.model_validate(result.plan),
        usage_recorded=result.usage_recorded,
        remote_synced=all(push.committed for push in result.pushes),
    )


@router.get("/users/{user_id}/menu-plans/active", response_model=ActivePlanResponse | None)
def active_menu(user_id: str, services: Services = Depends(get_services)) -> ActivePlanResponse | None:
    view = services.menus.active_plan(user_id)
    if view is None:
        return None
    user = services.local.get_user(user_id)
    return ActivePlanResponse(
        plan=PlanResponse.model_validate(view.plan),
        days=[
            DayMenu(
                day=day,
                name=MenuPlan.day_name(day),
                recipes=[RecipeResponse.model_validate(r) for r in recipes],
            )
            for day, recipes in sorted(view.days.items())
        ],
        within_budget=services.menus.within_budget(view.plan, user) if user else None,
    )


@router.get("/users/{user_id}/menu-plans", response_model=list[PlanResponse])
def menu_history(
    user_id: str, favorites_only: bool = False, services: Services = Depends(get_services)
) -> list[MenuPlan]:
    return services.menus.history(user_id, favorites_only=favorites_only)


@router.post("/menu-plans/{plan_id}/favorite", response_model=PlanResponse)
async def toggle_favorite(plan_id: int, services: Services = Depends(get_services)) -> MenuPlan:
    return await services.menus.toggle_favorite(plan_id)


@router.delete("/menu-plans/{plan_id}")
async def delete_menu(plan_id: int, services: Services = Depends(get_services)) -> dict:
    result = await services.menus.delete_plan(plan_id)
    return {"ok": True, "remote": result.state.value, "remote_deleted": result.count}
