from fastapi import APIRouter, Depends, Query

from mercado.api.deps import Services, get_services
from mercado.logging import get_logger
from mercado.schemas.recipe import RecipeCreate, RecipeResponse, RecipeSyncResponse
from mercado.services.compatibility import filter_for_user
from mercado.services.sync.reconciler import SyncResult
from mercado.storage.models import Recipe

router = APIRouter()
logger = get_logger(__name__)


def sync_response(result: SyncResult) -> RecipeSyncResponse:
    return RecipeSyncResponse(
        state=result.state.value,
        count=result.count,
        seeded=result.seeded,
        decode_failures=len(result.decode_failures),
        remote_error=str(result.error) if result.error else None,
    )


@router.get("/recipes", response_model=list[RecipeResponse])
def list_recipes(
    q: str | None = None,
    category: str | None = None,
    condition: str | None = None,
    compatible_for: str | None = Query(default=None, description="User id; keep only compatible recipes"),
    services: Services = Depends(get_services),
) -> list[Recipe]:
    recipes = services.recipes.browse(query=q, category=category, condition=condition)
    if compatible_for:
        recipes = filter_for_user(recipes, services.profiles.get_profile(compatible_for))
    return recipes


@router.get("/recipes/popular", response_model=list[RecipeResponse])
def popular_recipes(limit: int = Query(default=10, ge=1, le=100), services: Services = Depends(get_services)):
    return services.recipes.popular(limit)


@router.post("/recipes", response_model=RecipeResponse, status_code=201)
async def add_recipe(body: RecipeCreate, services: Services = Depends(get_services)) -> Recipe:
    recipe, _ = await services.recipes.add(Recipe(id=0, **body.model_dump()))
    return recipe


@router.post("/recipes/sync", response_model=RecipeSyncResponse)
async def sync_recipes(services: Services = Depends(get_services)) -> RecipeSyncResponse:
    return sync_response(await services.recipes.sync())
