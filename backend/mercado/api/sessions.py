from fastapi import APIRouter, Depends

from mercado.api.deps import Services, get_services
from mercado.api.recipes import sync_response
from mercado.logging import get_logger
from mercado.schemas.session import LoginRequest, LoginResponse

router = APIRouter()
logger = get_logger(__name__)


@router.post("/sessions", response_model=LoginResponse)
async def login(body: LoginRequest, services: Services = Depends(get_services)) -> LoginResponse:
    start = await services.sessions.login(body.email, body.password)
    return LoginResponse(
        user_id=start.user_id,
        user_sync=start.sync.user.state.value,
        recipes=sync_response(start.sync.recipes),
    )
