from fastapi import APIRouter, Depends

from mercado.api.deps import Services, get_services
from mercado.logging import get_logger
from mercado.schemas.user import ProfileUpdate, RegisterRequest, UserResponse
from mercado.storage.models import User

router = APIRouter()
logger = get_logger(__name__)


def user_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user).model_copy(update={"bmi_class": user.bmi_category()})


@router.post("/users", response_model=UserResponse, status_code=201)
async def register(body: RegisterRequest, services: Services = Depends(get_services)) -> UserResponse:
    registration = await services.sessions.register(**body.model_dump())
    return user_response(registration.user)


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str, services: Services = Depends(get_services)) -> UserResponse:
    return user_response(services.profiles.get_profile(user_id))


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str, body: ProfileUpdate, services: Services = Depends(get_services)
) -> UserResponse:
    user = await services.profiles.update_profile(user_id, **body.model_dump(exclude_unset=True))
    return user_response(user)
