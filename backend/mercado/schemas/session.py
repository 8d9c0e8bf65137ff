from pydantic import BaseModel

from mercado.schemas.recipe import RecipeSyncResponse


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    user_id: str
    user_sync: str
    recipes: RecipeSyncResponse
