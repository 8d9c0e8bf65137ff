from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from mercado.schemas.recipe import RecipeResponse


class PlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    name: str
    start_date: datetime
    end_date: datetime
    days: list[list[int]]
    total_calories: int
    total_cost: Decimal
    average_daily_calories: int
    average_daily_cost: Decimal
    is_active: bool
    is_favorite: bool
    created_at: datetime


class DayMenu(BaseModel):
    day: int
    name: str
    recipes: list[RecipeResponse]


class ActivePlanResponse(BaseModel):
    plan: PlanResponse
    days: list[DayMenu]
    within_budget: bool | None = None


class GenerationResponse(BaseModel):
    plan: PlanResponse
    usage_recorded: bool
    remote_synced: bool
