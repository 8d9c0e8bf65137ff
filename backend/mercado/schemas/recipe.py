from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class RecipeCreate(BaseModel):
    name: str
    description: str = ""
    category: str  # Breakfast | Lunch | Dinner | Snack | Dessert
    image_url: str = ""
    calories: int = 0
    protein: Decimal = Decimal("0")
    carbohydrates: Decimal = Decimal("0")
    fats: Decimal = Decimal("0")
    fiber: Decimal = Decimal("0")
    sodium: Decimal = Decimal("0")
    sugar: Decimal = Decimal("0")
    suitable_for: list[str] = []
    allergens: list[str] = []
    ingredients: list[str] = []
    instructions: list[str] = []
    preparation_time: int = 0
    difficulty: str = "Easy"
    servings: int = 1
    estimated_cost: Decimal = Decimal("0")
    rating: float = 0.0


class RecipeResponse(RecipeCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    times_used: int
    created_at: datetime


class RecipeSyncResponse(BaseModel):
    state: str
    count: int
    seeded: bool
    decode_failures: int
    remote_error: str | None = None
