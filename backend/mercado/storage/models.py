from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from mercado.storage.types import DecimalText


class Category(str, Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    DESSERT = "Dessert"


MEAL_SLOTS = (Category.BREAKFAST, Category.LUNCH, Category.DINNER)


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class NutritionalGoal(str, Enum):
    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def calculate_bmi(weight: float, height_cm: float) -> float:
    height_m = height_cm / 100.0
    return weight / (height_m * height_m)


def classify_bmi(bmi: float) -> str:
    if bmi < 18.5:
        return "underweight"
    if bmi < 25.0:
        return "normal"
    if bmi < 30.0:
        return "overweight"
    return "obese"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True)  # assigned by the remote auth service
    name: str = ""
    email: str = ""
    age: int = 0
    gender: str = ""
    weight: float = 0.0  # kg
    height: float = 0.0  # cm
    bmi: float = 0.0
    medical_conditions: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    allergies: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    nutritional_goal: str = NutritionalGoal.MAINTAIN.value
    monthly_budget: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def bmi_category(self) -> str:
        return classify_bmi(self.bmi)


class Recipe(SQLModel, table=True):
    __tablename__ = "recipes"

    # Catalog-assigned; shared with the remote document id
    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str
    description: str = ""
    category: str  # Category value
    image_url: str = ""

    # Per serving
    calories: int = 0
    protein: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    carbohydrates: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    fats: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    fiber: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    sodium: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    sugar: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))

    suitable_for: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    allergens: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    ingredients: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    instructions: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    preparation_time: int = 0  # minutes
    difficulty: str = Difficulty.EASY.value
    servings: int = 1
    estimated_cost: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    rating: float = 0.0
    times_used: int = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def cost_per_serving(self) -> Decimal:
        return self.estimated_cost / self.servings


class MenuPlan(SQLModel, table=True):
    __tablename__ = "menu_plans"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    name: str
    start_date: datetime
    end_date: datetime
    # Seven [breakfast, lunch, dinner] recipe id lists, Monday first
    days: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    total_calories: int = 0
    total_cost: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    average_daily_calories: int = 0
    average_daily_cost: Decimal = Field(default=Decimal("0"), sa_column=Column(DecimalText, nullable=False))
    is_active: bool = True
    is_favorite: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def recipes_for_day(self, day: int) -> list[int]:
        if day < 0 or day >= len(self.days):
            return []
        return [int(rid) for rid in self.days[day]]

    def all_recipe_ids(self) -> list[int]:
        """Distinct ids across the week, in first-seen order."""
        seen: dict[int, None] = {}
        for slot in self.days:
            for rid in slot:
                seen.setdefault(int(rid), None)
        return list(seen)

    @staticmethod
    def day_name(day: int) -> str:
        return DAY_NAMES[day] if 0 <= day < len(DAY_NAMES) else ""

    def is_within_budget(self, monthly_budget: Decimal, weeks_per_month: float = 4.3) -> bool:
        weekly = Decimal(str(monthly_budget)) / Decimal(str(weeks_per_month))
        return self.total_cost <= weekly
