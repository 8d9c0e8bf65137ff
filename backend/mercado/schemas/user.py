from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str
    age: int
    gender: str = ""
    weight: float  # kg
    height: float  # cm
    medical_conditions: list[str] = []
    allergies: list[str] = []
    nutritional_goal: str = "maintain"  # lose | maintain | gain
    monthly_budget: Decimal = Decimal("0")


class ProfileUpdate(BaseModel):
    weight: float | None = None
    height: float | None = None
    medical_conditions: list[str] | None = None
    allergies: list[str] | None = None
    nutritional_goal: str | None = None
    monthly_budget: Decimal | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    age: int
    gender: str
    weight: float
    height: float
    bmi: float
    bmi_class: str = ""
    medical_conditions: list[str]
    allergies: list[str]
    nutritional_goal: str
    monthly_budget: Decimal
    created_at: datetime
    updated_at: datetime
