"""
User registration and profile edits.

Input is validated before any write. The local record is authoritative for
the session; every change is pushed to the remote store once, best effort.
"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from mercado.errors import NotFound, ValidationError
from mercado.logging import get_logger
from mercado.services.compatibility import normalize_tags
from mercado.services.remote.auth_client import Authenticator
from mercado.services.remote.codec import parse_goal
from mercado.services.sync.reconciler import SyncReconciler
from mercado.storage.local_store import LocalStore
from mercado.storage.models import User, calculate_bmi

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6
MIN_AGE, MAX_AGE = 18, 100


def _check_body(weight: Optional[float], height: Optional[float]) -> None:
    if weight is not None and weight <= 0:
        raise ValidationError("weight", "weight must be greater than 0")
    if height is not None and height <= 0:
        raise ValidationError("height", "height must be greater than 0")


def _budget(value: object) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError("monthly_budget", "budget must be a number") from e
    if not amount.is_finite() or amount < 0:
        raise ValidationError("monthly_budget", "budget cannot be negative")
    return amount


def _goal(value: str) -> str:
    try:
        return parse_goal(value).value
    except ValueError as e:
        raise ValidationError("nutritional_goal", "unknown nutritional goal") from e


def validate_registration(
    name: str, email: str, password: str, age: int, weight: float, height: float
) -> None:
    if not (name or "").strip():
        raise ValidationError("name", "name is required")
    if not EMAIL_RE.match((email or "").strip()):
        raise ValidationError("email", "invalid email")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError("password", f"password must have at least {MIN_PASSWORD_LENGTH} characters")
    if age < MIN_AGE or age > MAX_AGE:
        raise ValidationError("age", f"age must be between {MIN_AGE} and {MAX_AGE}")
    _check_body(weight, height)


class ProfileService:
    def __init__(self, local: LocalStore, sync: SyncReconciler, authenticator: Authenticator) -> None:
        self._local = local
        self._sync = sync
        self._auth = authenticator

    def get_profile(self, user_id: str) -> User:
        user = self._local.get_user(user_id)
        if user is None:
            raise NotFound("user", user_id)
        return user

    async def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        age: int,
        weight: float,
        height: float,
        gender: str = "",
        medical_conditions: Iterable[str] = (),
        allergies: Iterable[str] = (),
        nutritional_goal: str = "maintain",
        monthly_budget: object = 0,
    ) -> User:
        validate_registration(name, email, password, age, weight, height)
        goal = _goal(nutritional_goal)
        budget = _budget(monthly_budget)

        user_id = await self._auth.create_account(email.strip(), password)
        now = datetime.utcnow()
        user = User(
            id=user_id,
            name=name.strip(),
            email=email.strip(),
            age=age,
            gender=gender,
            weight=weight,
            height=height,
            bmi=calculate_bmi(weight, height),
            medical_conditions=normalize_tags(medical_conditions),
            allergies=normalize_tags(allergies),
            nutritional_goal=goal,
            monthly_budget=budget,
            created_at=now,
            updated_at=now,
        )
        user = self._local.put_user(user)
        await self._sync.push_user(user)
        logger.info("profile.registered user_id=%s bmi=%.1f", user.id, user.bmi)
        return user

    async def update_profile(
        self,
        user_id: str,
        *,
        weight: Optional[float] = None,
        height: Optional[float] = None,
        medical_conditions: Optional[Iterable[str]] = None,
        allergies: Optional[Iterable[str]] = None,
        nutritional_goal: Optional[str] = None,
        monthly_budget: Optional[object] = None,
    ) -> User:
        user = self.get_profile(user_id)
        _check_body(weight, height)
        goal = _goal(nutritional_goal) if nutritional_goal is not None else None
        budget = _budget(monthly_budget) if monthly_budget is not None else None

        if weight is not None:
            user.weight = weight
        if height is not None:
            user.height = height
        if (weight is not None or height is not None) and user.height > 0:
            user.bmi = calculate_bmi(user.weight, user.height)
        if medical_conditions is not None:
            user.medical_conditions = normalize_tags(medical_conditions)
        if allergies is not None:
            user.allergies = normalize_tags(allergies)
        if goal is not None:
            user.nutritional_goal = goal
        if budget is not None:
            user.monthly_budget = budget
        user.updated_at = datetime.utcnow()

        user = self._local.put_user(user)
        await self._sync.push_user(user)
        logger.info("profile.updated user_id=%s", user.id)
        return user
