"""Weekly menu composition, aggregation and plan lifecycle."""

from mercado.services.menu.composer import compose_week, partition_by_category
from mercado.services.menu.service import GenerationResult, MenuService, PlanView

__all__ = ["GenerationResult", "MenuService", "PlanView", "compose_week", "partition_by_category"]
