"""
Budget Service - expenses against a trip's spending limit.
"""
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel

from .base import ScreenService
from .backend import BackendClient
from .collections import Collection
from .errors import NotFoundError, ValidationFailed
from ..models.trip import Expense, ExpenseCreate

logger = logging.getLogger(__name__)


# (minimum percent used, level, reminder), checked top down
BUDGET_LEVELS = [
    (100, "over", "Oh no! Budget exceeded 🛑"),
    (85, "danger", "Careful, funds are getting low 🍂"),
    (50, "caution", "Start paying attention... ☁️"),
    (0, "safe", "You are doing great! 🌸"),
]


class BudgetSummary(BaseModel):
    """Spending position of a trip."""
    budget_limit: float
    total_spent: float
    remaining: float
    percent_used: float
    level: str
    message: str
    by_category: Dict[str, float] = {}


def summarize(budget_limit: float, expenses: List[Expense]) -> BudgetSummary:
    total = sum(e.amount for e in expenses)
    percent = (total / budget_limit) * 100 if budget_limit > 0 else 0.0
    level, message = next(
        (lvl, msg) for floor, lvl, msg in BUDGET_LEVELS if percent >= floor
    )
    by_category: Dict[str, float] = {}
    for e in expenses:
        by_category[e.category.value] = by_category.get(e.category.value, 0.0) + e.amount
    return BudgetSummary(
        budget_limit=budget_limit,
        total_spent=total,
        remaining=budget_limit - total,
        percent_used=percent,
        level=level,
        message=message,
        by_category=by_category,
    )


class BudgetService(ScreenService):
    """Tracks expenses for one trip."""

    TABLE = "itinerary_expenses"

    def __init__(self, backend: BackendClient, trip_id: str):
        super().__init__(backend)
        self.trip_id = trip_id
        self.expenses: Collection[Expense] = Collection("expenses", self._load)

    async def _load(self) -> List[Expense]:
        rows = await (
            self.backend.table(self.TABLE)
            .select()
            .eq("itinerary_id", self.trip_id)
            .order("expense_date", ascending=False)
            .execute()
        )
        return self.parse(Expense, rows)

    async def budget_limit(self) -> float:
        row = await (
            self.backend.table("itineraries")
            .select("budget_limit")
            .eq("id", self.trip_id)
            .single()
            .execute()
        )
        if row is None:
            raise NotFoundError("Trip not found!")
        return float(row.get("budget_limit") or 0)

    async def list(self) -> List[Expense]:
        return await self.expenses.get()

    async def add(self, data: ExpenseCreate) -> Optional[Expense]:
        user_id = await self.current_user_id()
        row = data.model_dump(mode="json", exclude_none=True)
        row.update(itinerary_id=self.trip_id, user_id=user_id)
        rows = await self.expenses.mutate(
            self.backend.table(self.TABLE).insert(row).execute()
        )
        logger.info(f"Logged {data.amount} under {data.category.value} for trip {self.trip_id}")
        return self.first(Expense, rows)

    async def delete(self, expense_id: str) -> None:
        await self.expenses.mutate(
            self.backend.table(self.TABLE).delete().eq("id", expense_id).execute()
        )

    async def set_limit(self, limit: float) -> None:
        if limit is None or limit < 0:
            raise ValidationFailed("Budget limit must be zero or more.")
        # The limit lives on the trip row; expenses are reloaded with it
        await self.expenses.mutate(
            self.backend.table("itineraries")
            .update({"budget_limit": limit})
            .eq("id", self.trip_id)
            .execute()
        )

    async def summary(self) -> BudgetSummary:
        return summarize(await self.budget_limit(), await self.expenses.get())
