"""Meal plan assembly across a period."""

import calendar
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import uuid4

from prepmeal.domain.plans import MealPlan, MealPlanDay
from prepmeal.domain.preferences import MealSlot, Period, Preferences
from prepmeal.domain.recipes import Recipe
from prepmeal.services import diets
from prepmeal.services.seasons import current_season, filter_by_season
from prepmeal.services.selection import MealSlotSelector

MONTHS_PER_YEAR = 12
SLOTS_PER_DAY = len(MealSlot)

_logger = logging.getLogger(__name__)


def new_plan_id() -> str:
    """Return a fresh plan identifier."""
    return f"plan_{uuid4().hex}"


def add_months(day: date, months: int) -> date:
    """Add calendar months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // MONTHS_PER_YEAR
    month = month_index % MONTHS_PER_YEAR + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def period_end(start: date, period: Period) -> date:
    """Return the last planned date for a period starting on a date."""
    if period == Period.MONTH:
        return add_months(start, 1)
    if period == Period.YEAR:
        return add_months(start, MONTHS_PER_YEAR)
    return start + timedelta(days=7)


def apply_hard_constraints(
    recipes: Iterable[Recipe], preferences: Preferences
) -> list[Recipe]:
    """Drop recipes with excluded allergens or over the time limit, once per id."""
    kept: dict[str, Recipe] = {}
    for recipe in recipes:
        if recipe.allergens & preferences.excluded_allergens:
            continue
        if (
            preferences.max_total_time is not None
            and recipe.total_time > preferences.max_total_time
        ):
            continue
        kept.setdefault(recipe.id, recipe)
    return list(kept.values())


def remove_selected(pool: Sequence[Recipe], selected: Iterable[Recipe]) -> list[Recipe]:
    """Drop the selected recipes from the rolling pool."""
    selected_ids = {recipe.id for recipe in selected}
    return [recipe for recipe in pool if recipe.id not in selected_ids]


def top_up(pool: Sequence[Recipe], catalog: Sequence[Recipe]) -> list[Recipe]:
    """Extend the pool with catalog recipes it does not already hold."""
    present = {recipe.id for recipe in pool}
    return [*pool, *(recipe for recipe in catalog if recipe.id not in present)]


@dataclass
class PlanAssembler:
    """Builds a meal plan day by day from a candidate catalog."""

    selector: MealSlotSelector
    today: Callable[[], date] = date.today
    id_factory: Callable[[], str] = new_plan_id

    def generate(
        self, preferences: Preferences, candidates: Sequence[Recipe]
    ) -> MealPlan:
        """Assemble a new plan starting today."""
        start = self.today()
        end = period_end(start, preferences.period)
        days = self.build_days(start, end, preferences, candidates)
        return MealPlan(
            id=self.id_factory(),
            start_date=start,
            end_date=end,
            days=tuple(days),
            preferences=preferences,
        )

    def regenerate(
        self, plan: MealPlan, preferences: Preferences, candidates: Sequence[Recipe]
    ) -> MealPlan:
        """Rebuild every day of an existing plan from its start date."""
        end = period_end(plan.start_date, preferences.period)
        days = self.build_days(plan.start_date, end, preferences, candidates)
        return MealPlan(
            id=plan.id,
            start_date=plan.start_date,
            end_date=end,
            days=tuple(days),
            preferences=preferences,
        )

    def build_days(
        self,
        start: date,
        end: date,
        preferences: Preferences,
        candidates: Sequence[Recipe],
    ) -> list[MealPlanDay]:
        """Fill every date from start to end inclusive.

        The rolling pool begins as the diet-filtered catalog. Whenever it can
        no longer fill a whole day it is topped up from the catalog without
        the diet filter; allergen and time limits still apply.
        """
        catalog = apply_hard_constraints(list(candidates), preferences)
        pool = diets.filter_recipes(catalog, preferences.diet_type)
        days: list[MealPlanDay] = []
        current = start
        while current <= end:
            if len(pool) < SLOTS_PER_DAY:
                _logger.info(
                    "Refilling recipe pool: remaining=%s catalog=%s day=%s",
                    len(pool),
                    len(catalog),
                    current,
                )
                pool = top_up(pool, catalog)
            day_pool = filter_by_season(pool, current_season(current))
            meals = self.selector.select_day(
                current, day_pool, preferences.selected_ingredients
            )
            days.append(MealPlanDay(day=current, meals=meals))
            pool = remove_selected(pool, meals.values())
            current += timedelta(days=1)
        return days
