"""Meal plan application service."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from prepmeal.domain.errors import PlanNotFound
from prepmeal.domain.plans import MealPlan, NutritionSummary, ShoppingList
from prepmeal.domain.preferences import Preferences, UnitSystem
from prepmeal.domain.recipes import Recipe
from prepmeal.services.nutrition import NutritionAggregator
from prepmeal.services.planning import PlanAssembler
from prepmeal.services.preferences import parse_preferences
from prepmeal.services.shopping import ShoppingListBuilder

_logger = logging.getLogger(__name__)


class RecipeCatalog(Protocol):
    """Source of candidate recipes."""

    def list_recipes(
        self,
        excluded_allergens: frozenset[str] = frozenset(),
        max_total_time: int | None = None,
    ) -> list[Recipe]:
        """Return recipes free of the allergens and within the time limit."""


class MealPlanRepository(Protocol):
    """Persistence interface for generated meal plans."""

    def save(self, owner_id: str, plan: MealPlan) -> MealPlan:
        """Store a new plan and return it."""

    def get(self, owner_id: str, plan_id: str) -> MealPlan | None:
        """Return an owner's plan by id, if present."""

    def list_for_owner(self, owner_id: str) -> list[MealPlan]:
        """Return an owner's plans, most recent first."""

    def update(self, owner_id: str, plan: MealPlan) -> MealPlan:
        """Replace a stored plan and return it."""

    def delete(self, owner_id: str, plan_id: str) -> bool:
        """Delete an owner's plan, returning False when it does not exist."""


@dataclass
class MealPlanService:
    """Application service for meal plan generation and storage."""

    catalog: RecipeCatalog
    repository: MealPlanRepository
    assembler: PlanAssembler
    aggregator: NutritionAggregator = field(default_factory=NutritionAggregator)
    shopping_builder: ShoppingListBuilder = field(default_factory=ShoppingListBuilder)
    defaults: dict[str, object] = field(default_factory=dict)

    def generate_plan(
        self,
        preferences: Preferences | Mapping[str, object],
        candidates: Sequence[Recipe],
    ) -> MealPlan:
        """Validate preferences, then assemble a plan from the candidates."""
        resolved = parse_preferences(preferences, self.defaults)
        plan = self.assembler.generate(resolved, list(candidates))
        _logger.info(
            "Generated meal plan: id=%s period=%s diet=%s days=%s",
            plan.id,
            resolved.period,
            resolved.diet_type,
            len(plan.days),
        )
        return plan

    def nutritional_balance(self, plan: MealPlan) -> NutritionSummary:
        """Return the nutrition totals and daily averages of a plan."""
        return self.aggregator.summarize(plan)

    def shopping_list(
        self,
        plan: MealPlan,
        unit_system: UnitSystem | str | None = None,
        locale: str | None = None,
    ) -> ShoppingList:
        """Return the consolidated shopping list of a plan."""
        return self.shopping_builder.build(
            plan, unit_system or plan.preferences.unit_system, locale
        )

    def create_plan(
        self, owner_id: str, raw_preferences: Mapping[str, object]
    ) -> MealPlan:
        """Generate a plan from catalog recipes and store it for an owner."""
        resolved = parse_preferences(raw_preferences, self.defaults)
        plan = self.generate_plan(resolved, self._candidates(resolved))
        return self.repository.save(owner_id, plan)

    def get_plan(self, owner_id: str, plan_id: str) -> MealPlan | None:
        """Return an owner's plan by id, if present."""
        return self.repository.get(owner_id, plan_id)

    def list_plans(self, owner_id: str) -> list[MealPlan]:
        """Return every plan of an owner."""
        return self.repository.list_for_owner(owner_id)

    def update_plan(
        self, owner_id: str, plan_id: str, raw_preferences: Mapping[str, object]
    ) -> MealPlan:
        """Regenerate every day of a stored plan with new preferences."""
        existing = self.repository.get(owner_id, plan_id)
        if existing is None:
            raise PlanNotFound(plan_id)
        resolved = parse_preferences(
            raw_preferences, {**self.defaults, **existing.preferences.to_record()}
        )
        plan = self.assembler.regenerate(existing, resolved, self._candidates(resolved))
        _logger.info("Updated meal plan: id=%s days=%s", plan.id, len(plan.days))
        return self.repository.update(owner_id, plan)

    def delete_plan(self, owner_id: str, plan_id: str) -> None:
        """Delete a stored plan."""
        if not self.repository.delete(owner_id, plan_id):
            raise PlanNotFound(plan_id)
        _logger.info("Deleted meal plan: id=%s", plan_id)

    def _candidates(self, preferences: Preferences) -> list[Recipe]:
        return self.catalog.list_recipes(
            excluded_allergens=preferences.excluded_allergens,
            max_total_time=preferences.max_total_time,
        )
