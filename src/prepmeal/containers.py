"""Dependency container wiring for the planner."""

from dataclasses import dataclass

from supabase import create_client

from prepmeal.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from prepmeal.adapters.supabase_recipe_catalog import SupabaseRecipeCatalog
from prepmeal.config import Settings
from prepmeal.services.meal_plans import MealPlanService
from prepmeal.services.nutrition import NutritionAggregator
from prepmeal.services.planning import PlanAssembler
from prepmeal.services.selection import MealSlotSelector, RandomSelection
from prepmeal.services.shopping import ShoppingListBuilder
from prepmeal.services.units import UnitConverter


@dataclass
class AppContainer:
    """Holds planner-wide dependencies."""

    settings: Settings
    recipe_catalog: SupabaseRecipeCatalog
    meal_plan_repository: SupabaseMealPlanRepository
    unit_converter: UnitConverter
    meal_plan_service: MealPlanService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    recipe_catalog = SupabaseRecipeCatalog(
        supabase_client, table=resolved_settings.recipes_table
    )
    meal_plan_repository = SupabaseMealPlanRepository(
        supabase_client, table=resolved_settings.meal_plans_table
    )
    unit_converter = UnitConverter()
    strategy = RandomSelection.seeded(resolved_settings.selection_seed)
    selector = MealSlotSelector(strategy)
    meal_plan_service = MealPlanService(
        catalog=recipe_catalog,
        repository=meal_plan_repository,
        assembler=PlanAssembler(selector),
        aggregator=NutritionAggregator(),
        shopping_builder=ShoppingListBuilder(unit_converter),
        defaults=resolved_settings.preference_defaults(),
    )
    return AppContainer(
        settings=resolved_settings,
        recipe_catalog=recipe_catalog,
        meal_plan_repository=meal_plan_repository,
        unit_converter=unit_converter,
        meal_plan_service=meal_plan_service,
    )
