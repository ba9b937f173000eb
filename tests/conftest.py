"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

import pytest

from prepmeal.config import Settings
from prepmeal.domain.plans import MealPlan
from prepmeal.domain.recipes import Ingredient, Nutrition, Recipe
from prepmeal.services.meal_plans import (
    MealPlanRepository,
    MealPlanService,
    RecipeCatalog,
)
from prepmeal.services.planning import PlanAssembler
from prepmeal.services.selection import MealSlotSelector, SelectionStrategy

# A Monday in winter.
FIXED_TODAY = date(2024, 1, 15)


def make_ingredient(
    name: str,
    amount: float = 100,
    unit: str = "g",
    *,
    imperial: tuple[float, str] | None = None,
    seasonal: bool = False,
    locale_names: dict[str, str] | None = None,
) -> Ingredient:
    quantities: dict[str, object] = {"metric": {"amount": amount, "unit": unit}}
    if imperial is not None:
        quantities["imperial"] = {"amount": imperial[0], "unit": imperial[1]}
    return Ingredient(
        names={"en": name, **(locale_names or {})},
        quantities=quantities,
        seasonal=seasonal,
    )


def make_recipe(  # noqa: PLR0913
    recipe_id: str,
    *,
    category: str = "main-dish",
    calories: float = 350,
    protein: float = 20,
    carbs: float = 30,
    fat: float = 10,
    fiber: float = 4,
    prep_time: int = 10,
    cook_time: int = 10,
    seasons: Sequence[str] = (),
    allergens: Sequence[str] = (),
    dietary_restrictions: Sequence[str] = (),
    ingredients: Sequence[Ingredient] = (),
    tags: Sequence[str] = (),
) -> Recipe:
    return Recipe(
        id=recipe_id,
        title={"en": f"Recipe {recipe_id}", "fr": f"Recette {recipe_id}"},
        category=category,
        seasons=frozenset(seasons),
        prep_time=prep_time,
        cook_time=cook_time,
        nutrition=Nutrition(
            calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=fiber
        ),
        allergens=frozenset(allergens),
        dietary_restrictions=frozenset(dietary_restrictions),
        ingredients=tuple(ingredients),
        tags=frozenset(tags),
    )


def sample_catalog() -> list[Recipe]:
    """Small catalog able to fill every slot of every day."""
    return [
        make_recipe(
            "porridge",
            category="breakfast",
            calories=250,
            prep_time=5,
            cook_time=5,
            dietary_restrictions=["vegan", "vegetarian"],
            ingredients=[make_ingredient("Oats", 80, "g")],
        ),
        make_recipe(
            "omelette",
            category="breakfast",
            calories=280,
            allergens=["eggs"],
            dietary_restrictions=["vegetarian"],
            ingredients=[make_ingredient("Eggs", 3, "pieces")],
        ),
        make_recipe(
            "chicken-rice",
            calories=600,
            protein=40,
            ingredients=[
                make_ingredient("Chicken", 200, "g"),
                make_ingredient("Rice", 100, "g"),
            ],
        ),
        make_recipe(
            "pasta",
            calories=550,
            allergens=["gluten"],
            dietary_restrictions=["vegetarian"],
            ingredients=[make_ingredient("Pasta", 150, "g")],
        ),
        make_recipe(
            "soup",
            category="light",
            calories=200,
            dietary_restrictions=["vegan", "vegetarian"],
            ingredients=[make_ingredient("Carrot", 300, "g")],
        ),
        make_recipe(
            "salad",
            category="light",
            calories=180,
            dietary_restrictions=["vegan", "vegetarian"],
            ingredients=[make_ingredient("Lettuce", 1, "pieces")],
        ),
    ]


@dataclass
class FirstCandidateSelection(SelectionStrategy):
    """Deterministic strategy that always takes the first survivor."""

    seen: list[list[str]] = field(default_factory=list)

    def pick(self, candidates: Sequence[Recipe]) -> Recipe:
        self.seen.append([recipe.id for recipe in candidates])
        return candidates[0]


@dataclass
class InMemoryRecipeCatalog(RecipeCatalog):
    """In-memory recipe catalog for tests."""

    recipes: list[Recipe] = field(default_factory=list)
    calls: list[tuple[frozenset[str], int | None]] = field(default_factory=list)

    def list_recipes(
        self,
        excluded_allergens: frozenset[str] = frozenset(),
        max_total_time: int | None = None,
    ) -> list[Recipe]:
        self.calls.append((excluded_allergens, max_total_time))
        return [
            recipe
            for recipe in self.recipes
            if not recipe.allergens & excluded_allergens
            and (max_total_time is None or recipe.total_time <= max_total_time)
        ]


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """In-memory meal plan repository for tests."""

    plans: dict[tuple[str, str], MealPlan] = field(default_factory=dict)

    def save(self, owner_id: str, plan: MealPlan) -> MealPlan:
        self.plans[(owner_id, plan.id)] = plan
        return plan

    def get(self, owner_id: str, plan_id: str) -> MealPlan | None:
        return self.plans.get((owner_id, plan_id))

    def list_for_owner(self, owner_id: str) -> list[MealPlan]:
        return [plan for (owner, _), plan in self.plans.items() if owner == owner_id]

    def update(self, owner_id: str, plan: MealPlan) -> MealPlan:
        self.plans[(owner_id, plan.id)] = plan
        return plan

    def delete(self, owner_id: str, plan_id: str) -> bool:
        return self.plans.pop((owner_id, plan_id), None) is not None


def build_assembler(
    strategy: SelectionStrategy | None = None, today: date = FIXED_TODAY
) -> PlanAssembler:
    counter = iter(range(1, 1000))
    return PlanAssembler(
        selector=MealSlotSelector(strategy or FirstCandidateSelection()),
        today=lambda: today,
        id_factory=lambda: f"plan_{next(counter)}",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def recipes() -> list[Recipe]:
    return sample_catalog()


@pytest.fixture
def catalog(recipes: list[Recipe]) -> InMemoryRecipeCatalog:
    return InMemoryRecipeCatalog(recipes)


@pytest.fixture
def plan_repository() -> InMemoryMealPlanRepository:
    return InMemoryMealPlanRepository()


@pytest.fixture
def assembler() -> PlanAssembler:
    return build_assembler()


@pytest.fixture
def meal_plan_service(
    catalog: InMemoryRecipeCatalog,
    plan_repository: InMemoryMealPlanRepository,
    assembler: PlanAssembler,
) -> MealPlanService:
    return MealPlanService(
        catalog=catalog,
        repository=plan_repository,
        assembler=assembler,
    )
