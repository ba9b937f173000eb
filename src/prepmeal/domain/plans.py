"""Meal plan domain models."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType

from prepmeal.domain.preferences import Preferences, UnitSystem
from prepmeal.domain.recipes import IngredientQuantity, Nutrition, Recipe

SATURDAY = 5


def total_nutrition(recipes: Iterable[Recipe]) -> Nutrition:
    """Sum the nutrition vectors of several recipes."""
    total = Nutrition()
    for recipe in recipes:
        total = Nutrition(
            calories=total.calories + recipe.nutrition.calories,
            protein=total.protein + recipe.nutrition.protein,
            carbs=total.carbs + recipe.nutrition.carbs,
            fat=total.fat + recipe.nutrition.fat,
            fiber=total.fiber + recipe.nutrition.fiber,
        )
    return total


@dataclass(frozen=True)
class MealPlanDay:
    """Recipes assigned to the meal slots of one date."""

    day: date
    meals: Mapping[str, Recipe]

    def __post_init__(self) -> None:
        ids = [recipe.id for recipe in self.meals.values()]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Recipe used in two slots on {self.day}")
        object.__setattr__(self, "meals", MappingProxyType(dict(self.meals)))

    def meal(self, slot: str) -> Recipe | None:
        """Return the recipe in a slot, if any."""
        return self.meals.get(slot)

    @property
    def is_weekend(self) -> bool:
        """True on Saturday and Sunday."""
        return self.day.weekday() >= SATURDAY

    @property
    def total_time(self) -> int:
        """Total preparation and cooking minutes for the day."""
        return sum(recipe.total_time for recipe in self.meals.values())

    @property
    def nutrition(self) -> Nutrition:
        """Nutrition of every meal of the day."""
        return total_nutrition(self.meals.values())

    @property
    def allergens(self) -> list[str]:
        """Allergens carried by the day's meals, first seen first."""
        seen: dict[str, None] = {}
        for recipe in self.meals.values():
            seen.update(dict.fromkeys(sorted(recipe.allergens)))
        return list(seen)

    @property
    def dietary_restrictions(self) -> list[str]:
        """Dietary tags carried by the day's meals, first seen first."""
        seen: dict[str, None] = {}
        for recipe in self.meals.values():
            seen.update(dict.fromkeys(sorted(recipe.dietary_restrictions)))
        return list(seen)


@dataclass(frozen=True)
class MealPlan:
    """Generated meal calendar."""

    id: str
    start_date: date
    end_date: date
    days: tuple[MealPlanDay, ...]
    preferences: Preferences

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", tuple(self.days))

    @property
    def duration(self) -> int:
        """Days between the start and end dates."""
        return (self.end_date - self.start_date).days

    @property
    def total_recipes(self) -> int:
        """Number of filled meal slots."""
        return sum(len(entry.meals) for entry in self.days)

    def unique_recipes(self) -> list[Recipe]:
        """Distinct recipes of the plan in first-use order."""
        recipes: dict[str, Recipe] = {}
        for entry in self.days:
            for recipe in entry.meals.values():
                recipes.setdefault(recipe.id, recipe)
        return list(recipes.values())


@dataclass(frozen=True)
class NutritionSummary:
    """Nutrition totals and daily averages of a plan."""

    totals: Nutrition
    per_day_average: Nutrition
    day_count: int
    meal_count: int


@dataclass(frozen=True)
class ShoppingItem:
    """Consolidated ingredient to buy."""

    name: str
    quantity: IngredientQuantity
    is_seasonal: bool
    seasons: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ShoppingList:
    """Ingredients to buy grouped by store aisle."""

    unit_system: UnitSystem
    categories: dict[str, list[ShoppingItem]] = field(default_factory=dict)

    def item(self, name: str) -> ShoppingItem | None:
        """Find an item by name, ignoring case."""
        wanted = name.strip().lower()
        for items in self.categories.values():
            for entry in items:
                if entry.name.lower() == wanted:
                    return entry
        return None
