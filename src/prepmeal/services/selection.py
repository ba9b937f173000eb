"""Per-day meal slot selection."""

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from prepmeal.domain.errors import NoCandidateRecipe
from prepmeal.domain.preferences import MealSlot
from prepmeal.domain.recipes import Recipe

BREAKFAST_CATEGORIES = frozenset({"breakfast", "petit_dejeuner"})
MAIN_DISH_CATEGORIES = frozenset({"main-dish", "plat_principal"})
LIGHT_BREAKFAST_MAX_CALORIES = 300
LIGHT_DINNER_MAX_CALORIES = 400
QUICK_BREAKFAST_MAX_MINUTES = 15
FRIDAY = 4


class SelectionStrategy(Protocol):
    """Chooses one recipe among the surviving candidates of a slot."""

    def pick(self, candidates: Sequence[Recipe]) -> Recipe:
        """Return one of the candidates."""


@dataclass
class RandomSelection(SelectionStrategy):
    """Uniform random choice."""

    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def seeded(cls, seed: int | None) -> "RandomSelection":
        """Create a strategy whose choices repeat for a given seed."""
        return cls(rng=random.Random(seed))  # noqa: S311

    def pick(self, candidates: Sequence[Recipe]) -> Recipe:
        """Return a uniformly chosen candidate."""
        return self.rng.choice(list(candidates))


def ingredient_match_score(recipe: Recipe, wanted: Sequence[str]) -> int:
    """Count ingredient name matches against preferred ingredient names."""
    keywords = [value.strip().lower() for value in wanted if value.strip()]
    return sum(
        1
        for ingredient in recipe.ingredients
        for keyword in keywords
        if ingredient.matches_any([keyword])
    )


def sort_by_preference(pool: Sequence[Recipe], wanted: Sequence[str]) -> list[Recipe]:
    """Order recipes by preferred ingredient matches, best first, never dropping any."""
    if not wanted:
        return list(pool)
    return sorted(
        pool,
        key=lambda recipe: ingredient_match_score(recipe, wanted),
        reverse=True,
    )


@dataclass
class MealSlotSelector:
    """Fills the breakfast, lunch and dinner slots of one day."""

    strategy: SelectionStrategy

    def select_day(
        self,
        day: date,
        candidates: Sequence[Recipe],
        selected_ingredients: Sequence[str] = (),
    ) -> dict[str, Recipe]:
        """Pick one distinct recipe per slot for a day."""
        pool = sort_by_preference(candidates, selected_ingredients)
        breakfast = self.select_breakfast(pool, day)
        lunch = self.select_lunch(pool, day, breakfast)
        dinner = self.select_dinner(pool, day, breakfast, lunch)
        return {
            MealSlot.BREAKFAST.value: breakfast,
            MealSlot.LUNCH.value: lunch,
            MealSlot.DINNER.value: dinner,
        }

    def select_breakfast(self, pool: Sequence[Recipe], day: date) -> Recipe:
        """Breakfast dishes first, then light dishes, then anything."""
        candidates = [
            recipe
            for recipe in pool
            if recipe.category in BREAKFAST_CATEGORIES
            or BREAKFAST_CATEGORIES & recipe.tags
        ]
        if not candidates:
            candidates = [
                recipe
                for recipe in pool
                if recipe.nutrition.calories <= LIGHT_BREAKFAST_MAX_CALORIES
            ]
        if not candidates:
            candidates = list(pool)
        if day.weekday() <= FRIDAY:
            quick = [
                recipe
                for recipe in candidates
                if recipe.total_time <= QUICK_BREAKFAST_MAX_MINUTES
            ]
            candidates = quick or candidates
        return self._pick(candidates, MealSlot.BREAKFAST, day)

    def select_lunch(
        self, pool: Sequence[Recipe], day: date, breakfast: Recipe
    ) -> Recipe:
        """Main dishes first, never repeating breakfast."""
        remaining = [recipe for recipe in pool if recipe.id != breakfast.id]
        main_dishes = [
            recipe for recipe in remaining if recipe.category in MAIN_DISH_CATEGORIES
        ]
        return self._pick(main_dishes or remaining, MealSlot.LUNCH, day)

    def select_dinner(
        self, pool: Sequence[Recipe], day: date, breakfast: Recipe, lunch: Recipe
    ) -> Recipe:
        """Light dishes first, never repeating breakfast or lunch."""
        taken = {breakfast.id, lunch.id}
        remaining = [recipe for recipe in pool if recipe.id not in taken]
        light = [
            recipe
            for recipe in remaining
            if recipe.nutrition.calories <= LIGHT_DINNER_MAX_CALORIES
        ]
        return self._pick(light or remaining, MealSlot.DINNER, day)

    def _pick(self, candidates: list[Recipe], slot: MealSlot, day: date) -> Recipe:
        if not candidates:
            raise NoCandidateRecipe(slot.value, day)
        return self.strategy.pick(candidates)
