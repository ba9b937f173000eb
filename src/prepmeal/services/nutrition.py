"""Nutrition aggregation over meal plans."""

from dataclasses import dataclass

from prepmeal.domain.plans import MealPlan, NutritionSummary, total_nutrition
from prepmeal.domain.recipes import Nutrition


@dataclass(frozen=True)
class NutritionAggregator:
    """Sums the nutrition of every meal in a plan."""

    def summarize(self, plan: MealPlan) -> NutritionSummary:
        """Return plan totals and per-day averages, fiber included."""
        meals = [recipe for day in plan.days for recipe in day.meals.values()]
        totals = total_nutrition(meals)
        day_count = len(plan.days)
        if day_count == 0:
            return NutritionSummary(
                totals=totals,
                per_day_average=Nutrition(),
                day_count=0,
                meal_count=len(meals),
            )
        return NutritionSummary(
            totals=totals,
            per_day_average=Nutrition(
                calories=totals.calories / day_count,
                protein=totals.protein / day_count,
                carbs=totals.carbs / day_count,
                fat=totals.fat / day_count,
                fiber=totals.fiber / day_count,
            ),
            day_count=day_count,
            meal_count=len(meals),
        )
