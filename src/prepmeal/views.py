"""Locale-aware plain dict views of plans, recipes and shopping lists."""

from prepmeal.domain.plans import (
    MealPlan,
    MealPlanDay,
    NutritionSummary,
    ShoppingList,
)
from prepmeal.domain.preferences import UnitSystem
from prepmeal.domain.recipes import (
    DEFAULT_LOCALE,
    Ingredient,
    Nutrition,
    Recipe,
    localized,
)
from prepmeal.services.units import UnitConverter

_WEEKDAYS = {
    "fr": ("Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"),
    "en": (
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    ),
    "es": ("Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"),
    "de": (
        "Montag",
        "Dienstag",
        "Mittwoch",
        "Donnerstag",
        "Freitag",
        "Samstag",
        "Sonntag",
    ),
}

_DEFAULT_CONVERTER = UnitConverter()


def weekday_name(day: MealPlanDay, locale: str = DEFAULT_LOCALE) -> str:
    """Return the localized weekday name of a plan day."""
    names = _WEEKDAYS.get(locale, _WEEKDAYS["en"])
    return names[day.day.weekday()]


def nutrition_values(nutrition: Nutrition, decimals: int = 1) -> dict[str, float]:
    """Return a nutrition vector as rounded plain values."""
    return {
        "calories": round(nutrition.calories, decimals),
        "protein": round(nutrition.protein, decimals),
        "carbs": round(nutrition.carbs, decimals),
        "fat": round(nutrition.fat, decimals),
        "fiber": round(nutrition.fiber, decimals),
    }


def ingredient_view(
    ingredient: Ingredient,
    locale: str = DEFAULT_LOCALE,
    unit_system: UnitSystem | str = UnitSystem.METRIC,
    converter: UnitConverter = _DEFAULT_CONVERTER,
) -> dict[str, object]:
    quantity = converter.ingredient_quantity(ingredient, UnitSystem(unit_system))
    return {
        "name": ingredient.name(locale),
        "amount": quantity.amount,
        "unit": quantity.unit,
        "formatted_quantity": converter.format_quantity(quantity, locale),
        "is_seasonal": ingredient.seasonal,
        "seasons": sorted(ingredient.seasons),
    }


def recipe_view(
    recipe: Recipe,
    locale: str = DEFAULT_LOCALE,
    unit_system: UnitSystem | str = UnitSystem.METRIC,
    converter: UnitConverter = _DEFAULT_CONVERTER,
) -> dict[str, object]:
    """Render a recipe with localized texts and formatted quantities."""
    return {
        "id": recipe.id,
        "title": recipe.title_for(locale),
        "description": recipe.description_for(locale),
        "category": recipe.category,
        "seasons": sorted(recipe.seasons),
        "prep_time": recipe.prep_time,
        "cook_time": recipe.cook_time,
        "total_time": recipe.total_time,
        "servings": recipe.servings,
        "difficulty": recipe.difficulty,
        "nutrition": nutrition_values(recipe.nutrition),
        "allergens": sorted(recipe.allergens),
        "dietary_restrictions": sorted(recipe.dietary_restrictions),
        "ingredients": [
            ingredient_view(ingredient, locale, unit_system, converter)
            for ingredient in recipe.ingredients
        ],
        "instructions": [
            {"step": index, "text": localized(step, locale)}
            for index, step in enumerate(recipe.instructions, start=1)
        ],
        "tags": sorted(recipe.tags),
        "image_url": recipe.image_url,
    }


def day_view(
    day: MealPlanDay,
    locale: str = DEFAULT_LOCALE,
    unit_system: UnitSystem | str = UnitSystem.METRIC,
    converter: UnitConverter = _DEFAULT_CONVERTER,
) -> dict[str, object]:
    """Render one plan day."""
    nutrition = day.nutrition
    return {
        "date": day.day.isoformat(),
        "day_of_week": weekday_name(day, locale),
        "is_weekend": day.is_weekend,
        "meals": {
            slot: recipe_view(recipe, locale, unit_system, converter)
            for slot, recipe in day.meals.items()
        },
        "total_prep_time": day.total_time,
        "total_calories": round(nutrition.calories, 1),
        "nutrition": nutrition_values(nutrition),
        "allergens": day.allergens,
        "dietary_restrictions": day.dietary_restrictions,
    }


def plan_view(
    plan: MealPlan,
    locale: str | None = None,
    converter: UnitConverter = _DEFAULT_CONVERTER,
) -> dict[str, object]:
    """Render a whole plan in the plan's unit system."""
    language = locale or plan.preferences.locale
    system = plan.preferences.unit_system
    return {
        "id": plan.id,
        "start_date": plan.start_date.isoformat(),
        "end_date": plan.end_date.isoformat(),
        "duration": plan.duration,
        "days": [day_view(day, language, system, converter) for day in plan.days],
        "preferences": plan.preferences.to_record(),
        "total_recipes": plan.total_recipes,
        "unique_recipes_count": len(plan.unique_recipes()),
    }


def nutrition_view(summary: NutritionSummary) -> dict[str, object]:
    """Render a nutrition summary with averages rounded to one decimal."""
    return {
        "totals": nutrition_values(summary.totals),
        "per_day_average": nutrition_values(summary.per_day_average),
        "day_count": summary.day_count,
        "meal_count": summary.meal_count,
    }


def shopping_list_view(
    shopping_list: ShoppingList,
    locale: str = DEFAULT_LOCALE,
    converter: UnitConverter = _DEFAULT_CONVERTER,
) -> dict[str, object]:
    """Render a shopping list grouped by aisle."""
    return {
        "unit_system": shopping_list.unit_system.value,
        "categories": {
            aisle: [
                {
                    "name": item.name,
                    "amount": round(item.quantity.amount, converter.decimals),
                    "unit": converter.translate_unit(item.quantity.unit, locale),
                    "formatted_quantity": converter.format_quantity(
                        item.quantity, locale
                    ),
                    "is_seasonal": item.is_seasonal,
                }
                for item in items
            ]
            for aisle, items in shopping_list.categories.items()
        },
    }
