"""Row mapping between stored records and domain models."""

import json
from collections.abc import Mapping
from datetime import date

from prepmeal.domain.plans import MealPlan, MealPlanDay
from prepmeal.domain.preferences import Preferences
from prepmeal.domain.recipes import Ingredient, Nutrition, Recipe
from prepmeal.services.preferences import parse_preferences


def _json(value: object, default: object) -> object:
    """Decode JSON text columns, passing already decoded values through."""
    if value is None:
        return default
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return default
        return default if decoded is None else decoded
    return value


def _texts(value: object) -> dict[str, str]:
    decoded = _json(value, {})
    if isinstance(decoded, str):
        return {"fr": decoded}
    if not isinstance(decoded, Mapping):
        return {}
    return {str(key): str(text) for key, text in decoded.items() if text is not None}


def _strings(value: object) -> frozenset[str]:
    decoded = _json(value, [])
    if isinstance(decoded, str):
        return frozenset({decoded})
    if not isinstance(decoded, list | tuple | set | frozenset):
        return frozenset()
    return frozenset(str(item) for item in decoded)


def _minutes(value: object) -> int:
    try:
        minutes = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(minutes, 0)


def _step_texts(step: object) -> dict[str, str]:
    if isinstance(step, Mapping) and "text" in step:
        return _texts(step["text"])
    return _texts(step)


def ingredient_from_record(row: Mapping[str, object]) -> Ingredient:
    """Parse an ingredient entry of a recipe row."""
    quantities = _json(row.get("quantities", row.get("quantity")), {})
    return Ingredient(
        names=_texts(row.get("names", row.get("name"))),
        quantities=quantities if isinstance(quantities, Mapping) else {},
        seasonal=bool(row.get("seasonal", False)),
        seasons=_strings(row.get("seasons", row.get("season"))),
    )


def ingredient_to_record(ingredient: Ingredient) -> dict[str, object]:
    """Serialize an ingredient into a JSON-compatible mapping."""
    return {
        "names": dict(ingredient.names),
        "quantities": {
            system: {"amount": quantity.amount, "unit": quantity.unit}
            for system, quantity in ingredient.quantities.items()
        },
        "seasonal": ingredient.seasonal,
        "seasons": sorted(ingredient.seasons),
    }


def recipe_from_record(row: Mapping[str, object]) -> Recipe:
    """Parse a recipe row into a domain model."""
    ingredients = _json(row.get("ingredients"), [])
    instructions = _json(row.get("instructions"), [])
    nutrition = _json(row.get("nutrition"), {})
    return Recipe(
        id=str(row["id"]),
        title=_texts(row.get("title")),
        description=_texts(row.get("description")),
        category=str(row.get("category") or "balanced"),
        seasons=_strings(row.get("seasons", row.get("season"))),
        prep_time=_minutes(row.get("prep_time")),
        cook_time=_minutes(row.get("cook_time")),
        servings=max(_minutes(row.get("servings")), 1),
        difficulty=str(row.get("difficulty") or "easy"),
        nutrition=Nutrition.from_mapping(
            nutrition if isinstance(nutrition, Mapping) else None
        ),
        allergens=_strings(row.get("allergens")),
        dietary_restrictions=_strings(row.get("dietary_restrictions")),
        ingredients=tuple(
            ingredient_from_record(entry)
            for entry in ingredients
            if isinstance(entry, Mapping)
        ),
        instructions=tuple(_step_texts(step) for step in instructions),
        tags=_strings(row.get("tags")),
        image_url=row.get("image_url"),
    )


def recipe_to_record(recipe: Recipe) -> dict[str, object]:
    """Serialize a recipe into a JSON-compatible mapping."""
    return {
        "id": recipe.id,
        "title": dict(recipe.title),
        "description": dict(recipe.description),
        "category": recipe.category,
        "seasons": sorted(recipe.seasons),
        "prep_time": recipe.prep_time,
        "cook_time": recipe.cook_time,
        "servings": recipe.servings,
        "difficulty": recipe.difficulty,
        "nutrition": {
            "calories": recipe.nutrition.calories,
            "protein": recipe.nutrition.protein,
            "carbs": recipe.nutrition.carbs,
            "fat": recipe.nutrition.fat,
            "fiber": recipe.nutrition.fiber,
        },
        "allergens": sorted(recipe.allergens),
        "dietary_restrictions": sorted(recipe.dietary_restrictions),
        "ingredients": [ingredient_to_record(item) for item in recipe.ingredients],
        "instructions": [
            {"step": index, "text": dict(step)}
            for index, step in enumerate(recipe.instructions, start=1)
        ],
        "tags": sorted(recipe.tags),
        "image_url": recipe.image_url,
    }


def plan_to_record(owner_id: str, plan: MealPlan) -> dict[str, object]:
    """Serialize a meal plan into a storable row."""
    return {
        "id": plan.id,
        "user_id": owner_id,
        "start_date": plan.start_date.isoformat(),
        "end_date": plan.end_date.isoformat(),
        "preferences": plan.preferences.to_record(),
        "days": [
            {
                "date": day.day.isoformat(),
                "meals": {
                    slot: recipe_to_record(recipe) for slot, recipe in day.meals.items()
                },
            }
            for day in plan.days
        ],
    }


def plan_from_record(row: Mapping[str, object]) -> MealPlan:
    """Parse a stored plan row, embedded recipes included."""
    raw_preferences = _json(row.get("preferences"), {})
    preferences = (
        parse_preferences(raw_preferences)
        if isinstance(raw_preferences, Mapping)
        else Preferences()
    )
    days = _json(row.get("days"), [])
    return MealPlan(
        id=str(row["id"]),
        start_date=date.fromisoformat(str(row["start_date"])),
        end_date=date.fromisoformat(str(row["end_date"])),
        days=tuple(
            MealPlanDay(
                day=date.fromisoformat(str(entry["date"])),
                meals={
                    str(slot): recipe_from_record(recipe)
                    for slot, recipe in (entry.get("meals") or {}).items()
                },
            )
            for entry in days
        ),
        preferences=preferences,
    )
