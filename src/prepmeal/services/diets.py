"""Diet type classification of recipes."""

from collections.abc import Callable, Iterable

from prepmeal.domain.preferences import LEGACY_DIET_TYPES, DietType
from prepmeal.domain.recipes import Recipe

BULKING_MIN_PROTEIN = 20
BULKING_MIN_CALORIES = 400
CUTTING_MAX_CALORIES = 300
CUTTING_MIN_PROTEIN = 15
ANTI_CHOLESTEROL_MAX_FAT = 15
SIMPLE_MAX_INGREDIENTS = 5
SIMPLE_MAX_MINUTES = 30
KETOGENIC_MAX_CARB_PERCENT = 10
MEDITERRANEAN_MIN_MATCHES = 2

PALEO_EXCLUDED = (
    "wheat",
    "flour",
    "milk",
    "sugar",
    "lentil",
    "chickpea",
    "bean",
    "legume",
    "blé",
    "farine",
    "lait",
    "sucre",
    "lentille",
    "pois chiche",
    "haricot",
    "légumineuse",
    "trigo",
    "harina",
    "leche",
    "azúcar",
    "lenteja",
    "garbanzo",
    "legumbre",
    "weizen",
    "mehl",
    "milch",
    "zucker",
    "linse",
    "kichererbse",
    "bohne",
    "hülsenfrüchte",
)

MEDITERRANEAN_INCLUDED = (
    "olive oil",
    "olive",
    "tomato",
    "fish",
    "vegetable",
    "garlic",
    "eggplant",
    "zucchini",
    "huile d'olive",
    "tomate",
    "poisson",
    "légume",
    "aubergine",
    "courgette",
    "aceite de oliva",
    "pescado",
    "verdura",
    "ajo",
    "berenjena",
    "olivenöl",
    "fisch",
    "gemüse",
    "knoblauch",
)

_VEGETARIAN_TAGS = frozenset({"vegetarian", "vegetarien", "végétarien"})


def is_bulking(recipe: Recipe) -> bool:
    """High protein, high energy recipes."""
    return (
        recipe.nutrition.protein >= BULKING_MIN_PROTEIN
        and recipe.nutrition.calories >= BULKING_MIN_CALORIES
    )


def is_cutting(recipe: Recipe) -> bool:
    """Low energy recipes that keep protein up."""
    return (
        recipe.nutrition.calories <= CUTTING_MAX_CALORIES
        and recipe.nutrition.protein >= CUTTING_MIN_PROTEIN
    )


def is_anti_cholesterol(recipe: Recipe) -> bool:
    return recipe.nutrition.fat <= ANTI_CHOLESTEROL_MAX_FAT


def is_vegan(recipe: Recipe) -> bool:
    return "vegan" in recipe.dietary_restrictions


def is_vegetarian(recipe: Recipe) -> bool:
    return bool(_VEGETARIAN_TAGS & recipe.dietary_restrictions)


def is_simple(recipe: Recipe) -> bool:
    """Few ingredients and ready in half an hour."""
    return (
        len(recipe.ingredients) <= SIMPLE_MAX_INGREDIENTS
        and recipe.total_time <= SIMPLE_MAX_MINUTES
    )


def carb_energy_percent(recipe: Recipe) -> float | None:
    """Share of calories coming from carbohydrates, if calories are known."""
    calories = recipe.nutrition.calories
    if calories <= 0:
        return None
    return recipe.nutrition.carbs * 4 / calories * 100


def is_ketogenic(recipe: Recipe) -> bool:
    """At most 10% of calories from carbohydrates."""
    percent = carb_energy_percent(recipe)
    return percent is not None and percent <= KETOGENIC_MAX_CARB_PERCENT


def is_paleo(recipe: Recipe) -> bool:
    """No grains, dairy, refined sugar or legumes."""
    return not any(
        ingredient.matches_any(PALEO_EXCLUDED) for ingredient in recipe.ingredients
    )


def is_gluten_free(recipe: Recipe) -> bool:
    return "gluten" not in recipe.allergens


def is_mediterranean(recipe: Recipe) -> bool:
    """At least two typical Mediterranean ingredients."""
    matches = sum(
        1
        for ingredient in recipe.ingredients
        if ingredient.matches_any(MEDITERRANEAN_INCLUDED)
    )
    return matches >= MEDITERRANEAN_MIN_MATCHES


def _always(_recipe: Recipe) -> bool:
    return True


_RULES: dict[DietType, Callable[[Recipe], bool]] = {
    DietType.BALANCED: _always,
    DietType.BULKING: is_bulking,
    DietType.CUTTING: is_cutting,
    DietType.ANTI_CHOLESTEROL: is_anti_cholesterol,
    DietType.VEGAN: is_vegan,
    DietType.VEGETARIAN: is_vegetarian,
    DietType.SIMPLE: is_simple,
    DietType.KETOGENIC: is_ketogenic,
    DietType.PALEO: is_paleo,
    DietType.GLUTEN_FREE: is_gluten_free,
    DietType.MEDITERRANEAN: is_mediterranean,
}


def matches(recipe: Recipe, diet_type: DietType | str) -> bool:
    """Return True when a recipe fits a diet type; unknown types accept all."""
    try:
        rule = _RULES[DietType(LEGACY_DIET_TYPES.get(diet_type, diet_type))]
    except ValueError:
        return True
    return rule(recipe)


def filter_recipes(
    recipes: Iterable[Recipe], diet_type: DietType | str
) -> list[Recipe]:
    """Keep the recipes that fit a diet type."""
    return [recipe for recipe in recipes if matches(recipe, diet_type)]
