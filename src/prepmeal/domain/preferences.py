"""Planning preference models."""

from dataclasses import dataclass
from enum import StrEnum

from prepmeal.domain.errors import InvalidPreferences


class Period(StrEnum):
    """Length of a generated meal plan."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class DietType(StrEnum):
    """Dietary patterns a plan can be restricted to."""

    BALANCED = "balanced"
    BULKING = "bulking"
    CUTTING = "cutting"
    ANTI_CHOLESTEROL = "anti-cholesterol"
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    SIMPLE = "simple"
    KETOGENIC = "ketogenic"
    PALEO = "paleo"
    GLUTEN_FREE = "gluten-free"
    MEDITERRANEAN = "mediterranean"


class UnitSystem(StrEnum):
    """Measurement convention for ingredient quantities."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class MealSlot(StrEnum):
    """Daily meal positions, in serving order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


# French identifiers still stored on older plans.
LEGACY_DIET_TYPES = {
    "equilibre": DietType.BALANCED,
    "prise_masse": DietType.BULKING,
    "seche": DietType.CUTTING,
    "anti_cholesterol": DietType.ANTI_CHOLESTEROL,
    "vegetarien": DietType.VEGETARIAN,
    "recettes_simples": DietType.SIMPLE,
    "cetogene": DietType.KETOGENIC,
    "sans_gluten": DietType.GLUTEN_FREE,
    "mediterraneen": DietType.MEDITERRANEAN,
}


@dataclass(frozen=True)
class Preferences:
    """Validated preferences for one plan generation."""

    period: Period = Period.WEEK
    diet_type: DietType = DietType.BALANCED
    excluded_allergens: frozenset[str] = frozenset()
    selected_ingredients: tuple[str, ...] = ()
    max_total_time: int | None = None
    servings: int = 2
    unit_system: UnitSystem = UnitSystem.METRIC
    locale: str = "fr"

    def __post_init__(self) -> None:
        diet = self.diet_type
        if isinstance(diet, str):
            diet = LEGACY_DIET_TYPES.get(diet, diet)
        try:
            object.__setattr__(self, "period", Period(self.period))
            object.__setattr__(self, "diet_type", DietType(diet))
            object.__setattr__(self, "unit_system", UnitSystem(self.unit_system))
        except ValueError as exc:
            raise InvalidPreferences(f"Invalid preferences: {exc}") from exc
        if self.servings < 1:
            raise InvalidPreferences("Invalid preferences: servings")
        object.__setattr__(
            self, "excluded_allergens", frozenset(self.excluded_allergens)
        )
        object.__setattr__(
            self, "selected_ingredients", tuple(self.selected_ingredients)
        )

    def to_record(self) -> dict[str, object]:
        """Return a JSON-compatible snapshot of the preferences."""
        return {
            "period": self.period.value,
            "diet_type": self.diet_type.value,
            "allergens": sorted(self.excluded_allergens),
            "selected_ingredients": list(self.selected_ingredients),
            "max_prep_time": self.max_total_time,
            "servings": self.servings,
            "unit_system": self.unit_system.value,
            "locale": self.locale,
        }
