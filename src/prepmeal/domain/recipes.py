"""Recipe domain models."""

import json
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

DEFAULT_LOCALE = "fr"
FALLBACK_LOCALES = ("fr", "en")

_UNIT_ALIASES = {
    "gram": "g",
    "grams": "g",
    "gr": "g",
    "kilogram": "kg",
    "kilograms": "kg",
    "millilitre": "ml",
    "milliliter": "ml",
    "litre": "l",
    "liter": "l",
    "ounce": "oz",
    "ounces": "oz",
    "pound": "lb",
    "pounds": "lb",
    "lbs": "lb",
    "fl oz": "fl_oz",
    "fl. oz": "fl_oz",
    "fluid ounce": "fl_oz",
    "cups": "cup",
    "tasse": "cup",
    "pièces": "pieces",
    "pièce": "pieces",
    "piece": "pieces",
    "°c": "celsius",
    "°f": "fahrenheit",
}

_QUANTITY_TEXT = re.compile(r"^\s*(\d+(?:[.,]\d+)?)\s*(.*?)\s*$")


def canonical_unit(unit: str) -> str:
    """Return the canonical spelling of a unit name."""
    cleaned = unit.strip()
    return _UNIT_ALIASES.get(cleaned.lower(), cleaned)


def localized(texts: Mapping[str, str], locale: str) -> str:
    """Pick a text for a locale, falling back to French, English, then any."""
    for candidate in (locale, *FALLBACK_LOCALES):
        value = texts.get(candidate)
        if value:
            return value
    for value in texts.values():
        if value:
            return value
    return ""


def _to_amount(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        amount = float(value)
    elif isinstance(value, str):
        try:
            amount = float(value.strip().replace(",", "."))
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        return 0.0
    return amount


@dataclass(frozen=True)
class IngredientQuantity:
    """Amount of an ingredient expressed in one unit."""

    amount: float = 0.0
    unit: str = ""

    @property
    def has_unit(self) -> bool:
        """True when the quantity carries a usable unit."""
        return bool(self.unit)

    @classmethod
    def parse(cls, raw: object) -> "IngredientQuantity":
        """Normalize any stored quantity shape, defaulting to zero."""
        if isinstance(raw, IngredientQuantity):
            return raw
        if isinstance(raw, Mapping):
            amount = raw.get("amount", raw.get(0))
            unit = raw.get("unit", raw.get(1))
            return cls(
                amount=_to_amount(amount),
                unit=canonical_unit(unit) if isinstance(unit, str) else "",
            )
        if isinstance(raw, Sequence) and not isinstance(raw, str):
            if len(raw) >= 2:  # noqa: PLR2004
                return cls.parse({"amount": raw[0], "unit": raw[1]})
            return cls()
        if isinstance(raw, str):
            try:
                decoded = json.loads(raw)
            except ValueError:
                decoded = None
            if isinstance(decoded, Mapping):
                return cls.parse(decoded)
            match = _QUANTITY_TEXT.match(raw)
            if match:
                return cls(
                    amount=_to_amount(match.group(1)),
                    unit=canonical_unit(match.group(2)),
                )
        return cls()


@dataclass(frozen=True)
class Ingredient:
    """Ingredient line of a recipe."""

    names: dict[str, str]
    quantities: dict[str, IngredientQuantity] = field(default_factory=dict)
    seasonal: bool = False
    seasons: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        raw = self.quantities
        if isinstance(raw, Mapping) and "amount" in raw:
            raw = {"metric": raw}
        if not isinstance(raw, Mapping):
            raw = {"metric": raw}
        normalized = {
            str(system): IngredientQuantity.parse(value)
            for system, value in raw.items()
        }
        names = self.names
        if isinstance(names, str):
            names = {DEFAULT_LOCALE: names}
        object.__setattr__(self, "names", dict(names))
        object.__setattr__(self, "quantities", normalized)
        object.__setattr__(self, "seasons", frozenset(self.seasons))

    def name(self, locale: str = DEFAULT_LOCALE) -> str:
        """Return the ingredient name for a locale."""
        return localized(self.names, locale)

    def quantity(self, system: str = "metric") -> IngredientQuantity:
        """Return the quantity stored for a system, else the first usable one."""
        for candidate in (system, "metric", "imperial"):
            stored = self.quantities.get(candidate)
            if stored is not None and stored.has_unit:
                return stored
        return IngredientQuantity()

    def matches_any(self, keywords: Sequence[str]) -> bool:
        """Return True when any localized name contains one of the keywords."""
        lowered = [name.lower() for name in self.names.values()]
        return any(keyword in name for keyword in keywords for name in lowered)


@dataclass(frozen=True)
class Nutrition:
    """Macronutrient vector of a recipe serving."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object] | None) -> "Nutrition":
        """Build a nutrition vector from a loosely shaped mapping."""
        data = raw or {}
        return cls(
            calories=_to_amount(data.get("calories")),
            protein=_to_amount(data.get("protein")),
            carbs=_to_amount(data.get("carbs")),
            fat=_to_amount(data.get("fat")),
            fiber=_to_amount(data.get("fiber")),
        )


@dataclass(frozen=True)
class Recipe:
    """Recipe loaded from the catalog."""

    id: str
    title: dict[str, str] = field(default_factory=dict)
    description: dict[str, str] = field(default_factory=dict)
    category: str = "balanced"
    seasons: frozenset[str] = frozenset()
    prep_time: int = 0
    cook_time: int = 0
    servings: int = 2
    difficulty: str = "easy"
    nutrition: Nutrition = field(default_factory=Nutrition)
    allergens: frozenset[str] = frozenset()
    dietary_restrictions: frozenset[str] = frozenset()
    ingredients: tuple[Ingredient, ...] = ()
    instructions: tuple[dict[str, str], ...] = ()
    tags: frozenset[str] = frozenset()
    image_url: str | None = None

    def __post_init__(self) -> None:
        if self.prep_time < 0 or self.cook_time < 0:
            raise ValueError("Recipe times must be non-negative")
        if self.servings < 1:
            raise ValueError("Recipe servings must be positive")
        object.__setattr__(self, "seasons", frozenset(self.seasons))
        object.__setattr__(self, "allergens", frozenset(self.allergens))
        object.__setattr__(
            self, "dietary_restrictions", frozenset(self.dietary_restrictions)
        )
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "ingredients", tuple(self.ingredients))
        object.__setattr__(self, "instructions", tuple(self.instructions))

    @property
    def total_time(self) -> int:
        """Preparation plus cooking time in minutes."""
        return self.prep_time + self.cook_time

    def title_for(self, locale: str = DEFAULT_LOCALE) -> str:
        """Return the recipe title for a locale."""
        return localized(self.title, locale)

    def description_for(self, locale: str = DEFAULT_LOCALE) -> str:
        """Return the recipe description for a locale."""
        return localized(self.description, locale)
