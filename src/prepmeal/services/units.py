"""Unit conversion and quantity formatting."""

from dataclasses import dataclass

from prepmeal.domain.errors import UnsupportedConversion
from prepmeal.domain.preferences import UnitSystem
from prepmeal.domain.recipes import Ingredient, IngredientQuantity, canonical_unit

_FACTORS: dict[str, dict[str, dict[str, float]]] = {
    "weight": {
        "g": {"oz": 0.035274, "lb": 0.00220462, "kg": 0.001},
        "kg": {"oz": 35.274, "lb": 2.20462, "g": 1000.0},
        "oz": {"g": 28.3495, "kg": 0.0283495, "lb": 0.0625},
        "lb": {"g": 453.592, "kg": 0.453592, "oz": 16.0},
    },
    "volume": {
        "ml": {"fl_oz": 0.033814, "cup": 0.00422675, "l": 0.001},
        "l": {"fl_oz": 33.814, "cup": 4.22675, "ml": 1000.0},
        "fl_oz": {"ml": 29.5735, "l": 0.0295735, "cup": 0.125},
        "cup": {"ml": 236.588, "l": 0.236588, "fl_oz": 8.0},
    },
}

_TEMPERATURE_UNITS = {"celsius", "fahrenheit"}

# Unit a quantity is converted into when switching to a unit system.
_SYSTEM_TARGETS: dict[UnitSystem, dict[str, str]] = {
    UnitSystem.IMPERIAL: {
        "g": "oz",
        "kg": "lb",
        "ml": "fl_oz",
        "l": "cup",
        "celsius": "fahrenheit",
    },
    UnitSystem.METRIC: {
        "oz": "g",
        "lb": "kg",
        "fl_oz": "ml",
        "cup": "l",
        "fahrenheit": "celsius",
    },
}

_SYSTEM_UNITS: dict[UnitSystem, dict[str, tuple[str, ...]]] = {
    UnitSystem.METRIC: {
        "weight": ("g", "kg"),
        "volume": ("ml", "l"),
        "temperature": ("celsius",),
        "pieces": ("pieces",),
    },
    UnitSystem.IMPERIAL: {
        "weight": ("oz", "lb"),
        "volume": ("fl_oz", "cup"),
        "temperature": ("fahrenheit",),
        "pieces": ("pieces",),
    },
}

_UNIT_NAMES = {
    "fl_oz": {"fr": "fl oz", "en": "fl oz", "es": "fl oz", "de": "fl oz"},
    "cup": {"fr": "tasse", "en": "cup", "es": "taza", "de": "Tasse"},
    "pieces": {"fr": "pièces", "en": "pieces", "es": "piezas", "de": "Stücke"},
    "celsius": {"fr": "°C", "en": "°C", "es": "°C", "de": "°C"},
    "fahrenheit": {"fr": "°F", "en": "°F", "es": "°F", "de": "°F"},
}

# (thousands separator, decimal separator)
_NUMBER_SEPARATORS = {
    "fr": (" ", ","),
    "de": (".", ","),
    "es": (".", ","),
}


@dataclass(frozen=True)
class UnitConverter:
    """Converts quantities between metric and imperial units."""

    decimals: int = 1

    def convert(self, amount: float, from_unit: str, to_unit: str) -> float:
        """Convert an amount between two units."""
        source = canonical_unit(from_unit)
        target = canonical_unit(to_unit)
        if source == target:
            return amount
        if source in _TEMPERATURE_UNITS and target in _TEMPERATURE_UNITS:
            return self.convert_temperature(amount, source, target)
        for factors in _FACTORS.values():
            ratio = factors.get(source, {}).get(target)
            if ratio is not None:
                return amount * ratio
        raise UnsupportedConversion(source, target)

    def convert_temperature(self, amount: float, from_unit: str, to_unit: str) -> float:
        """Convert a temperature between Celsius and Fahrenheit."""
        if from_unit == to_unit:
            return amount
        if from_unit == "celsius" and to_unit == "fahrenheit":
            return amount * 9 / 5 + 32
        if from_unit == "fahrenheit" and to_unit == "celsius":
            return (amount - 32) * 5 / 9
        raise UnsupportedConversion(from_unit, to_unit)

    def can_convert(self, from_unit: str, to_unit: str) -> bool:
        """Return True when a conversion factor exists between the units."""
        source = canonical_unit(from_unit)
        target = canonical_unit(to_unit)
        if source == target:
            return True
        if source in _TEMPERATURE_UNITS and target in _TEMPERATURE_UNITS:
            return True
        return any(target in factors.get(source, {}) for factors in _FACTORS.values())

    def convert_quantity(
        self, quantity: IngredientQuantity, target_system: UnitSystem
    ) -> IngredientQuantity:
        """Express a quantity in a unit system, leaving countable units alone."""
        unit = canonical_unit(quantity.unit)
        target_unit = _SYSTEM_TARGETS[UnitSystem(target_system)].get(unit)
        if target_unit is None:
            return IngredientQuantity(amount=quantity.amount, unit=unit)
        return IngredientQuantity(
            amount=self.convert(quantity.amount, unit, target_unit),
            unit=target_unit,
        )

    def ingredient_quantity(
        self, ingredient: Ingredient, target_system: UnitSystem
    ) -> IngredientQuantity:
        """Return an ingredient quantity in a unit system."""
        system = UnitSystem(target_system)
        stored = ingredient.quantities.get(system.value)
        if stored is not None and stored.has_unit:
            return stored
        return self.convert_quantity(ingredient.quantity(system.value), system)

    def unit_system_of(self, unit: str) -> UnitSystem | None:
        """Return the unit system a unit belongs to, if it is system specific."""
        canonical = canonical_unit(unit)
        metric = any(
            canonical in units
            for kind, units in _SYSTEM_UNITS[UnitSystem.METRIC].items()
            if kind != "pieces"
        )
        if metric:
            return UnitSystem.METRIC
        imperial = any(
            canonical in units
            for kind, units in _SYSTEM_UNITS[UnitSystem.IMPERIAL].items()
            if kind != "pieces"
        )
        return UnitSystem.IMPERIAL if imperial else None

    def format_number(self, value: float, locale: str) -> str:
        """Format a number with locale separators."""
        text = f"{value:,.{self.decimals}f}"
        separators = _NUMBER_SEPARATORS.get(locale)
        if separators is None:
            return text
        thousands, decimal = separators
        return text.replace(",", "\0").replace(".", decimal).replace("\0", thousands)

    def translate_unit(self, unit: str, locale: str) -> str:
        """Return the display name of a unit for a locale."""
        canonical = canonical_unit(unit)
        return _UNIT_NAMES.get(canonical, {}).get(locale, canonical)

    def format_quantity(self, quantity: IngredientQuantity, locale: str) -> str:
        """Render a quantity such as ``1 234,5 g``."""
        amount = self.format_number(quantity.amount, locale)
        unit = self.translate_unit(quantity.unit, locale)
        return f"{amount} {unit}".rstrip()
