"""Shopping list consolidation."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from prepmeal.domain.plans import MealPlan, ShoppingItem, ShoppingList
from prepmeal.domain.preferences import UnitSystem
from prepmeal.domain.recipes import Ingredient, IngredientQuantity
from prepmeal.services.units import UnitConverter

PRODUCE = "produce"
MEAT_FISH = "meat_fish"
DAIRY = "dairy"
GRAINS = "grains"
SPICES = "spices"
OILS = "oils"
OTHER = "other"
AISLES = (PRODUCE, MEAT_FISH, DAIRY, GRAINS, SPICES, OILS, OTHER)

# Checked in order; the first aisle with a matching keyword wins.
_AISLE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        PRODUCE,
        ("eggplant", "bell pepper", "poivron", "pimiento", "lettuce", "laitue"),
    ),
    (OILS, ("oil", "huile", "aceite", "öl", "butter", "beurre", "margarine", "lard")),
    (
        SPICES,
        (
            "salt", "pepper", "spice", "cumin", "paprika", "cinnamon", "mustard",
            "vinegar", "sauce", "herb", "basil", "thyme", "oregano", "curry",
            "sel", "poivre", "épice", "cannelle", "moutarde", "vinaigre", "herbe",
            "basilic", "thym", "origan", "pimienta", "especia", "comino",
            "salz", "pfeffer", "gewürz", "zimt", "senf", "essig",
        ),
    ),
    (
        DAIRY,
        (
            "milk", "cheese", "yogurt", "yoghurt", "cream", "egg",
            "lait", "fromage", "yaourt", "crème", "oeuf", "œuf",
            "leche", "queso", "yogur", "nata", "huevo",
            "milch", "käse", "joghurt", "sahne", "eier",
        ),
    ),
    (
        MEAT_FISH,
        (
            "chicken", "beef", "pork", "turkey", "bacon", "fish",
            "salmon", "tuna", "cod", "shrimp", "poulet", "boeuf", "bœuf", "porc",
            "agneau", "dinde", "jambon", "poisson", "saumon", "thon", "cabillaud",
            "crevette", "pollo", "ternera", "cerdo", "cordero", "pavo", "pescado",
            "salmón", "atún", "huhn", "rind", "schwein", "lamm", "pute", "fisch",
            "lachs", "thunfisch",
        ),
    ),
    (
        GRAINS,
        (
            "rice", "pasta", "flour", "bread", "oat", "quinoa", "wheat", "potato",
            "noodle", "riz", "pâtes", "farine", "pain", "avoine", "blé",
            "pomme de terre", "arroz", "harina", "avena",
            "patata", "reis", "nudeln", "mehl", "brot", "hafer", "kartoffel",
        ),
    ),
    (
        PRODUCE,
        (
            "tomato", "onion", "garlic", "carrot", "lettuce", "spinach", "pepper",
            "zucchini", "eggplant", "cucumber", "mushroom", "apple", "banana",
            "lemon", "berry", "fruit", "vegetable", "salad", "pumpkin", "leek",
            "tomate", "oignon", "ail", "carotte", "salade", "épinard", "courgette",
            "aubergine", "concombre", "champignon", "pomme", "banane", "citron",
            "fruit", "légume", "potiron", "poireau", "cebolla", "ajo", "zanahoria",
            "lechuga", "espinaca", "manzana", "plátano", "limón", "verdura",
            "zwiebel", "knoblauch", "karotte", "salat", "spinat", "apfel",
            "zitrone", "gemüse", "obst",
        ),
    ),
)  # fmt: skip

_logger = logging.getLogger(__name__)


def categorize(names: Iterable[str]) -> str:
    """Return the store aisle of an ingredient from its names."""
    lowered = [name.lower() for name in names if name]
    for aisle, keywords in _AISLE_KEYWORDS:
        if any(keyword in name for keyword in keywords for name in lowered):
            return aisle
    return OTHER


@dataclass
class _Accumulator:
    name: str
    names: list[str]
    quantity: IngredientQuantity
    seasonal: bool
    seasons: set[str]


@dataclass(frozen=True)
class ShoppingListBuilder:
    """Consolidates plan ingredients into a shopping list."""

    converter: UnitConverter = field(default_factory=UnitConverter)

    def build(
        self,
        plan: MealPlan,
        unit_system: UnitSystem | str,
        locale: str | None = None,
    ) -> ShoppingList:
        """Sum every meal ingredient by name in the requested unit system."""
        system = UnitSystem(unit_system)
        language = locale or plan.preferences.locale
        entries: dict[str, _Accumulator] = {}
        for day in plan.days:
            for recipe in day.meals.values():
                for ingredient in recipe.ingredients:
                    self._add_ingredient(entries, ingredient, system, language)

        grouped: dict[str, list[ShoppingItem]] = {aisle: [] for aisle in AISLES}
        for entry in sorted(entries.values(), key=lambda item: item.name.lower()):
            grouped[categorize([entry.name, *entry.names])].append(
                ShoppingItem(
                    name=entry.name,
                    quantity=entry.quantity,
                    is_seasonal=entry.seasonal,
                    seasons=frozenset(entry.seasons),
                )
            )
        return ShoppingList(
            unit_system=system,
            categories={aisle: items for aisle, items in grouped.items() if items},
        )

    def _add_ingredient(
        self,
        entries: dict[str, _Accumulator],
        ingredient: Ingredient,
        system: UnitSystem,
        locale: str,
    ) -> None:
        name = ingredient.name(locale).strip()
        if not name:
            return
        quantity = self.converter.ingredient_quantity(ingredient, system)
        key = name.lower()
        existing = entries.get(key)
        if existing is None:
            entries[key] = _Accumulator(
                name=name,
                names=list(ingredient.names.values()),
                quantity=quantity,
                seasonal=ingredient.seasonal,
                seasons=set(ingredient.seasons),
            )
            return
        existing.quantity = self._combine(existing.quantity, quantity, name)
        existing.seasonal = existing.seasonal or ingredient.seasonal
        existing.seasons.update(ingredient.seasons)

    def _combine(
        self, first: IngredientQuantity, second: IngredientQuantity, name: str
    ) -> IngredientQuantity:
        if first.unit == second.unit:
            return IngredientQuantity(first.amount + second.amount, first.unit)
        if not first.unit and first.amount == 0:
            return second
        if not second.unit and second.amount == 0:
            return first
        if self.converter.can_convert(second.unit, first.unit):
            converted = self.converter.convert(second.amount, second.unit, first.unit)
            return IngredientQuantity(first.amount + converted, first.unit)
        _logger.warning(
            "Mixed units for %s: %s and %s, summing raw amounts",
            name,
            first.unit,
            second.unit,
        )
        return IngredientQuantity(first.amount + second.amount, first.unit)
