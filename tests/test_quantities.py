"""Tests for ingredient quantities and recipe models."""

import pytest

from prepmeal.domain.recipes import (
    Ingredient,
    IngredientQuantity,
    Nutrition,
    Recipe,
    canonical_unit,
    localized,
)


def test_parse_plain_text_quantity() -> None:
    assert IngredientQuantity.parse("200 g") == IngredientQuantity(200.0, "g")
    assert IngredientQuantity.parse("1,5 kg") == IngredientQuantity(1.5, "kg")


def test_parse_structured_shapes() -> None:
    assert IngredientQuantity.parse({"amount": "2", "unit": "cups"}) == (
        IngredientQuantity(2.0, "cup")
    )
    assert IngredientQuantity.parse([3, "pièces"]) == IngredientQuantity(3.0, "pieces")
    assert IngredientQuantity.parse('{"amount": 250, "unit": "ml"}') == (
        IngredientQuantity(250.0, "ml")
    )
    existing = IngredientQuantity(1.0, "l")
    assert IngredientQuantity.parse(existing) is existing


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "lots",
        {"amount": float("nan"), "unit": ""},
        [],
        object(),
        {"amount": True},
    ],
)
def test_malformed_quantities_become_zero(raw: object) -> None:
    assert IngredientQuantity.parse(raw) == IngredientQuantity()


def test_negative_amount_is_clamped_to_zero() -> None:
    assert IngredientQuantity.parse({"amount": -4, "unit": "g"}) == (
        IngredientQuantity(0.0, "g")
    )


def test_canonical_unit_aliases() -> None:
    assert canonical_unit("fl oz") == "fl_oz"
    assert canonical_unit(" Grams ") == "g"
    assert canonical_unit("pinch") == "pinch"


def test_localized_fallback_order() -> None:
    assert localized({"fr": "Farine", "en": "Flour"}, "de") == "Farine"
    assert localized({"en": "Flour"}, "es") == "Flour"
    assert localized({"it": "Farina"}, "de") == "Farina"
    assert localized({}, "fr") == ""


def test_ingredient_normalizes_quantities_and_names() -> None:
    ingredient = Ingredient(names="Farine", quantities={"amount": 200, "unit": "g"})

    assert ingredient.name("en") == "Farine"
    assert ingredient.quantity("metric") == IngredientQuantity(200.0, "g")
    assert ingredient.quantity("imperial") == IngredientQuantity(200.0, "g")


def test_ingredient_without_quantity_is_zero() -> None:
    ingredient = Ingredient(names={"en": "Salt"})

    assert ingredient.quantity("imperial") == IngredientQuantity()


def test_ingredient_keyword_match_spans_locales() -> None:
    ingredient = Ingredient(names={"en": "Olive oil", "fr": "Huile d'olive"})

    assert ingredient.matches_any(["huile"])
    assert not ingredient.matches_any(["butter"])


def test_recipe_total_time_and_titles() -> None:
    recipe = Recipe(
        id="r1",
        title={"fr": "Soupe", "en": "Soup"},
        prep_time=15,
        cook_time=25,
        allergens=["gluten"],
    )

    assert recipe.total_time == 40
    assert recipe.title_for("en") == "Soup"
    assert recipe.title_for("de") == "Soupe"
    assert recipe.allergens == frozenset({"gluten"})


def test_recipe_rejects_invalid_values() -> None:
    with pytest.raises(ValueError):
        Recipe(id="r1", prep_time=-1)
    with pytest.raises(ValueError):
        Recipe(id="r1", servings=0)


def test_nutrition_from_loose_mapping() -> None:
    nutrition = Nutrition.from_mapping({"calories": "420", "protein": 30, "fat": None})

    assert nutrition == Nutrition(calories=420.0, protein=30.0)
