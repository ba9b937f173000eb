"""Tests for preference validation."""

import pytest

from prepmeal.domain.errors import InvalidPreferences
from prepmeal.domain.preferences import DietType, Period, Preferences, UnitSystem
from prepmeal.services.preferences import parse_preferences


def test_defaults_for_empty_payload() -> None:
    assert parse_preferences({}) == Preferences()


def test_full_payload_with_stored_keys() -> None:
    preferences = parse_preferences(
        {
            "period": "month",
            "diet_type": "vegan",
            "allergens": ["gluten", " ", "lactose"],
            "selected_ingredients": ["tomato"],
            "max_prep_time": 30,
            "servings": 4,
            "unit_system": "imperial",
            "locale": "en",
            "title": "ignored",
        }
    )

    assert preferences.period == Period.MONTH
    assert preferences.diet_type == DietType.VEGAN
    assert preferences.excluded_allergens == frozenset({"gluten", "lactose"})
    assert preferences.selected_ingredients == ("tomato",)
    assert preferences.max_total_time == 30
    assert preferences.servings == 4
    assert preferences.unit_system == UnitSystem.IMPERIAL


def test_legacy_diet_identifier() -> None:
    assert parse_preferences({"diet_type": "seche"}).diet_type == DietType.CUTTING


@pytest.mark.parametrize("value", ["", 0, None])
def test_blank_time_limit_means_unlimited(value: object) -> None:
    assert parse_preferences({"max_prep_time": value}).max_total_time is None


@pytest.mark.parametrize(
    "payload",
    [
        {"period": "fortnight"},
        {"diet_type": "carnivore"},
        {"servings": 0},
        {"unit_system": "nautical"},
        {"max_total_time": -5},
    ],
)
def test_invalid_payloads_raise(payload: dict[str, object]) -> None:
    with pytest.raises(InvalidPreferences):
        parse_preferences(payload)


def test_error_names_the_failing_field() -> None:
    with pytest.raises(InvalidPreferences, match="period"):
        parse_preferences({"period": "fortnight"})


def test_defaults_fill_missing_values_only() -> None:
    defaults = {"locale": "de", "unit_system": "imperial"}

    filled = parse_preferences({}, defaults)
    explicit = parse_preferences({"locale": "es"}, defaults)

    assert filled.locale == "de"
    assert filled.unit_system == UnitSystem.IMPERIAL
    assert explicit.locale == "es"


def test_preferences_instance_is_revalidated() -> None:
    stored = Preferences(
        period=Period.YEAR,
        excluded_allergens=frozenset({"gluten"}),
        max_total_time=20,
    )

    assert parse_preferences(stored) == stored


def test_record_round_trip() -> None:
    stored = Preferences(
        diet_type=DietType.PALEO,
        excluded_allergens=frozenset({"fruits_coque"}),
        selected_ingredients=("salmon",),
        max_total_time=45,
    )

    assert parse_preferences(stored.to_record()) == stored


def test_record_rejects_unknown_period() -> None:
    with pytest.raises(InvalidPreferences):
        Preferences(period="fortnight")


def test_record_coerces_plain_strings() -> None:
    preferences = Preferences(
        period="month",
        diet_type="seche",
        unit_system="imperial",
        excluded_allergens=["gluten"],
    )

    assert preferences.period is Period.MONTH
    assert preferences.diet_type is DietType.CUTTING
    assert preferences.unit_system is UnitSystem.IMPERIAL
    assert preferences.excluded_allergens == frozenset({"gluten"})


@pytest.mark.parametrize(
    "overrides",
    [{"diet_type": "carnivore"}, {"unit_system": "nautical"}, {"servings": 0}],
)
def test_record_rejects_invalid_values(overrides: dict[str, object]) -> None:
    with pytest.raises(InvalidPreferences):
        Preferences(**overrides)
