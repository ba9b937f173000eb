"""Tests for the meal plan application service."""

import pytest

from prepmeal.domain.errors import InvalidPreferences, PlanNotFound
from prepmeal.domain.preferences import Period, UnitSystem


def test_generate_plan_from_raw_payload(meal_plan_service, recipes) -> None:
    plan = meal_plan_service.generate_plan(
        {"period": "week", "diet_type": "balanced"}, recipes
    )

    assert len(plan.days) == 8
    assert plan.preferences.period == Period.WEEK


def test_generate_plan_rejects_unknown_period(meal_plan_service, recipes) -> None:
    with pytest.raises(InvalidPreferences):
        meal_plan_service.generate_plan({"period": "fortnight"}, recipes)


def test_nutritional_balance_and_shopping_list(meal_plan_service, recipes) -> None:
    plan = meal_plan_service.generate_plan({"unit_system": "imperial"}, recipes)

    summary = meal_plan_service.nutritional_balance(plan)
    shopping = meal_plan_service.shopping_list(plan)
    metric = meal_plan_service.shopping_list(plan, UnitSystem.METRIC)

    assert summary.day_count == 8
    assert summary.meal_count == 24
    assert shopping.unit_system == UnitSystem.IMPERIAL
    assert metric.unit_system == UnitSystem.METRIC


def test_create_plan_uses_catalog_filters(
    meal_plan_service, catalog, plan_repository
) -> None:
    plan = meal_plan_service.create_plan(
        "owner-1", {"allergens": ["gluten"], "max_prep_time": 45}
    )

    assert catalog.calls == [(frozenset({"gluten"}), 45)]
    assert plan_repository.get("owner-1", plan.id) == plan
    assert all("gluten" not in day.allergens for day in plan.days)


def test_create_plan_validates_before_any_work(
    meal_plan_service, catalog, plan_repository
) -> None:
    with pytest.raises(InvalidPreferences):
        meal_plan_service.create_plan("owner-1", {"period": "fortnight"})

    assert catalog.calls == []
    assert plan_repository.plans == {}


def test_service_defaults_apply_to_missing_values(meal_plan_service, recipes) -> None:
    meal_plan_service.defaults = {"locale": "en", "unit_system": "imperial"}

    plan = meal_plan_service.generate_plan({}, recipes)

    assert plan.preferences.locale == "en"
    assert plan.preferences.unit_system == UnitSystem.IMPERIAL


def test_get_and_list_plans(meal_plan_service) -> None:
    first = meal_plan_service.create_plan("owner-1", {})
    meal_plan_service.create_plan("owner-2", {})

    assert meal_plan_service.get_plan("owner-1", first.id) == first
    assert meal_plan_service.get_plan("owner-2", first.id) is None
    assert meal_plan_service.list_plans("owner-1") == [first]


def test_update_plan_regenerates_days(meal_plan_service, plan_repository) -> None:
    plan = meal_plan_service.create_plan("owner-1", {"locale": "en"})

    updated = meal_plan_service.update_plan("owner-1", plan.id, {"period": "month"})

    assert updated.id == plan.id
    assert updated.start_date == plan.start_date
    assert len(updated.days) == 32
    assert updated.preferences.locale == "en"
    assert plan_repository.get("owner-1", plan.id) == updated


def test_update_unknown_plan_raises(meal_plan_service) -> None:
    with pytest.raises(PlanNotFound):
        meal_plan_service.update_plan("owner-1", "plan_missing", {})


def test_delete_plan(meal_plan_service) -> None:
    plan = meal_plan_service.create_plan("owner-1", {})

    meal_plan_service.delete_plan("owner-1", plan.id)

    assert meal_plan_service.get_plan("owner-1", plan.id) is None
    with pytest.raises(PlanNotFound):
        meal_plan_service.delete_plan("owner-1", plan.id)
