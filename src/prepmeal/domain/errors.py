"""Errors raised by the meal planning core."""


class PrepMealError(Exception):
    """Base class for planner errors."""


class InvalidPreferences(PrepMealError, ValueError):
    """Raised when planning preferences fail validation."""


class NoCandidateRecipe(PrepMealError):
    """Raised when a meal slot has no recipe left after every fallback."""

    def __init__(self, slot: str, day: object | None = None) -> None:
        self.slot = slot
        self.day = day
        where = f" on {day}" if day is not None else ""
        super().__init__(f"No candidate recipe for {slot}{where}")


class UnsupportedConversion(PrepMealError, ValueError):
    """Raised when two units cannot be converted into each other."""

    def __init__(self, from_unit: str, to_unit: str) -> None:
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(f"Unsupported conversion from {from_unit} to {to_unit}")


class PlanNotFound(PrepMealError, LookupError):
    """Raised when a stored meal plan does not exist for its owner."""

    def __init__(self, plan_id: str) -> None:
        self.plan_id = plan_id
        super().__init__(f"Meal plan {plan_id} not found")
