"""Validation of raw planning preferences."""

from collections.abc import Mapping
from dataclasses import asdict

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from prepmeal.domain.errors import InvalidPreferences
from prepmeal.domain.preferences import (
    LEGACY_DIET_TYPES,
    DietType,
    Period,
    Preferences,
    UnitSystem,
)


class PreferencesPayload(BaseModel):
    """Raw preference payload as submitted by a caller."""

    model_config = ConfigDict(extra="ignore")

    period: Period = Period.WEEK
    diet_type: DietType = DietType.BALANCED
    excluded_allergens: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("excluded_allergens", "allergens"),
    )
    selected_ingredients: list[str] = Field(default_factory=list)
    max_total_time: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("max_total_time", "max_prep_time"),
    )
    servings: int = Field(default=2, ge=1)
    unit_system: UnitSystem = UnitSystem.METRIC
    locale: str = "fr"

    @field_validator("diet_type", mode="before")
    @classmethod
    def _legacy_diet_type(cls, value: object) -> object:
        if isinstance(value, str):
            return LEGACY_DIET_TYPES.get(value, value)
        return value

    @field_validator("max_total_time", mode="before")
    @classmethod
    def _blank_time(cls, value: object) -> object:
        if value in ("", 0):
            return None
        return value

    def to_preferences(self) -> Preferences:
        """Convert the payload into the domain record."""
        return Preferences(
            period=self.period,
            diet_type=self.diet_type,
            excluded_allergens=frozenset(
                value.strip() for value in self.excluded_allergens if value.strip()
            ),
            selected_ingredients=tuple(
                value.strip() for value in self.selected_ingredients if value.strip()
            ),
            max_total_time=self.max_total_time,
            servings=self.servings,
            unit_system=self.unit_system,
            locale=self.locale,
        )


def parse_preferences(
    raw: Mapping[str, object] | Preferences,
    defaults: Mapping[str, object] | None = None,
) -> Preferences:
    """Validate a preference mapping, raising InvalidPreferences on bad input."""
    data = asdict(raw) if isinstance(raw, Preferences) else dict(raw)
    merged = {**(defaults or {}), **data}
    try:
        payload = PreferencesPayload.model_validate(merged)
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise InvalidPreferences(f"Invalid preferences: {fields}") from exc
    return payload.to_preferences()
