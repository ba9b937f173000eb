"""Seasonal calendar and seasonal recipe filtering."""

import logging
from collections.abc import Sequence
from datetime import date

from prepmeal.domain.recipes import Recipe, localized

SPRING = "spring"
SUMMER = "summer"
AUTUMN = "autumn"
WINTER = "winter"
SEASONS = (SPRING, SUMMER, AUTUMN, WINTER)

MIN_SEASONAL_CANDIDATES = 3

_SEASON_ALIASES = {
    "printemps": SPRING,
    "ete": SUMMER,
    "été": SUMMER,
    "automne": AUTUMN,
    "fall": AUTUMN,
    "hiver": WINTER,
}

_logger = logging.getLogger(__name__)

SEASONAL_INGREDIENTS: dict[str, dict[str, dict[str, str]]] = {
    SPRING: {
        "asparagus": {"fr": "Asperges", "en": "Asparagus", "es": "Espárragos", "de": "Spargel"},
        "peas": {"fr": "Petits pois", "en": "Peas", "es": "Guisantes", "de": "Erbsen"},
        "radish": {"fr": "Radis", "en": "Radish", "es": "Rábano", "de": "Rettich"},
        "lettuce": {"fr": "Salade", "en": "Lettuce", "es": "Lechuga", "de": "Salat"},
        "spinach": {"fr": "Épinards", "en": "Spinach", "es": "Espinacas", "de": "Spinat"},
        "strawberry": {"fr": "Fraise", "en": "Strawberry", "es": "Fresa", "de": "Erdbeere"},
        "rhubarb": {"fr": "Rhubarbe", "en": "Rhubarb", "es": "Ruibarbo", "de": "Rhabarber"},
        "cherry": {"fr": "Cerise", "en": "Cherry", "es": "Cereza", "de": "Kirsche"},
    },
    SUMMER: {
        "tomato": {"fr": "Tomate", "en": "Tomato", "es": "Tomate", "de": "Tomate"},
        "zucchini": {"fr": "Courgette", "en": "Zucchini", "es": "Calabacín", "de": "Zucchini"},
        "eggplant": {"fr": "Aubergine", "en": "Eggplant", "es": "Berenjena", "de": "Aubergine"},
        "bell_pepper": {"fr": "Poivron", "en": "Bell pepper", "es": "Pimiento", "de": "Paprika"},
        "cucumber": {"fr": "Concombre", "en": "Cucumber", "es": "Pepino", "de": "Gurke"},
        "green_beans": {"fr": "Haricot vert", "en": "Green beans", "es": "Judías verdes", "de": "Grüne Bohnen"},
        "melon": {"fr": "Melon", "en": "Melon", "es": "Melón", "de": "Melone"},
        "peach": {"fr": "Pêche", "en": "Peach", "es": "Melocotón", "de": "Pfirsich"},
        "apricot": {"fr": "Abricot", "en": "Apricot", "es": "Albaricoque", "de": "Aprikose"},
        "raspberry": {"fr": "Framboise", "en": "Raspberry", "es": "Frambuesa", "de": "Himbeere"},
        "blueberry": {"fr": "Myrtille", "en": "Blueberry", "es": "Arándano", "de": "Heidelbeere"},
        "fig": {"fr": "Figue", "en": "Fig", "es": "Higo", "de": "Feige"},
    },
    AUTUMN: {
        "pumpkin": {"fr": "Potiron", "en": "Pumpkin", "es": "Calabaza", "de": "Kürbis"},
        "mushroom": {"fr": "Champignon", "en": "Mushroom", "es": "Champiñón", "de": "Pilz"},
        "cabbage": {"fr": "Chou", "en": "Cabbage", "es": "Repollo", "de": "Kohl"},
        "broccoli": {"fr": "Brocoli", "en": "Broccoli", "es": "Brócoli", "de": "Brokkoli"},
        "cauliflower": {"fr": "Chou-fleur", "en": "Cauliflower", "es": "Coliflor", "de": "Blumenkohl"},
        "carrot": {"fr": "Carotte", "en": "Carrot", "es": "Zanahoria", "de": "Karotte"},
        "apple": {"fr": "Pomme", "en": "Apple", "es": "Manzana", "de": "Apfel"},
        "pear": {"fr": "Poire", "en": "Pear", "es": "Pera", "de": "Birne"},
        "grape": {"fr": "Raisin", "en": "Grape", "es": "Uva", "de": "Traube"},
        "plum": {"fr": "Prune", "en": "Plum", "es": "Ciruela", "de": "Pflaume"},
        "walnut": {"fr": "Noix", "en": "Walnut", "es": "Nuez", "de": "Walnuss"},
        "chestnut": {"fr": "Châtaigne", "en": "Chestnut", "es": "Castaña", "de": "Kastanie"},
    },
    WINTER: {
        "endive": {"fr": "Endive", "en": "Endive", "es": "Endibia", "de": "Endivie"},
        "lambs_lettuce": {"fr": "Mâche", "en": "Lamb's lettuce", "es": "Canónigo", "de": "Feldsalat"},
        "watercress": {"fr": "Cresson", "en": "Watercress", "es": "Berro", "de": "Brunnenkresse"},
        "leek": {"fr": "Poireau", "en": "Leek", "es": "Puerro", "de": "Lauch"},
        "celeriac": {"fr": "Céleri-rave", "en": "Celeriac", "es": "Apio-nabo", "de": "Sellerie"},
        "jerusalem_artichoke": {"fr": "Topinambour", "en": "Jerusalem artichoke", "es": "Aguaturma", "de": "Topinambur"},
        "lemon": {"fr": "Citron", "en": "Lemon", "es": "Limón", "de": "Zitrone"},
        "orange": {"fr": "Orange", "en": "Orange", "es": "Naranja", "de": "Orange"},
        "clementine": {"fr": "Clémentine", "en": "Clementine", "es": "Clementina", "de": "Clementine"},
        "kiwi": {"fr": "Kiwi", "en": "Kiwi", "es": "Kiwi", "de": "Kiwi"},
        "grapefruit": {"fr": "Pomelo", "en": "Grapefruit", "es": "Pomelo", "de": "Pampelmuse"},
    },
}  # fmt: skip


def canonical_season(season: str) -> str:
    """Map legacy season names onto the English identifiers."""
    lowered = season.strip().lower()
    return _SEASON_ALIASES.get(lowered, lowered)


def current_season(day: date) -> str:
    """Return the season of a calendar date (northern hemisphere months)."""
    month = day.month
    if 3 <= month <= 5:  # noqa: PLR2004
        return SPRING
    if 6 <= month <= 8:  # noqa: PLR2004
        return SUMMER
    if 9 <= month <= 11:  # noqa: PLR2004
        return AUTUMN
    return WINTER


def in_season(recipe: Recipe, season: str) -> bool:
    """Return True when a recipe is tagged for a season."""
    wanted = canonical_season(season)
    return any(canonical_season(value) == wanted for value in recipe.seasons)


def filter_by_season(
    pool: Sequence[Recipe],
    season: str,
    minimum: int = MIN_SEASONAL_CANDIDATES,
) -> list[Recipe]:
    """Keep in-season recipes, or the whole pool when too few remain.

    The fallback drops the seasonal preference entirely rather than
    relaxing it for part of the pool.
    """
    seasonal = [recipe for recipe in pool if in_season(recipe, season)]
    if len(seasonal) < minimum:
        _logger.debug(
            "Seasonal fallback: season=%s seasonal=%s pool=%s",
            season,
            len(seasonal),
            len(pool),
        )
        return list(pool)
    return seasonal


def seasonal_ingredients(season: str, locale: str = "fr") -> dict[str, str]:
    """Return the seasonal ingredients of a season keyed by identifier."""
    entries = SEASONAL_INGREDIENTS.get(canonical_season(season), {})
    return {key: localized(names, locale) for key, names in entries.items()}


def _matches_entry(name: str, key: str, names: dict[str, str]) -> bool:
    lowered = name.strip().lower()
    if lowered == key or lowered == key.replace("_", " "):
        return True
    return lowered in (value.lower() for value in names.values())


def is_ingredient_seasonal(name: str, season: str) -> bool:
    """Return True when an ingredient name appears in a season's calendar."""
    entries = SEASONAL_INGREDIENTS.get(canonical_season(season), {})
    return any(_matches_entry(name, key, names) for key, names in entries.items())


def seasons_for_ingredient(name: str) -> list[str]:
    """Return every season whose calendar lists an ingredient."""
    return [season for season in SEASONS if is_ingredient_seasonal(name, season)]
