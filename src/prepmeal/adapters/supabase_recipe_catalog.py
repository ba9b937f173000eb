"""Supabase implementation for the recipe catalog."""

from dataclasses import dataclass

from supabase import Client

from prepmeal.adapters.records import recipe_from_record
from prepmeal.domain.recipes import Recipe
from prepmeal.services.meal_plans import RecipeCatalog


@dataclass
class SupabaseRecipeCatalog(RecipeCatalog):
    """Supabase-backed catalog of candidate recipes."""

    client: Client
    table: str = "recipes"

    def list_recipes(
        self,
        excluded_allergens: frozenset[str] = frozenset(),
        max_total_time: int | None = None,
    ) -> list[Recipe]:
        """Return recipes free of the allergens and within the time limit."""
        response = self.client.table(self.table).select("*").execute()
        recipes = [recipe_from_record(row) for row in response.data or []]
        return [
            recipe
            for recipe in recipes
            if not recipe.allergens & excluded_allergens
            and (max_total_time is None or recipe.total_time <= max_total_time)
        ]

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return recipe_from_record(response.data[0])
