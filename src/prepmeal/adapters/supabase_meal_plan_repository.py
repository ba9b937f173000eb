"""Supabase repository for generated meal plans."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from prepmeal.adapters.records import plan_from_record, plan_to_record
from prepmeal.domain.plans import MealPlan
from prepmeal.services.meal_plans import MealPlanRepository


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plan storage."""

    client: Client
    table: str = "meal_plans"

    def save(self, owner_id: str, plan: MealPlan) -> MealPlan:
        """Store a new plan and return it."""
        now = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table(self.table)
            .insert(
                {**plan_to_record(owner_id, plan), "created_at": now, "updated_at": now}
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        return plan_from_record(response.data[0])

    def get(self, owner_id: str, plan_id: str) -> MealPlan | None:
        """Return an owner's plan by id, if present."""
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("id", plan_id)
            .eq("user_id", owner_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return plan_from_record(response.data[0])

    def list_for_owner(self, owner_id: str) -> list[MealPlan]:
        """Return an owner's plans, most recent first."""
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("user_id", owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [plan_from_record(row) for row in response.data or []]

    def update(self, owner_id: str, plan: MealPlan) -> MealPlan:
        """Replace a stored plan and return it."""
        payload = plan_to_record(owner_id, plan)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table(self.table)
            .update(payload)
            .eq("id", plan.id)
            .eq("user_id", owner_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal plan")
        return plan_from_record(response.data[0])

    def delete(self, owner_id: str, plan_id: str) -> bool:
        """Delete an owner's plan, returning False when it does not exist."""
        response = (
            self.client.table(self.table)
            .delete()
            .eq("id", plan_id)
            .eq("user_id", owner_id)
            .execute()
        )
        return bool(response.data)
