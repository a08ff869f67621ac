"""
Response schemas of the JSON container endpoints.

These Pydantic models mirror what the HTML page shows so that scripts and
monitoring can read the same state without scraping markup.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from blueprint_console.core.snapshots import ContainerSnapshot, RecipeSnapshot


class RecipeView(BaseModel):
    """One recipe of a container."""

    name: str = Field(description="Recipe name, unique within its container.")
    satisfied: bool | None = Field(
        default=None, description="Satisfiability check result; null when not applicable."
    )
    selector: str | None = Field(default=None, description="Filter locating the reference.")

    @classmethod
    def from_snapshot(cls, recipe: RecipeSnapshot) -> RecipeView:
        return cls(name=recipe.name, satisfied=recipe.satisfied, selector=recipe.selector)


class ContainerView(BaseModel):
    """A blueprint container at its latest lifecycle event."""

    module_id: int
    symbolic_name: str
    version: str
    event_type: str = Field(description="Display label of the latest event kind.")
    timestamp: datetime = Field(description="UTC time of the latest event.")
    unsatisfied_count: int = Field(ge=0)
    missing_dependencies: list[str] | None = Field(
        default=None, description="Unmet dependencies reported by the engine, if any."
    )
    cause: str = Field(default="", description="Formatted failure traceback, or empty.")
    recipes: list[RecipeView] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: ContainerSnapshot) -> ContainerView:
        dependencies = snapshot.event.dependencies
        return cls(
            module_id=snapshot.module_id,
            symbolic_name=snapshot.module.symbolic_name,
            version=snapshot.module.version,
            event_type=snapshot.event_type_name,
            timestamp=snapshot.timestamp_date,
            unsatisfied_count=snapshot.unsatisfied_count,
            missing_dependencies=list(dependencies) if dependencies is not None else None,
            cause=snapshot.cause_stack_trace,
            recipes=[RecipeView.from_snapshot(r) for r in snapshot.recipes],
        )


class HealthInfo(BaseModel):
    status: str = "ok"
    environment: str
    version: str
    active: bool


__all__ = ["ContainerView", "HealthInfo", "RecipeView"]
