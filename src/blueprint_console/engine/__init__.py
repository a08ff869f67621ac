"""Read-only contracts of the external dependency-injection engine."""

from __future__ import annotations

from .protocols import (
    BlueprintEvent,
    EventKind,
    ModuleInfo,
    Recipe,
    Repository,
    RepositoryContainer,
    SatisfiableRecipe,
)

__all__ = [
    "BlueprintEvent",
    "EventKind",
    "ModuleInfo",
    "Recipe",
    "Repository",
    "RepositoryContainer",
    "SatisfiableRecipe",
]
