"""
Contracts of the external dependency-injection engine.

The console never resolves a container itself. It only *observes* objects
owned by the engine and the hosting platform, so this module describes those
objects structurally:

- :class:`Recipe` / :class:`SatisfiableRecipe`: dependency-graph nodes held
  in a container's internal repository.
- :class:`Repository` / :class:`RepositoryContainer`: the introspection path
  from a live container reference to its recipes.
- :class:`ModuleInfo` and :class:`BlueprintEvent`: immutable values delivered
  by the platform with every lifecycle notification.

Event codes
-----------
Event kinds follow the numeric codes of the OSGi Blueprint event model. The
event keeps the raw ``int`` so that a code outside :class:`EventKind` still
reaches the display layer, which is where it is rejected.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, runtime_checkable


class EventKind(IntEnum):
    """Lifecycle transitions reported for a blueprint container."""

    CREATING = 1
    CREATED = 2
    DESTROYING = 3
    DESTROYED = 4
    FAILURE = 5
    GRACE_PERIOD = 6
    WAITING = 7


@runtime_checkable
class Recipe(Protocol):
    """A named node of a container's dependency graph."""

    @property
    def name(self) -> str: ...


@runtime_checkable
class SatisfiableRecipe(Recipe, Protocol):
    """A recipe that can tell whether its external reference is available."""

    @property
    def selector(self) -> str | None: ...

    def is_satisfied(self) -> bool: ...


@runtime_checkable
class Repository(Protocol):
    """Internal recipe repository of a container."""

    def get_all_recipes(self) -> Iterable[Recipe]: ...


@runtime_checkable
class RepositoryContainer(Protocol):
    """A container reference that exposes its internal repository."""

    def get_repository(self) -> Repository: ...


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    """
    Identity of a deployed module.

    Attributes
    ----------
    module_id : int
        Platform-assigned identifier, stable for the module's lifetime.
    symbolic_name : str
        Human-facing module name (used for display ordering).
    version : str
        Module version string, compared semantically when ordering.
    """

    module_id: int
    symbolic_name: str
    version: str = "0.0.0"


@dataclass(frozen=True, slots=True)
class BlueprintEvent:
    """
    A lifecycle notification for one module's container.

    ``type`` is the raw event code (see :class:`EventKind`), ``timestamp`` is
    epoch milliseconds. ``cause`` is only set for failures and
    ``dependencies`` only when the engine reports unmet dependencies.
    """

    type: int
    module: ModuleInfo
    timestamp: int
    cause: BaseException | None = None
    dependencies: Sequence[str] | None = None

    @property
    def module_id(self) -> int:
        return self.module.module_id

    @property
    def is_destroyed(self) -> bool:
        return self.type == EventKind.DESTROYED


__all__ = [
    "BlueprintEvent",
    "EventKind",
    "ModuleInfo",
    "Recipe",
    "Repository",
    "RepositoryContainer",
    "SatisfiableRecipe",
]
