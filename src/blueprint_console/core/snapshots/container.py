"""
Container snapshot: one module's container at the time of its latest event.

Design Notes
------------
- **Immutability**: snapshots are frozen; a new one replaces the old on every
  lifecycle event instead of being updated in place.
- **Dedup identity**: equality and hashing use only the owning module and the
  event timestamp, not the event kind or the recipes.
- **Defensive default**: with no container reference the snapshot is empty
  rather than an error, since discovery removal and event delivery race.
"""

from __future__ import annotations

import re
import traceback
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import cmp_to_key

from packaging.version import Version

from blueprint_console.core.errors import InvalidContainerKind, UnknownEventKind
from blueprint_console.engine import BlueprintEvent, EventKind, ModuleInfo, RepositoryContainer

from .recipe import RecipeSnapshot, order_recipes

EVENT_TYPE_NAMES: dict[EventKind, str] = {
    EventKind.CREATED: "Created",
    EventKind.CREATING: "Creating",
    EventKind.DESTROYED: "Destroyed",
    EventKind.DESTROYING: "Destroying",
    EventKind.FAILURE: "Failure",
    EventKind.GRACE_PERIOD: "Grace period",
    EventKind.WAITING: "Waiting",
}


@dataclass(frozen=True, slots=True, eq=False)
class ContainerSnapshot:
    """
    Immutable view of a blueprint container.

    Attributes
    ----------
    event : BlueprintEvent
        The latest lifecycle event received for the module.
    recipes : tuple[RecipeSnapshot, ...]
        Recipes of the container, unique by name, in display order.
    unsatisfied_count : int
        Number of recipes whose satisfiability check currently fails.
    """

    event: BlueprintEvent
    recipes: tuple[RecipeSnapshot, ...] = field(default_factory=tuple)
    unsatisfied_count: int = 0

    @classmethod
    def build(cls, event: BlueprintEvent, container: object | None) -> ContainerSnapshot:
        """
        Build a snapshot from an event and the module's container reference.

        Parameters
        ----------
        event : BlueprintEvent
            The lifecycle event being recorded.
        container : object | None
            Live container reference, or ``None`` when none is known.

        Raises
        ------
        InvalidContainerKind
            If ``container`` does not expose an internal repository.
        """
        if container is None:
            return cls(event=event)

        if not isinstance(container, RepositoryContainer):
            raise InvalidContainerKind(container)

        recipes = order_recipes(
            RecipeSnapshot.from_recipe(recipe)
            for recipe in container.get_repository().get_all_recipes()
        )
        return cls(event=event, recipes=recipes, unsatisfied_count=count_unsatisfied(recipes))

    # ------------------------------------------------------------------ identity

    @property
    def module(self) -> ModuleInfo:
        return self.event.module

    @property
    def module_id(self) -> int:
        return self.event.module.module_id

    @property
    def timestamp(self) -> int:
        return self.event.timestamp

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContainerSnapshot):
            return NotImplemented
        return self.module_id == other.module_id and self.timestamp == other.timestamp

    def __hash__(self) -> int:
        return hash((self.module_id, self.timestamp))

    # ------------------------------------------------------------------ display

    @property
    def event_type_name(self) -> str:
        """Human-readable label of the event kind."""
        try:
            return EVENT_TYPE_NAMES[EventKind(self.event.type)]
        except ValueError:
            raise UnknownEventKind(self.event.type) from None

    @property
    def cause_stack_trace(self) -> str:
        """Formatted traceback of the failure cause, or ``""`` if none."""
        cause = self.event.cause
        if cause is None:
            return ""
        return "".join(traceback.format_exception(cause))

    @property
    def missing_dependencies_string(self) -> str:
        """Missing dependencies as ``"[a, b]"``, or ``""`` if not reported."""
        dependencies = self.event.dependencies
        if dependencies is None:
            return ""
        return "[" + ", ".join(str(d) for d in dependencies) + "]"

    @property
    def timestamp_date(self) -> datetime:
        """Event time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000, tz=UTC)


def count_unsatisfied(recipes: Iterable[RecipeSnapshot]) -> int:
    """Count recipes whose satisfiability check is present and false."""
    return sum(1 for recipe in recipes if recipe.is_unsatisfied)


_NUMERIC = re.compile(r"[0-9]+")
_QUALIFIER = re.compile(r"[A-Za-z0-9_-]+")


def parse_module_version(text: str) -> tuple[tuple[int, int, int], str] | None:
    """
    Split ``major[.minor[.micro[.qualifier]]]`` into its release and qualifier.

    Missing numeric parts default to ``0`` and a missing qualifier to ``""``.
    Returns ``None`` when ``text`` is not of that form.
    """
    parts = text.strip().split(".", 3)
    numbers = parts[:3]
    qualifier = parts[3] if len(parts) == 4 else ""
    if not all(_NUMERIC.fullmatch(n) for n in numbers):
        return None
    if len(parts) == 4 and not _QUALIFIER.fullmatch(qualifier):
        return None

    release = Version(".".join(numbers)).release
    major, minor, micro = (release + (0, 0, 0))[:3]
    return (major, minor, micro), qualifier


def _compare_versions(a: str, b: str) -> int:
    """Numeric release, then qualifier (empty lowest); unparsable versions last."""
    va = parse_module_version(a)
    vb = parse_module_version(b)

    if va is not None and vb is not None:
        return (va > vb) - (va < vb)
    if va is not None:
        return -1
    if vb is not None:
        return 1
    return (a > b) - (a < b)


def compare_containers(a: ContainerSnapshot, b: ContainerSnapshot) -> int:
    """Three-way comparison: timestamp, then symbolic name, then version."""
    if a.timestamp != b.timestamp:
        return -1 if a.timestamp < b.timestamp else 1

    name_a, name_b = a.module.symbolic_name, b.module.symbolic_name
    if name_a != name_b:
        return -1 if name_a < name_b else 1

    return _compare_versions(a.module.version, b.module.version)


def order_containers(snapshots: Iterable[ContainerSnapshot]) -> tuple[ContainerSnapshot, ...]:
    """Sort snapshots for display; full ties keep their incoming order."""
    return tuple(sorted(snapshots, key=cmp_to_key(compare_containers)))


__all__ = [
    "ContainerSnapshot",
    "EVENT_TYPE_NAMES",
    "compare_containers",
    "count_unsatisfied",
    "order_containers",
    "parse_module_version",
]
