"""Unit tests for container snapshots: construction, identity, ordering, display.

These tests use the in-memory engine objects from `blueprint_console.demo`
so no real dependency-injection runtime is needed.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from blueprint_console.core.errors import InvalidContainerKind, UnknownEventKind
from blueprint_console.core.snapshots import (
    ContainerSnapshot,
    compare_containers,
    count_unsatisfied,
    order_containers,
    parse_module_version,
)
from blueprint_console.demo import BeanRecipe, ReferenceRecipe, make_container
from blueprint_console.engine import BlueprintEvent, EventKind, ModuleInfo

MOD = ModuleInfo(1, "m1", "1.0.0")


def _event(
    kind: int = EventKind.CREATED,
    module: ModuleInfo = MOD,
    ts: int = 1_000,
    **kwargs: Any,
) -> BlueprintEvent:
    return BlueprintEvent(type=int(kind), module=module, timestamp=ts, **kwargs)


class NotAContainer:
    """Looks like a container reference but has no repository."""


# --------------------------------------------------------------------------- #
# Construction
# --------------------------------------------------------------------------- #


def test_missing_container_yields_empty_snapshot() -> None:
    """A null reference gives zero recipes and zero unsatisfied, never an error."""
    snap = ContainerSnapshot.build(_event(EventKind.WAITING), None)
    assert snap.recipes == ()
    assert snap.unsatisfied_count == 0


def test_container_without_repository_is_rejected() -> None:
    """References lacking the repository capability raise InvalidContainerKind."""
    bogus = NotAContainer()
    with pytest.raises(InvalidContainerKind) as excinfo:
        ContainerSnapshot.build(_event(), bogus)
    assert excinfo.value.container is bogus
    assert isinstance(excinfo.value, TypeError)


def test_build_reads_all_recipes_and_counts_unsatisfied() -> None:
    """Every recipe is captured in display order; only explicit failures count."""
    container = make_container(
        [
            ReferenceRecipe("b", "(name=b)", satisfied=False),
            BeanRecipe("plain"),
            ReferenceRecipe("a", "(name=a)", satisfied=True),
            ReferenceRecipe("c", "(name=c)", satisfied=False),
        ]
    )
    snap = ContainerSnapshot.build(_event(), container)

    assert [r.name for r in snap.recipes] == ["plain", "a", "b", "c"]
    assert snap.unsatisfied_count == 2
    assert count_unsatisfied(snap.recipes) == 2


def test_build_does_not_mutate_container() -> None:
    """Construction only reads the repository."""
    recipes = [ReferenceRecipe("x", satisfied=False), BeanRecipe("y")]
    container = make_container(recipes)
    ContainerSnapshot.build(_event(), container)
    assert [r.name for r in container.repository.recipes] == ["x", "y"]


# --------------------------------------------------------------------------- #
# Identity
# --------------------------------------------------------------------------- #


def test_equality_uses_module_and_timestamp_only() -> None:
    """Different event kinds at the same instant for the same module are equal."""
    waiting = ContainerSnapshot.build(_event(EventKind.WAITING, ts=5), None)
    created = ContainerSnapshot.build(
        _event(EventKind.CREATED, ts=5), make_container([BeanRecipe("a")])
    )
    later = ContainerSnapshot.build(_event(EventKind.CREATED, ts=6), None)

    assert waiting == created
    assert hash(waiting) == hash(created)
    assert waiting != later
    assert len({waiting, created, later}) == 2


# --------------------------------------------------------------------------- #
# Ordering
# --------------------------------------------------------------------------- #


def test_earlier_timestamp_sorts_first_regardless_of_name() -> None:
    early = ContainerSnapshot(_event(module=ModuleInfo(2, "zeta", "9.0.0"), ts=100))
    late = ContainerSnapshot(_event(module=ModuleInfo(3, "alpha", "0.1.0"), ts=200))
    assert compare_containers(early, late) < 0
    assert order_containers([late, early]) == (early, late)


def test_equal_timestamp_sorts_by_symbolic_name() -> None:
    b = ContainerSnapshot(_event(module=ModuleInfo(2, "bravo"), ts=100))
    a = ContainerSnapshot(_event(module=ModuleInfo(3, "alpha"), ts=100))
    assert [s.module.symbolic_name for s in order_containers([b, a])] == ["alpha", "bravo"]


def test_equal_name_sorts_by_semantic_version() -> None:
    """`1.10.0` is newer than `1.9.0`, unlike a plain string comparison."""
    v10 = ContainerSnapshot(_event(module=ModuleInfo(2, "same", "1.10.0"), ts=100))
    v9 = ContainerSnapshot(_event(module=ModuleInfo(3, "same", "1.9.0"), ts=100))
    assert compare_containers(v9, v10) < 0
    assert [s.module.version for s in order_containers([v10, v9])] == ["1.9.0", "1.10.0"]


def _versioned(version: str, module_id: int = 2) -> ContainerSnapshot:
    return ContainerSnapshot(_event(module=ModuleInfo(module_id, "same", version), ts=100))


def test_qualified_version_orders_by_release_first() -> None:
    """`1.0.0.SNAPSHOT` is older than `2.0.0`: numbers decide before the qualifier."""
    assert compare_containers(_versioned("1.0.0.SNAPSHOT"), _versioned("2.0.0", 3)) < 0
    assert compare_containers(_versioned("2.0.0"), _versioned("1.0.0.SNAPSHOT", 3)) > 0


def test_empty_qualifier_sorts_lowest() -> None:
    """`1.0.0` precedes `1.0.0.rc1`; qualifiers compare as plain strings."""
    assert compare_containers(_versioned("1.0.0"), _versioned("1.0.0.rc1", 3)) < 0
    assert compare_containers(_versioned("1.0.0.RC1"), _versioned("1.0.0.rc1", 3)) < 0
    assert compare_containers(_versioned("1.0"), _versioned("1.0.0", 3)) == 0


@pytest.mark.parametrize(
    ("text", "parsed"),
    [
        ("1", ((1, 0, 0), "")),
        ("1.2", ((1, 2, 0), "")),
        ("1.10.3", ((1, 10, 3), "")),
        ("1.0.0.SNAPSHOT", ((1, 0, 0), "SNAPSHOT")),
        ("2.1.0.2024-01_b", ((2, 1, 0), "2024-01_b")),
        ("1.0.SNAPSHOT", None),
        ("1.0.0.", None),
        ("1.0.0rc1", None),
        ("not-a-version", None),
    ],
)
def test_parse_module_version(text: str, parsed: tuple[tuple[int, int, int], str] | None) -> None:
    assert parse_module_version(text) == parsed


def test_unparsable_versions_sort_after_valid_ones() -> None:
    valid = _versioned("2.0.0")
    odd = _versioned("not-a-version", 3)
    assert compare_containers(valid, odd) < 0
    assert compare_containers(odd, valid) > 0


def test_full_ties_are_kept_in_incoming_order() -> None:
    first = ContainerSnapshot(_event(module=ModuleInfo(2, "dup", "1.0.0"), ts=100))
    second = ContainerSnapshot(_event(module=ModuleInfo(3, "dup", "1.0.0"), ts=100))
    assert compare_containers(first, second) == 0
    ordered = order_containers([first, second])
    assert [s.module_id for s in ordered] == [2, 3]


# --------------------------------------------------------------------------- #
# Display fields
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    ("kind", "label"),
    [
        (EventKind.CREATED, "Created"),
        (EventKind.CREATING, "Creating"),
        (EventKind.DESTROYED, "Destroyed"),
        (EventKind.DESTROYING, "Destroying"),
        (EventKind.FAILURE, "Failure"),
        (EventKind.GRACE_PERIOD, "Grace period"),
        (EventKind.WAITING, "Waiting"),
    ],
)
def test_event_type_labels(kind: EventKind, label: str) -> None:
    assert ContainerSnapshot(_event(kind)).event_type_name == label


def test_unknown_event_type_raises() -> None:
    """A code outside the seven kinds has no label."""
    snap = ContainerSnapshot(_event(42))
    with pytest.raises(UnknownEventKind) as excinfo:
        _ = snap.event_type_name
    assert excinfo.value.event_type == 42


def test_missing_dependencies_string() -> None:
    assert ContainerSnapshot(_event(dependencies=["dep.Foo"])).missing_dependencies_string == (
        "[dep.Foo]"
    )
    assert ContainerSnapshot(_event(dependencies=["a", "b"])).missing_dependencies_string == (
        "[a, b]"
    )
    assert ContainerSnapshot(_event(dependencies=[])).missing_dependencies_string == "[]"
    assert ContainerSnapshot(_event()).missing_dependencies_string == ""


def test_cause_stack_trace() -> None:
    """The cause is rendered as a full traceback; absent cause -> empty string."""
    try:
        raise RuntimeError("reference timed out")
    except RuntimeError as exc:
        cause = exc

    trace = ContainerSnapshot(_event(EventKind.FAILURE, cause=cause)).cause_stack_trace
    assert trace.startswith("Traceback")
    assert "RuntimeError: reference timed out" in trace
    assert ContainerSnapshot(_event()).cause_stack_trace == ""


def test_timestamp_date_is_utc() -> None:
    snap = ContainerSnapshot(_event(ts=1_700_000_000_123))
    assert snap.timestamp_date == datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=UTC)
