"""
Event-driven container registry.

This module implements the process-scoped cache behind the console page. It
keeps two mappings, both keyed by module id:

- **containers**: live container references, written by the discovery tracker.
- **snapshots**: latest :class:`ContainerSnapshot`, written by the lifecycle
  listener.

Per-module lifecycle
--------------------
Absent -> Discovered (reference known) -> Active (reference + snapshot) ->
Terminated (Destroyed event evicts both). Discovery removal only drops the
reference; a snapshot built afterwards is empty rather than failing.

Concurrency
-----------
Discovery and lifecycle notifications arrive on different threads and page
renders on request threads. Each mapping is guarded by its own lock, held only
for a single insert/remove/copy; snapshot construction runs outside of it.
Concurrent events for one module resolve last-writer-wins. The two mappings
are not updated transactionally.

Lifecycle
---------
The owning plugin creates a registry on activation and calls :meth:`clear` on
deactivation. Nothing is persisted.
"""

from __future__ import annotations

import threading

from blueprint_console.core.settings import get_logger
from blueprint_console.core.snapshots import ContainerSnapshot, order_containers
from blueprint_console.engine import BlueprintEvent

log = get_logger(__name__)


class ContainerRegistry:
    """
    Cache of container references and their latest snapshots.

    Attributes
    ----------
    _containers : dict[int, object]
        Module id -> live container reference.
    _snapshots : dict[int, ContainerSnapshot]
        Module id -> snapshot built from the latest non-destroy event.
    """

    __slots__ = ("_containers", "_snapshots", "_containers_lock", "_snapshots_lock")

    def __init__(self) -> None:
        self._containers: dict[int, object] = {}
        self._snapshots: dict[int, ContainerSnapshot] = {}
        self._containers_lock = threading.Lock()
        self._snapshots_lock = threading.Lock()

    # ------------------------------- Discovery ------------------------------

    def on_discovered(self, module_id: int, container: object) -> None:
        """Record (or overwrite) the live container reference of a module."""
        with self._containers_lock:
            self._containers[module_id] = container
        log.debug("Container discovered for module %s", module_id)

    def on_lost(self, module_id: int) -> None:
        """Forget the container reference of a module; its snapshot stays."""
        with self._containers_lock:
            self._containers.pop(module_id, None)
        log.debug("Container lost for module %s", module_id)

    def container(self, module_id: int) -> object | None:
        """Return the known container reference of a module, if any."""
        with self._containers_lock:
            return self._containers.get(module_id)

    # ------------------------------- Lifecycle ------------------------------

    def on_event(self, event: BlueprintEvent) -> ContainerSnapshot | None:
        """
        Apply a lifecycle event.

        A Destroyed event evicts both the reference and the snapshot and
        returns ``None``. Any other event builds a fresh snapshot from the
        current reference and stores it over the previous one.

        Raises
        ------
        InvalidContainerKind
            If the stored reference does not expose a repository. The registry
            is left unchanged for that module.
        """
        module_id = event.module_id

        if event.is_destroyed:
            with self._snapshots_lock:
                self._snapshots.pop(module_id, None)
            with self._containers_lock:
                self._containers.pop(module_id, None)
            log.debug("Module %s destroyed; evicted", module_id)
            return None

        snapshot = ContainerSnapshot.build(event, self.container(module_id))
        with self._snapshots_lock:
            self._snapshots[module_id] = snapshot
        log.debug(
            "Module %s event %s: %d recipes, %d unsatisfied",
            module_id,
            event.type,
            len(snapshot.recipes),
            snapshot.unsatisfied_count,
        )
        return snapshot

    # ------------------------------- Reads ----------------------------------

    def snapshot_all(self) -> tuple[ContainerSnapshot, ...]:
        """Return a point-in-time, display-ordered copy of all snapshots."""
        with self._snapshots_lock:
            current = list(self._snapshots.values())
        return order_containers(current)

    def get(self, module_id: int) -> ContainerSnapshot | None:
        """Return the latest snapshot of one module, or None if absent."""
        with self._snapshots_lock:
            return self._snapshots.get(module_id)

    def clear(self) -> None:
        """Drop every reference and snapshot."""
        with self._snapshots_lock:
            self._snapshots.clear()
        with self._containers_lock:
            self._containers.clear()

    def __len__(self) -> int:
        with self._snapshots_lock:
            return len(self._snapshots)


__all__ = ["ContainerRegistry"]
