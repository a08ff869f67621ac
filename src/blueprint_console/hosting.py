"""
Hosting-platform contract and an in-process implementation.

The console plugs into a module-hosting platform that owns module lifecycle,
service discovery and event delivery. The plugin only needs two hooks from it:

- a **listener** registration for container lifecycle events, and
- a **tracker** that is told when container services appear or disappear.

:class:`ModulePlatform` states that contract. :class:`LocalPlatform` is a small,
synchronous implementation used by the standalone server, the CLI demo and
the tests. A real host would adapt its own event bus to the same protocol.
"""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from blueprint_console.core.settings import get_logger
from blueprint_console.engine import BlueprintEvent, ModuleInfo

log = get_logger(__name__)


@runtime_checkable
class BlueprintListener(Protocol):
    """Receives every lifecycle event of every container."""

    def blueprint_event(self, event: BlueprintEvent) -> None: ...


@runtime_checkable
class ContainerTracker(Protocol):
    """Receives container service arrivals and departures."""

    def adding_service(self, module: ModuleInfo, container: object) -> None: ...

    def removed_service(self, module: ModuleInfo) -> None: ...


class ModulePlatform(Protocol):
    """The subset of the hosting platform the console depends on."""

    def add_listener(self, listener: BlueprintListener) -> None: ...

    def remove_listener(self, listener: BlueprintListener) -> None: ...

    def open_tracker(self, tracker: ContainerTracker) -> None: ...

    def close_tracker(self, tracker: ContainerTracker) -> None: ...


class LocalPlatform:
    """
    In-process platform dispatching synchronously on the caller's thread.

    Containers registered before a tracker is opened are replayed to it, and
    closing a tracker reports every still-registered container as removed,
    mirroring how service trackers behave on real hosts.
    """

    def __init__(self) -> None:
        self._containers: dict[int, tuple[ModuleInfo, object]] = {}
        self._listeners: list[BlueprintListener] = []
        self._trackers: list[ContainerTracker] = []
        self._lock = threading.Lock()

    # ------------------------------- Registration ---------------------------

    def add_listener(self, listener: BlueprintListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: BlueprintListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def open_tracker(self, tracker: ContainerTracker) -> None:
        with self._lock:
            self._trackers.append(tracker)
            existing = list(self._containers.values())
        for module, container in existing:
            tracker.adding_service(module, container)

    def close_tracker(self, tracker: ContainerTracker) -> None:
        with self._lock:
            if tracker not in self._trackers:
                return
            self._trackers.remove(tracker)
            existing = list(self._containers.values())
        for module, _ in existing:
            tracker.removed_service(module)

    # ------------------------------- Host side ------------------------------

    def register_container(self, module: ModuleInfo, container: object) -> None:
        """Publish a container service for ``module``."""
        with self._lock:
            self._containers[module.module_id] = (module, container)
            trackers = list(self._trackers)
        log.debug("Container registered for %s (%s)", module.symbolic_name, module.module_id)
        for tracker in trackers:
            tracker.adding_service(module, container)

    def unregister_container(self, module_id: int) -> None:
        """Withdraw the container service of a module, if registered."""
        with self._lock:
            entry = self._containers.pop(module_id, None)
            trackers = list(self._trackers)
        if entry is None:
            return
        log.debug("Container unregistered for module %s", module_id)
        for tracker in trackers:
            tracker.removed_service(entry[0])

    def publish(self, event: BlueprintEvent) -> None:
        """Deliver ``event`` to every registered listener."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener.blueprint_event(event)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    @property
    def tracker_count(self) -> int:
        with self._lock:
            return len(self._trackers)


__all__ = ["BlueprintListener", "ContainerTracker", "LocalPlatform", "ModulePlatform"]
