"""
Web console plugin showing blueprint containers and their recipes.

The plugin wires a :class:`ContainerRegistry` to a hosting platform:

1.  **Tracker**: container services that appear/disappear are recorded as
    live references (``on_discovered`` / ``on_lost``).
2.  **Listener**: every lifecycle event rebuilds the module's snapshot, or
    evicts it on Destroyed.
3.  **Render**: the page is rendered from ``snapshot_all()``.

A registry exists only between :meth:`activate` and :meth:`deactivate`.
"""

from __future__ import annotations

from blueprint_console.core.errors import InvalidContainerKind
from blueprint_console.core.registry import ContainerRegistry
from blueprint_console.core.settings import Settings, get_logger, load_settings
from blueprint_console.core.snapshots import ContainerSnapshot
from blueprint_console.engine import BlueprintEvent, ModuleInfo
from blueprint_console.hosting import ModulePlatform
from blueprint_console.render import render_page

log = get_logger(__name__)


class RegistryContainerTracker:
    """Adds tracked container services to the registry and removes them again."""

    def __init__(self, registry: ContainerRegistry) -> None:
        self.registry = registry

    def adding_service(self, module: ModuleInfo, container: object) -> None:
        self.registry.on_discovered(module.module_id, container)

    def removed_service(self, module: ModuleInfo) -> None:
        self.registry.on_lost(module.module_id)


class RegistryBlueprintListener:
    """Feeds lifecycle events into the registry.

    An event whose container cannot be introspected is logged and dropped;
    the module keeps its previous snapshot.
    """

    def __init__(self, registry: ContainerRegistry) -> None:
        self.registry = registry

    def blueprint_event(self, event: BlueprintEvent) -> None:
        try:
            self.registry.on_event(event)
        except InvalidContainerKind:
            log.exception(
                "Dropping event %s for module %s (%s)",
                event.type,
                event.module.symbolic_name,
                event.module_id,
            )


class BlueprintConsolePlugin:
    """
    The console plugin.

    Parameters
    ----------
    platform : ModulePlatform
        Host providing container discovery and lifecycle events.
    settings : Settings | None
        Label/title configuration; defaults to the process settings.
    """

    def __init__(self, platform: ModulePlatform, settings: Settings | None = None) -> None:
        self.platform = platform
        self.settings = settings if settings is not None else load_settings()
        self._registry: ContainerRegistry | None = None
        self._tracker: RegistryContainerTracker | None = None
        self._listener: RegistryBlueprintListener | None = None

    @property
    def label(self) -> str:
        return self.settings.plugin_label

    @property
    def title(self) -> str:
        return self.settings.plugin_title

    @property
    def active(self) -> bool:
        return self._registry is not None

    @property
    def registry(self) -> ContainerRegistry:
        if self._registry is None:
            raise RuntimeError("Blueprint console plugin is not active")
        return self._registry

    def activate(self) -> None:
        """Create the registry, open the container tracker and register the listener."""
        if self._registry is not None:
            return
        registry = ContainerRegistry()
        self._registry = registry
        self._tracker = RegistryContainerTracker(registry)
        self.platform.open_tracker(self._tracker)
        self._listener = RegistryBlueprintListener(registry)
        self.platform.add_listener(self._listener)
        log.info("Blueprint console plugin activated (label=%s)", self.label)

    def deactivate(self) -> None:
        """Close the tracker, unregister the listener and clear the registry."""
        if self._registry is None:
            return
        if self._tracker is not None:
            self.platform.close_tracker(self._tracker)
        if self._listener is not None:
            self.platform.remove_listener(self._listener)
        self._registry.clear()
        self._registry = None
        self._tracker = None
        self._listener = None
        log.info("Blueprint console plugin deactivated")

    def snapshot_all(self) -> tuple[ContainerSnapshot, ...]:
        return self.registry.snapshot_all()

    def render(self) -> str:
        """Render the console page for the current state."""
        return render_page(self.snapshot_all(), title=self.title)


__all__ = [
    "BlueprintConsolePlugin",
    "RegistryBlueprintListener",
    "RegistryContainerTracker",
]
