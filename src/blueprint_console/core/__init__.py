"""Core package for the blueprint console: snapshots, registry, settings.

Downstream code imports from the submodules directly, e.g.:
    from blueprint_console.core.registry import ContainerRegistry
    from blueprint_console.core.settings import settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
