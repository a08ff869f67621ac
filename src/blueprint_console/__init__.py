"""Blueprint console: a web console page for dependency-injection containers.

Observes the lifecycle events of each module's blueprint container, keeps the
latest state per module and renders the recipes and unmet dependencies.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
