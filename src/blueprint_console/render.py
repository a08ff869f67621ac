"""
HTML rendering of the container page.

The page template ships inside the package (``templates/``) and is compiled
once per process by a Jinja2 environment with HTML autoescaping. Snapshots are
passed in already ordered; the template does no sorting.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from functools import lru_cache

from jinja2 import Environment, PackageLoader, StrictUndefined, Template, select_autoescape

from blueprint_console.core.snapshots import ContainerSnapshot

PAGE_TEMPLATE = "blueprintcontainers.html"


def _format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3] + " UTC"


def _blank(value: object) -> object:
    """Render ``None`` as an empty string."""
    return "" if value is None else value


def _flag(value: bool | None) -> str:
    """Render a satisfiability flag as ``true``/``false``; ``None`` as empty."""
    if value is None:
        return ""
    return "true" if value else "false"


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("blueprint_console", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["timestamp"] = _format_timestamp
    env.filters["blank"] = _blank
    env.filters["flag"] = _flag
    return env


def page_template() -> Template:
    return get_environment().get_template(PAGE_TEMPLATE)


def render_page(snapshots: Sequence[ContainerSnapshot], title: str = "Blueprint") -> str:
    """
    Render the container page.

    Parameters
    ----------
    snapshots : Sequence[ContainerSnapshot]
        Containers in display order.
    title : str
        Page heading.

    Raises
    ------
    UnknownEventKind
        If a snapshot's event type has no display label.
    """
    return page_template().render(title=title, containers=snapshots)


__all__ = ["PAGE_TEMPLATE", "get_environment", "page_template", "render_page"]
