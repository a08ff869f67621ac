"""Immutable display snapshots of containers and recipes."""

from __future__ import annotations

from .container import (
    EVENT_TYPE_NAMES,
    ContainerSnapshot,
    compare_containers,
    count_unsatisfied,
    order_containers,
    parse_module_version,
)
from .recipe import RecipeSnapshot, compare_recipes, order_recipes

__all__ = [
    "EVENT_TYPE_NAMES",
    "ContainerSnapshot",
    "RecipeSnapshot",
    "compare_containers",
    "compare_recipes",
    "count_unsatisfied",
    "order_containers",
    "order_recipes",
    "parse_module_version",
]
