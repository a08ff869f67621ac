"""
Demo engine - sample containers for local runs.

This module provides small, in-memory stand-ins for the objects a
dependency-injection engine hands to the console: plain and satisfiable
recipes, a repository and a container exposing it. :func:`seed_platform`
publishes a handful of modules in different lifecycle states so that the
page has something to show right after ``bpconsole serve --demo``.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, field

from blueprint_console.core.settings import get_logger
from blueprint_console.engine import BlueprintEvent, EventKind, ModuleInfo, Recipe
from blueprint_console.hosting import LocalPlatform

logger = get_logger(__name__)


@dataclass
class BeanRecipe:
    """A recipe with no satisfiability check (a locally constructed bean)."""

    name: str


@dataclass
class ReferenceRecipe:
    """A recipe referencing an external service located by ``selector``."""

    name: str
    selector: str | None = None
    satisfied: bool = False

    def is_satisfied(self) -> bool:
        return self.satisfied


@dataclass
class RecipeRepository:
    recipes: list[Recipe] = field(default_factory=list)

    def get_all_recipes(self) -> list[Recipe]:
        return list(self.recipes)


@dataclass
class DemoContainer:
    """A container exposing its repository, as the console requires."""

    repository: RecipeRepository = field(default_factory=RecipeRepository)

    def get_repository(self) -> RecipeRepository:
        return self.repository


def make_container(recipes: Iterable[Recipe]) -> DemoContainer:
    return DemoContainer(RecipeRepository(list(recipes)))


class DemoManager:
    """
    Publishes sample modules into a :class:`LocalPlatform`.
    """

    def __init__(self, platform: LocalPlatform) -> None:
        self.platform = platform

    def _event(
        self,
        kind: EventKind,
        module: ModuleInfo,
        *,
        offset_ms: int = 0,
        cause: BaseException | None = None,
        dependencies: list[str] | None = None,
    ) -> BlueprintEvent:
        return BlueprintEvent(
            type=int(kind),
            module=module,
            timestamp=int(time.time() * 1000) + offset_ms,
            cause=cause,
            dependencies=dependencies,
        )

    def seed(self) -> list[ModuleInfo]:
        """Register the demo modules and emit their lifecycle events."""
        orders = ModuleInfo(11, "com.example.orders", "1.4.0")
        billing = ModuleInfo(12, "com.example.billing", "2.0.1")
        audit = ModuleInfo(13, "com.example.audit", "0.9.0")

        self.platform.register_container(
            orders,
            make_container(
                [
                    BeanRecipe("orderService"),
                    BeanRecipe("orderRepository"),
                    ReferenceRecipe("dataSource", "(objectClass=javax.sql.DataSource)", True),
                    ReferenceRecipe("txManager", "(objectClass=TransactionManager)", True),
                ]
            ),
        )
        self.platform.publish(self._event(EventKind.CREATING, orders))
        self.platform.publish(self._event(EventKind.CREATED, orders, offset_ms=5))

        self.platform.register_container(
            billing,
            make_container(
                [
                    BeanRecipe("invoiceFactory"),
                    ReferenceRecipe("paymentGateway", "(objectClass=PaymentGateway)", False),
                    ReferenceRecipe("dataSource", "(objectClass=javax.sql.DataSource)", True),
                ]
            ),
        )
        self.platform.publish(
            self._event(
                EventKind.GRACE_PERIOD,
                billing,
                offset_ms=10,
                dependencies=["(objectClass=PaymentGateway)"],
            )
        )

        self.platform.register_container(
            audit, make_container([ReferenceRecipe("auditSink", "(objectClass=AuditSink)")])
        )
        try:
            raise RuntimeError("Unable to start blueprint container: auditSink timed out")
        except RuntimeError as exc:
            failure = exc
        self.platform.publish(
            self._event(
                EventKind.FAILURE,
                audit,
                offset_ms=15,
                cause=failure,
                dependencies=["(objectClass=AuditSink)"],
            )
        )

        seeded = [orders, billing, audit]
        logger.info("Demo platform seeded with %d modules", len(seeded))
        return seeded


def seed_platform(platform: LocalPlatform) -> list[ModuleInfo]:
    return DemoManager(platform).seed()


__all__ = [
    "BeanRecipe",
    "DemoContainer",
    "DemoManager",
    "RecipeRepository",
    "ReferenceRecipe",
    "make_container",
    "seed_platform",
]
