"""Exception types raised by the blueprint console core."""

from __future__ import annotations


class BlueprintConsoleError(Exception):
    """Base class for all console errors."""


class InvalidContainerKind(BlueprintConsoleError, TypeError):
    """A container reference does not expose an internal recipe repository.

    Raised while building a snapshot; fatal to that single construction only.
    """

    def __init__(self, container: object) -> None:
        super().__init__(f"Blueprint container does not expose a repository: {container!r}")
        self.container = container


class UnknownEventKind(BlueprintConsoleError, ValueError):
    """An event carries a type code outside the recognized lifecycle kinds."""

    def __init__(self, event_type: int) -> None:
        super().__init__(f"Unknown event type: {event_type}")
        self.event_type = event_type


__all__ = ["BlueprintConsoleError", "InvalidContainerKind", "UnknownEventKind"]
