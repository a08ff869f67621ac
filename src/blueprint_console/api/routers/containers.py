"""
Console routes for blueprint containers.

Endpoints (mounted under ``/{plugin_label}``)
---------------------------------------------
- `GET /`: the HTML console page.
- `GET /containers`: all containers as JSON, in display order.
- `GET /containers/{module_id}`: one container, or 404.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from blueprint_console.api.schemas import ContainerView
from blueprint_console.plugin import BlueprintConsolePlugin

router = APIRouter(tags=["Blueprint"])


def get_plugin(request: Request) -> BlueprintConsolePlugin:
    """Return the plugin attached to the application by the factory."""
    plugin: BlueprintConsolePlugin = request.app.state.plugin
    if not plugin.active:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Blueprint console plugin is not active",
        )
    return plugin


PluginDep = Annotated[BlueprintConsolePlugin, Depends(get_plugin)]


@router.get("", response_class=HTMLResponse, summary="Blueprint container page")
def container_page(plugin: PluginDep) -> HTMLResponse:
    return HTMLResponse(content=plugin.render())


@router.get(
    "/containers",
    response_model=list[ContainerView],
    summary="List blueprint containers",
)
def list_containers(plugin: PluginDep) -> list[ContainerView]:
    """Return every known container, ordered by event time, name and version."""
    return [ContainerView.from_snapshot(s) for s in plugin.snapshot_all()]


@router.get(
    "/containers/{module_id}",
    response_model=ContainerView,
    summary="Get one blueprint container",
)
def get_container(module_id: int, plugin: PluginDep) -> ContainerView:
    snapshot = plugin.registry.get(module_id)
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No blueprint container for module {module_id}",
        )
    return ContainerView.from_snapshot(snapshot)


__all__ = ["get_plugin", "router"]
