"""
Integration tests for the blueprint console HTTP surface.

Focus
-----
These tests verify the HTTP contract of the console: the HTML page, the JSON
container endpoints, health, and error mapping. Each test builds its own app
around its own `LocalPlatform`, so no state is shared between tests.

Scenarios
---------
1. **Health**: liveness payload and plugin activation state.
2. **Page**: HTML rendering under the configured label.
3. **JSON**: list/detail endpoints and 404 for unknown modules.
4. **Errors**: unknown event kinds surface as structured 500 responses.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from blueprint_console import __version__
from blueprint_console.api.app import create_app
from blueprint_console.core.settings import Settings
from blueprint_console.demo import BeanRecipe, ReferenceRecipe, make_container
from blueprint_console.engine import BlueprintEvent, EventKind, ModuleInfo
from blueprint_console.hosting import LocalPlatform

ORDERS = ModuleInfo(11, "com.example.orders", "1.4.0")
BILLING = ModuleInfo(12, "com.example.billing", "2.0.1")


@pytest.fixture  # type: ignore[misc]
def platform() -> LocalPlatform:
    return LocalPlatform()


@pytest.fixture  # type: ignore[misc]
def client(platform: LocalPlatform) -> Generator[TestClient, None, None]:
    """A client whose context runs the app lifespan (plugin activation)."""
    app = create_app(platform, Settings(environment="test"))
    with TestClient(app) as c:
        yield c


def _publish_sample(platform: LocalPlatform) -> None:
    platform.register_container(
        ORDERS,
        make_container(
            [
                BeanRecipe("orderService"),
                ReferenceRecipe("dataSource", "(objectClass=DataSource)", satisfied=True),
            ]
        ),
    )
    platform.publish(BlueprintEvent(type=EventKind.CREATED, module=ORDERS, timestamp=1_000))
    platform.register_container(
        BILLING, make_container([ReferenceRecipe("gateway", "(objectClass=Gateway)")])
    )
    platform.publish(
        BlueprintEvent(
            type=EventKind.WAITING,
            module=BILLING,
            timestamp=2_000,
            dependencies=["(objectClass=Gateway)"],
        )
    )


def test_health_check(client: TestClient) -> None:
    """GET /health returns status, environment, version and activation state."""
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["environment"] == "test"
    assert data["version"] == __version__
    assert data["active"] is True


def test_page_renders_html(platform: LocalPlatform, client: TestClient) -> None:
    _publish_sample(platform)

    resp = client.get("/blueprint")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "com.example.orders" in resp.text
    assert "[(objectClass=Gateway)]" in resp.text


def test_list_containers_json(platform: LocalPlatform, client: TestClient) -> None:
    _publish_sample(platform)

    resp = client.get("/blueprint/containers")
    assert resp.status_code == 200
    data = resp.json()

    assert [c["symbolic_name"] for c in data] == ["com.example.orders", "com.example.billing"]
    orders, billing = data
    assert orders["event_type"] == "Created"
    assert orders["missing_dependencies"] is None
    assert orders["cause"] == ""
    assert [r["name"] for r in orders["recipes"]] == ["orderService", "dataSource"]
    assert orders["recipes"][0]["satisfied"] is None

    assert billing["event_type"] == "Waiting"
    assert billing["unsatisfied_count"] == 1
    assert billing["missing_dependencies"] == ["(objectClass=Gateway)"]
    assert billing["recipes"][0] == {
        "name": "gateway",
        "satisfied": False,
        "selector": "(objectClass=Gateway)",
    }


def test_get_container_by_module_id(platform: LocalPlatform, client: TestClient) -> None:
    _publish_sample(platform)

    resp = client.get(f"/blueprint/containers/{ORDERS.module_id}")
    assert resp.status_code == 200
    assert resp.json()["module_id"] == ORDERS.module_id

    missing = client.get("/blueprint/containers/999")
    assert missing.status_code == 404
    assert "999" in missing.json()["detail"]


def test_destroyed_module_disappears(platform: LocalPlatform, client: TestClient) -> None:
    _publish_sample(platform)
    platform.publish(BlueprintEvent(type=EventKind.DESTROYED, module=ORDERS, timestamp=3_000))

    data = client.get("/blueprint/containers").json()
    assert [c["module_id"] for c in data] == [BILLING.module_id]
    assert client.get(f"/blueprint/containers/{ORDERS.module_id}").status_code == 404


def test_unknown_event_kind_returns_structured_error(
    platform: LocalPlatform, client: TestClient
) -> None:
    """An event code without a label fails the render with a JSON 500."""
    platform.publish(BlueprintEvent(type=99, module=ORDERS, timestamp=1_000))

    for path in ("/blueprint", "/blueprint/containers"):
        resp = client.get(path)
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "UnknownEventKind"
        assert "99" in body["detail"]


def test_custom_plugin_label(platform: LocalPlatform) -> None:
    app = create_app(platform, Settings(plugin_label="bp", plugin_title="Containers"))
    with TestClient(app) as c:
        resp = c.get("/bp")
        assert resp.status_code == 200
        assert "<h2>Containers</h2>" in resp.text
        assert c.get("/blueprint").status_code == 404


def test_inactive_plugin_is_unavailable(platform: LocalPlatform) -> None:
    """Without the lifespan running, the plugin is inactive and routes answer 503."""
    client = TestClient(create_app(platform))
    assert client.get("/blueprint").status_code == 503


def test_demo_settings_seed_local_platform() -> None:
    app = create_app(settings=Settings(demo=True))
    with TestClient(app) as c:
        data = c.get("/blueprint/containers").json()
    assert len(data) == 3
    assert {c["event_type"] for c in data} == {"Created", "Grace period", "Failure"}
