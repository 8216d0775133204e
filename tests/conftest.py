import json
from typing import Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from hubdeploy.modules.hubinstall.service import DeploymentOrchestrator
from hubdeploy.modules.hubinstall.transport import HubHttpClient
from hubdeploy.settings import Settings


DRIVER_SOURCE = """/**
 * hub: 192.168.0.200
 */
metadata {
    definition(name: "File Manager Device", namespace: "jpage4500", author: "Joe Page") {
        capability "Sensor"
    }
}
"""

APP_SOURCE = """definition(
    name: "File Manager Album",
    namespace: "jpage4500",
    oauth: true,
    iconUrl: '',
)
preferences {
    page(name: "mainPage")
}
"""


def build_settings(tmp_path=None, **overrides) -> Settings:
    defaults = {}
    if tmp_path is not None:
        defaults["context_file"] = str(tmp_path / "context.json")
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


class FakeHub:
    """Scriptable stand-in for the hub, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.calls: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def on(self, method: str, path: str, **kwargs) -> None:
        def _respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(**kwargs)

        self.routes[(method, path)] = _respond

    def on_call(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def catalog(self, endpoint: str, entries: List[dict]) -> None:
        self.on("GET", f"/hub2/{endpoint}", status_code=200, content=json.dumps(entries).encode())

    def accept(self, method: str, path: str, success: bool = True, message: Optional[str] = None) -> None:
        body = json.dumps({"success": success, "message": message}).encode()
        self.on(method, path, status_code=200, content=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, content=b"not found")
        return route(request)

    def paths(self) -> List[Tuple[str, str]]:
        return [(request.method, request.url.path) for request in self.calls]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def orchestrator(self, settings: Settings) -> DeploymentOrchestrator:
        return DeploymentOrchestrator(settings, http_client=HubHttpClient(settings, client=self.client()))


@pytest.fixture
def fake_hub() -> FakeHub:
    return FakeHub()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return build_settings(tmp_path)
