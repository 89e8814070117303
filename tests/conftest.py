from pathlib import Path
from typing import Any, Callable, Generator

import httpx
import pytest
from avocado_core.config import AvocadoConfig
from avocado_core.locator import FileLocator
from avocado_core.testing import UnitTestHarness


@pytest.fixture(scope="session")
def harness() -> Generator[UnitTestHarness, None, None]:
    with UnitTestHarness() as h:
        yield h


@pytest.fixture
def config(tmp_path: Path) -> AvocadoConfig:
    return AvocadoConfig(temp_dir=tmp_path / "temp", include_sys_path=False)


@pytest.fixture
def mock_http() -> Generator[Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client], None, None]:
    clients: list[httpx.Client] = []

    def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
        clients.append(client)
        return client

    yield _client

    for client in clients:
        client.close()


@pytest.fixture
def http_locator(config: AvocadoConfig, mock_http: Any) -> Callable[..., FileLocator]:
    def _locator(handler: Callable[[httpx.Request], httpx.Response]) -> FileLocator:
        return FileLocator(config, client=mock_http(handler))

    return _locator
