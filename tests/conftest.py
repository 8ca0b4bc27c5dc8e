from typing import Generator

import httpx
import pytest

from app.api_client import create_client
from app.storage import ClientStorage

from tests.common import BASE_URL


@pytest.fixture
def api_client() -> Generator[httpx.Client, None, None]:
    client = create_client(BASE_URL)
    yield client
    client.close()


@pytest.fixture
def storage(tmp_path) -> ClientStorage:
    return ClientStorage(tmp_path / "client_storage.json")
