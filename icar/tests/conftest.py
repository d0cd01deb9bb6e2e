import json
from pathlib import Path
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from icar.config import Settings
from icar.utils.storage import MemoryStore


def make_response(status: int = 200, json_body: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real ``requests.Response`` with the given status and body."""
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    if text is not None:
        response._content = text.encode("utf-8")
    elif json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
    else:
        response._content = b""
    return response


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_url="http://backend.test",
        app_name="ICAR Mobile App",
        version="1.0.0",
        ors_api_key="ors-test-key",
        ors_base_url="https://ors.test",
        chatbot_url="http://chatbot.test",
        storage_path=Path(tmp_path) / "storage.json",
        request_timeout=10.0,
        post_timeout=15.0,
        log_level="DEBUG",
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def logged_in_store() -> MemoryStore:
    return MemoryStore({"@auth_token": "test-token"})


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)
