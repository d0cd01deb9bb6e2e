"""
Runtime configuration for the ICAR client.

Values come from the environment (optionally a .env file) with defaults
matching the development backend.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_URL = "http://192.168.1.122:8888"
DEFAULT_CHATBOT_URL = "http://192.168.100.14:8000"
DEFAULT_ORS_URL = "https://api.openrouteservice.org"
DEFAULT_STORAGE_PATH = "~/.icar/storage.json"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    api_url: str
    app_name: str
    version: str
    ors_api_key: str
    ors_base_url: str
    chatbot_url: str
    storage_path: Path
    request_timeout: float
    post_timeout: float
    log_level: str


def load_settings() -> Settings:
    """Read settings from the environment, ignoring any cached value."""
    load_dotenv(override=True)
    return Settings(
        api_url=os.getenv("ICAR_API_URL", DEFAULT_API_URL).rstrip("/"),
        app_name=os.getenv("ICAR_APP_NAME", "ICAR Mobile App"),
        version=os.getenv("ICAR_APP_VERSION", "1.0.0"),
        ors_api_key=os.getenv("ORS_API_KEY", ""),
        ors_base_url=os.getenv("ORS_BASE_URL", DEFAULT_ORS_URL).rstrip("/"),
        chatbot_url=os.getenv("CHATBOT_API_URL", DEFAULT_CHATBOT_URL).rstrip("/"),
        storage_path=Path(os.getenv("ICAR_STORAGE_PATH", DEFAULT_STORAGE_PATH)).expanduser(),
        request_timeout=_env_float("ICAR_REQUEST_TIMEOUT", 10.0),
        post_timeout=_env_float("ICAR_POST_TIMEOUT", 15.0),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
