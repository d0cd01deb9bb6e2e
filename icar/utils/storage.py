"""
Device key-value storage.

A small JSON file holding string entries: the auth token and the
flow-continuation flags of the signup and password reset flows.
"""

import json
import os
from pathlib import Path
from typing import Dict, Iterable, Optional

from icar.utils.logging_config import get_logger

logger = get_logger(__name__)

AUTH_TOKEN_KEY = "@auth_token"
USER_PHONE_KEY = "userPhone"
RESET_PHONE_KEY = "resetPhone"
RESET_CODE_KEY = "resetCode"

ALL_KEYS = (AUTH_TOKEN_KEY, USER_PHONE_KEY, RESET_PHONE_KEY, RESET_CODE_KEY)


class KeyValueStore:
    """JSON-file backed string store with get/set/remove semantics."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning(f"Storage file {self.path} unreadable, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold an object, starting empty")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = str(value)
        self._write(data)

    def remove_item(self, key: str) -> None:
        self.multi_remove([key])

    def multi_remove(self, keys: Iterable[str]) -> None:
        data = self._read()
        changed = False
        for key in keys:
            if key in data:
                del data[key]
                changed = True
        if changed:
            self._write(data)

    def get_all(self) -> Dict[str, str]:
        return self._read()


class MemoryStore(KeyValueStore):
    """In-process store, used when nothing should touch the disk."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self.path = Path(":memory:")

    def _read(self) -> Dict[str, str]:
        return dict(self._data)

    def _write(self, data: Dict[str, str]) -> None:
        self._data = dict(data)
