from typing import Any, Optional

from icar.models.base import CamelModel


class ApiResponse(CamelModel):
    """Envelope returned by the non-raising API wrappers."""

    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Optional[str] = None
    extracted_data: Any = None
    status_code: Optional[int] = None

    @property
    def display_message(self) -> str:
        """Best-effort text for an alert: message first, then error."""
        return self.message or self.error or ("OK" if self.success else "An error occurred")

    def unwrap(self, key: str, missing: Any = ...) -> "ApiResponse":
        """
        Replace ``data`` with ``data[key]`` when present.

        ``missing`` (if given) becomes ``data`` when the key is absent.
        """
        if self.success and isinstance(self.data, dict) and self.data.get(key) is not None:
            return self.model_copy(update={"data": self.data[key]})
        if missing is not ...:
            return self.model_copy(update={"data": missing})
        return self
