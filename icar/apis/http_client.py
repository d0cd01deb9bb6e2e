"""
HTTP plumbing shared by the backend API wrappers.

``make_request`` never raises: every outcome is folded into an
``ApiResponse`` envelope so callers can show ``display_message`` to the
user. ``request_json`` is the raising variant.
"""

from typing import Any, Dict, Optional

import requests

from icar.config import Settings, get_settings
from icar.models.api_response import ApiResponse
from icar.utils.errors import ApiError, AuthenticationError
from icar.utils.logging_config import get_logger
from icar.utils.storage import AUTH_TOKEN_KEY, KeyValueStore

logger = get_logger(__name__)

BAD_GATEWAY_ERROR = "Server error (Bad Gateway or unavailable)"
BAD_GATEWAY_MESSAGE = "The server returned a 502 Bad Gateway. Please try again later."
INVALID_JSON_ERROR = "Invalid JSON response"
GENERIC_ERROR = "An error occurred"
NETWORK_ERROR = "Network error"


def error_text(data: Any, default: str = GENERIC_ERROR) -> str:
    """Pick the backend's error text out of a JSON body."""
    if isinstance(data, dict):
        for key in ("error", "message"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return default


class ApiClient:
    """Base class: base URL, bearer token and the response envelope."""

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or get_settings()
        self.store = store
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.settings.api_url

    def get_token(self) -> Optional[str]:
        return self.store.get_item(AUTH_TOKEN_KEY)

    def require_token(self) -> str:
        token = self.get_token()
        if not token:
            raise AuthenticationError()
        return token

    def build_headers(self, extra: Optional[Dict[str, str]] = None, json_body: bool = True) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        token = self.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if extra:
            headers.update(extra)
        return headers

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def make_request(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        # multipart bodies get their Content-Type (with boundary) from requests
        request_headers = self.build_headers(headers, json_body=files is None)
        try:
            response = self.session.request(
                method,
                self.url(endpoint),
                json=json,
                params=params,
                files=files,
                data=data,
                headers=request_headers,
                timeout=timeout or self.settings.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            text = str(e) or NETWORK_ERROR
            return ApiResponse(success=False, error=text, message=text)

        return self.to_envelope(response, endpoint)

    def to_envelope(self, response: requests.Response, endpoint: str = "") -> ApiResponse:
        raw_text = response.text
        try:
            body = response.json()
        except ValueError:
            logger.error(f"Non-JSON response from {endpoint} ({response.status_code}): {raw_text[:200]}")
            if raw_text.lstrip().lower().startswith("<html"):
                return ApiResponse(
                    success=False,
                    error=BAD_GATEWAY_ERROR,
                    message=BAD_GATEWAY_MESSAGE,
                    status_code=response.status_code,
                )
            return ApiResponse(
                success=False,
                error=INVALID_JSON_ERROR,
                message=raw_text,
                status_code=response.status_code,
            )

        message = body.get("message") if isinstance(body, dict) else None
        extracted = body.get("extractedData") if isinstance(body, dict) else None

        if not response.ok:
            text = error_text(body)
            logger.warning(f"{endpoint} answered {response.status_code}: {text}")
            return ApiResponse(
                success=False,
                error=text,
                message=text,
                data=extracted,
                extracted_data=extracted,
                status_code=response.status_code,
            )

        return ApiResponse(
            success=True,
            data=body,
            message=message,
            extracted_data=extracted,
            status_code=response.status_code,
        )

    def request_json(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send a JSON request and return the decoded body; raises ApiError on failure."""
        try:
            response = self.session.request(
                method,
                self.url(endpoint),
                json=json,
                params=params,
                headers=self.build_headers(),
                timeout=timeout or self.settings.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise ApiError(str(e) or NETWORK_ERROR)

        try:
            body = response.json()
        except ValueError:
            raise ApiError(INVALID_JSON_ERROR, status_code=response.status_code, payload=response.text)

        if not response.ok:
            raise ApiError(error_text(body), status_code=response.status_code, payload=body)
        return body
