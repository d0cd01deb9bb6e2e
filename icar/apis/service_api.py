"""
Maintenance service endpoints.

Unlike the other wrappers these raise ``ServiceAPIError`` with a message
ready to show to the user; booking and history screens rely on that.
"""

from typing import Any, Dict, NoReturn, Optional
from urllib.parse import quote

import requests

from icar.apis.http_client import ApiClient
from icar.models.service import ManualServiceRequestData, ServiceRequestData, StatusUpdate
from icar.utils.errors import ServiceAPIError
from icar.utils.logging_config import get_logger

logger = get_logger(__name__)

TIMEOUT_MESSAGE = "Request timeout. Please check your connection."


def raise_http_error(response: requests.Response, default_message: str) -> NoReturn:
    status = response.status_code
    if status == 401:
        raise ServiceAPIError("Authentication failed. Please login again.", status_code=status)
    if status == 404:
        raise ServiceAPIError("Resource not found.", status_code=status)
    if status == 500:
        raise ServiceAPIError("Server error. Please try again later.", status_code=status)
    raise ServiceAPIError(f"{default_message} ({status})", status_code=status)


def _json_or_empty(response: requests.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {"error": "Unknown error"}
    return body if isinstance(body, dict) else {}


class ServiceAPI(ApiClient):

    def _send(
        self,
        method: str,
        endpoint: str,
        action: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        try:
            return self.session.request(
                method,
                self.url(endpoint),
                json=json,
                params=params,
                headers=self.build_headers(headers),
                timeout=timeout or self.settings.request_timeout,
            )
        except requests.Timeout:
            logger.error(f"Timeout {action}")
            raise ServiceAPIError(TIMEOUT_MESSAGE)
        except requests.RequestException as e:
            logger.error(f"Error {action}: {e}")
            raise ServiceAPIError(str(e) or "Network error")

    def _decode(self, response: requests.Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError:
            logger.error(f"Error {action}: invalid JSON body")
            raise ServiceAPIError("Invalid JSON response", status_code=response.status_code)

    def get_services_by_type(self, service_type: str, location: Optional[str] = None) -> Any:
        action = "fetching services by type"
        params = {"location": location} if location else None
        response = self._send(
            "GET",
            f"/api/maintenance/service/type/{quote(service_type, safe='')}",
            action,
            params=params,
            headers={"Cache-Control": "no-cache"},
        )
        if not response.ok:
            if response.status_code == 404:
                raise ServiceAPIError("No services found for this category.", status_code=404)
            raise_http_error(response, "Failed to fetch services")
        return self._decode(response, action)

    def get_all_services(
        self,
        service_type: Optional[str] = None,
        location: Optional[str] = None,
        limit: Optional[int] = None,
        include_inactive: bool = False,
    ) -> Any:
        params: Dict[str, Any] = {}
        if service_type:
            params["type"] = service_type
        if location:
            params["location"] = location
        if limit:
            params["limit"] = str(limit)
        if include_inactive:
            params["includeInactive"] = "true"
        action = "fetching services"
        response = self._send("GET", "/api/maintenance/services", action, params=params or None)
        if not response.ok:
            raise_http_error(response, "Failed to fetch services")
        return self._decode(response, action)

    def _create(self, endpoint: str, payload: Dict[str, Any], default_message: str, action: str) -> Any:
        response = self._send("POST", endpoint, action, json=payload, timeout=self.settings.post_timeout)
        if not response.ok:
            error_data = _json_or_empty(response)
            if response.status_code == 400:
                raise ServiceAPIError(
                    error_data.get("error") or "Invalid request data.",
                    status_code=400,
                    payload=error_data,
                )
            if response.status_code == 404:
                raise ServiceAPIError("Car not found.", status_code=404, payload=error_data)
            raise_http_error(response, error_data.get("error") or default_message)
        return self._decode(response, action)

    def create_service_request(self, car_id: str, request_data: ServiceRequestData) -> Any:
        return self._create(
            f"/api/maintenance/request/{car_id}",
            request_data.to_payload(),
            "Failed to create service request",
            "creating service request",
        )

    def create_manual_service_request(self, car_id: str, request_data: ManualServiceRequestData) -> Any:
        return self._create(
            f"/api/maintenance/request/{car_id}/manual",
            request_data.to_payload(),
            "Failed to create manual service request",
            "creating manual service request",
        )

    def _fetch(self, endpoint: str, failure: str, action: str) -> Any:
        response = self._send("GET", endpoint, action)
        if not response.ok:
            logger.error(f"Error {action}: HTTP {response.status_code}")
            raise ServiceAPIError(failure, status_code=response.status_code)
        return self._decode(response, action)

    def get_service_requests_by_car(self, car_id: str) -> Any:
        return self._fetch(
            f"/api/maintenance/car/{car_id}",
            "Failed to fetch service requests",
            "fetching service requests",
        )

    def get_service_requests_by_icar(self, icar_id: str) -> Any:
        return self._fetch(
            f"/api/maintenance/icar/{icar_id}",
            "Failed to fetch service requests",
            "fetching service requests for icar",
        )

    def get_my_service_history(self) -> Any:
        return self._fetch(
            "/api/maintenance/my-service-history",
            "Failed to fetch service history",
            "fetching service history",
        )

    def get_service_request(self, request_id: str) -> Any:
        return self._fetch(
            f"/api/maintenance/request/{request_id}",
            "Failed to fetch service request",
            "fetching service request",
        )

    def update_service_request_status(
        self,
        request_id: str,
        status: str,
        description: Optional[str] = None,
        actual_cost: Optional[float] = None,
        notes: Optional[str] = None,
    ) -> Any:
        """Irepair side: move a request along its lifecycle."""
        action = "updating service request status"
        update = StatusUpdate(status=status, description=description, actual_cost=actual_cost, notes=notes)
        response = self._send(
            "PUT",
            f"/api/maintenance/request/{request_id}/status",
            action,
            json=update.to_payload(),
        )
        if not response.ok:
            error_data = _json_or_empty(response)
            raise ServiceAPIError(
                error_data.get("error") or "Failed to update service request status",
                status_code=response.status_code,
                payload=error_data,
            )
        return self._decode(response, action)
