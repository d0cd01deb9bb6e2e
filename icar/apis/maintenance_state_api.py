from typing import Any

from icar.apis.http_client import ApiClient
from icar.models.maintenance_state import MaintenanceCarState
from icar.utils.errors import ApiError
from icar.utils.logging_config import get_logger

logger = get_logger(__name__)


class MaintenanceCarStateAPI(ApiClient):
    """Car condition snapshots attached to maintenance requests."""

    prefix = "/api/vehicle"

    def _call(self, method: str, endpoint: str, action: str, **kwargs) -> Any:
        try:
            return self.request_json(method, f"{self.prefix}{endpoint}", **kwargs)
        except ApiError as e:
            logger.error(f"Error {action}: {e}")
            raise

    def create_maintenance_car_state(self, car_id: str, maintenance_request_id: str, data: MaintenanceCarState) -> Any:
        return self._call(
            "POST",
            f"/{car_id}/maintenance-state/{maintenance_request_id}",
            "creating maintenance car state",
            json=data.to_payload(),
        )

    def update_maintenance_car_state(self, car_id: str, maintenance_request_id: str, data: MaintenanceCarState) -> Any:
        return self._call(
            "PUT",
            f"/{car_id}/maintenance-state/{maintenance_request_id}",
            "updating maintenance car state",
            json=data.to_payload(),
        )

    def get_maintenance_car_state(self, car_id: str, maintenance_request_id: str) -> Any:
        return self._call(
            "GET",
            f"/{car_id}/maintenance-state/{maintenance_request_id}",
            "getting maintenance car state",
        )

    def get_maintenance_car_states_by_car(self, car_id: str, limit: int = 20, skip: int = 0) -> Any:
        return self._call(
            "GET",
            f"/{car_id}/maintenance-states",
            "getting maintenance car states by car",
            params={"limit": limit, "skip": skip},
        )

    def get_user_maintenance_car_states(self, limit: int = 50, skip: int = 0) -> Any:
        return self._call(
            "GET",
            "/user/maintenance-states",
            "getting user maintenance car states",
            params={"limit": limit, "skip": skip},
        )

    def delete_maintenance_car_state(self, car_id: str, maintenance_request_id: str) -> Any:
        return self._call(
            "DELETE",
            f"/{car_id}/maintenance-state/{maintenance_request_id}",
            "deleting maintenance car state",
        )

    def get_maintenance_dashboard(self, car_id: str) -> Any:
        return self._call("GET", f"/{car_id}/maintenance-dashboard", "getting maintenance dashboard")
