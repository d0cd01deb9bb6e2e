from typing import Any, Optional, Type, TypeVar

import pydantic

from icar.apis.http_client import ApiClient
from icar.models.base import CamelModel
from icar.models.vehicle_profile import (
    SYMPTOM_STATUSES,
    MaintenanceHistory,
    MaintenanceRecord,
    SymptomReport,
    SymptomReportList,
    UsageHistory,
    VehicleProfile,
    VehicleProfileUpdate,
    VehicleUsage,
)
from icar.utils.errors import ApiError, ValidationError
from icar.utils.logging_config import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=CamelModel)


class VehicleProfileAPI(ApiClient):
    """
    Extended vehicle profile plus usage, maintenance history and symptom logs.

    Failures raise ``ApiError`` carrying a fixed user-facing message
    ("Failed to get usage data", ...); the backend's own text is logged.
    """

    prefix = "/api/vehicles"

    def _call(self, method: str, endpoint: str, failure: str, **kwargs) -> Any:
        try:
            return self.request_json(method, f"{self.prefix}{endpoint}", **kwargs)
        except ApiError as e:
            logger.error(f"{failure}: {e}")
            raise ApiError(failure, status_code=e.status_code, payload=e.payload) from e

    @staticmethod
    def _parse(model: Type[M], body: Any, failure: str, key: Optional[str] = None) -> M:
        record = body.get(key) if key and isinstance(body, dict) else body
        if not isinstance(record, dict):
            logger.error(f"{failure}: unexpected body {body!r}")
            raise ApiError(failure, payload=body)
        try:
            return model.model_validate(record)
        except pydantic.ValidationError as e:
            logger.error(f"{failure}: {e}")
            raise ApiError(failure, payload=body) from e

    # -- profile ---------------------------------------------------------------

    def get_vehicle_profile(self, car_id: str) -> VehicleProfile:
        failure = "Failed to get vehicle profile"
        body = self._call("GET", f"/profile/{car_id}", failure)
        return self._parse(VehicleProfile, body, failure, key="car")

    def update_vehicle_profile(self, car_id: str, update: VehicleProfileUpdate) -> VehicleProfile:
        failure = "Failed to update vehicle profile"
        payload = update.to_payload()
        if not payload:
            raise ValidationError({"profile": "Nothing to update"}, message="Nothing to update")
        body = self._call("PUT", f"/profile/{car_id}", failure, json=payload)
        return self._parse(VehicleProfile, body, failure, key="car")

    # -- usage tracking ------------------------------------------------------------

    def add_usage_data(self, car_id: str, usage: VehicleUsage) -> VehicleUsage:
        failure = "Failed to add usage data"
        body = self._call("POST", f"/{car_id}/usage", failure, json=usage.to_payload())
        return self._parse(VehicleUsage, body, failure, key="usage")

    def get_usage_data(self, car_id: str, limit: int = 50, skip: int = 0) -> UsageHistory:
        failure = "Failed to get usage data"
        body = self._call("GET", f"/{car_id}/usage", failure, params={"limit": limit, "skip": skip})
        return self._parse(UsageHistory, body, failure)

    # -- maintenance history ---------------------------------------------------------

    def add_maintenance_record(self, car_id: str, record: MaintenanceRecord) -> MaintenanceRecord:
        """Send a workshop record; ``totalCost`` is always recomputed from the job lines."""
        failure = "Failed to add maintenance record"
        record = record.model_copy(update={"total_cost": record.compute_total_cost()})
        body = self._call("POST", f"/{car_id}/maintenance", failure, json=record.to_payload())
        return self._parse(MaintenanceRecord, body, failure, key="maintenance")

    def get_maintenance_history(self, car_id: str, limit: int = 20, skip: int = 0) -> MaintenanceHistory:
        failure = "Failed to get maintenance history"
        body = self._call("GET", f"/{car_id}/maintenance", failure, params={"limit": limit, "skip": skip})
        return self._parse(MaintenanceHistory, body, failure)

    # -- symptom reports ---------------------------------------------------------------

    def add_symptom_report(self, car_id: str, report: SymptomReport) -> SymptomReport:
        if report.symptoms.is_empty:
            raise ValidationError({"symptoms": "Describe at least one symptom"})
        failure = "Failed to add symptom report"
        body = self._call("POST", f"/{car_id}/symptoms", failure, json=report.to_payload())
        return self._parse(SymptomReport, body, failure, key="symptomReport")

    def get_symptom_reports(
        self,
        car_id: str,
        status: Optional[str] = None,
        limit: int = 20,
        skip: int = 0,
    ) -> SymptomReportList:
        params: dict = {"limit": limit, "skip": skip}
        if status:
            if status not in SYMPTOM_STATUSES:
                raise ValidationError({"status": f"Unknown status: {status}"})
            params["status"] = status
        failure = "Failed to get symptom reports"
        body = self._call("GET", f"/{car_id}/symptoms", failure, params=params)
        return self._parse(SymptomReportList, body, failure)
