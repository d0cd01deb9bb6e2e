from typing import Any, Dict

from icar.apis.http_client import ApiClient
from icar.models.api_response import ApiResponse
from icar.models.fuel import CreateFuelEntryData

# The backend mounts the fuel router under the vehicle router, hence the doubled prefix
FUEL_PREFIX = "/api/vehicle/api/vehicle/fuel-tracking"


class FuelService(ApiClient):

    def get_fuel_entries(self, car_id: str) -> ApiResponse:
        return self.make_request("GET", f"{FUEL_PREFIX}/{car_id}").unwrap("fuelEntries", missing=[])

    def create_fuel_entry(self, fuel_data: CreateFuelEntryData) -> ApiResponse:
        return self.make_request("POST", FUEL_PREFIX, json=fuel_data.to_payload()).unwrap("fuelEntry")

    def update_fuel_entry(self, entry_id: str, fuel_data: Dict[str, Any]) -> ApiResponse:
        return self.make_request("PUT", f"{FUEL_PREFIX}/{entry_id}", json=fuel_data).unwrap("fuelEntry")

    def delete_fuel_entry(self, entry_id: str) -> ApiResponse:
        return self.make_request("DELETE", f"{FUEL_PREFIX}/{entry_id}")

    def get_fuel_statistics(self, car_id: str) -> ApiResponse:
        return self.make_request("GET", f"{FUEL_PREFIX}/{car_id}/statistics")
