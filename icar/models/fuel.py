from typing import Optional

from icar.models.base import CamelModel, DocumentModel


class FuelEntry(DocumentModel):
    car_id: Optional[str] = None
    user_id: Optional[str] = None
    date: Optional[str] = None
    odometer_reading: Optional[float] = None
    fuel_quantity: Optional[float] = None
    price_per_liter: Optional[float] = None
    total_cost: Optional[float] = None
    fuel_station: Optional[str] = None
    driving_conditions: Optional[str] = None
    fuel_type: Optional[str] = None
    distance_traveled: Optional[float] = None
    fuel_consumption: Optional[float] = None
    cost_per_km: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CreateFuelEntryData(CamelModel):
    car_id: str
    date: str
    odometer_reading: float
    fuel_quantity: float
    price_per_liter: float
    fuel_station: str
    driving_conditions: str
    fuel_type: str


class FuelStatistics(CamelModel):
    avg_consumption: Optional[float] = None
    avg_cost_per_km: Optional[float] = None
    total_distance: Optional[float] = None
    total_fuel: Optional[float] = None
    total_cost: Optional[float] = None
    entries_count: Optional[int] = None
