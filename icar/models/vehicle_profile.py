"""
Extended vehicle profile and the per-car logs kept next to it: usage
sessions, workshop maintenance records and owner symptom reports.
"""

from typing import Any, List, Optional

from pydantic import ConfigDict, Field

from icar.models.base import CamelModel, DocumentModel, to_camel
from icar.models.car import Car

ENGINE_TYPES = ["Petrol", "Diesel", "Electric", "Hybrid", "Plug-in Hybrid", "LPG", "CNG"]
TRANSMISSION_TYPES = ["Manual", "Automatic", "CVT", "Semi-automatic"]
DRIVETRAINS = ["FWD", "RWD", "AWD", "4WD"]
DISTANCE_UNITS = ["km", "mi"]

USAGE_SESSION_TYPES = ["app_open", "trip_end", "manual_entry"]
PARKING_TYPES = ["garage", "covered", "street", "parking_lot"]
TOWING_FREQUENCIES = ["never", "occasionally", "frequently"]

MAINTENANCE_SERVICE_TYPES = ["scheduled", "repair", "inspection", "warranty", "recall", "emergency"]
MAINTENANCE_REASONS = [
    "scheduled_maintenance", "symptom_based", "failure", "inspection", "warranty_work", "recall",
]
JOB_CATEGORIES = [
    "engine", "transmission", "brakes", "tires", "electrical", "cooling",
    "exhaust", "suspension", "body", "interior", "other",
]

SYMPTOM_STATUSES = ["submitted", "reviewed", "diagnosed", "resolved", "requires_inspection"]
URGENCY_LEVELS = ["low", "medium", "high", "critical"]
DRIVING_SAFETY = ["safe_to_drive", "drive_with_caution", "avoid_highways", "stop_driving_immediately"]
WARNING_LIGHTS = [
    "check_engine", "abs", "brake", "oil_pressure", "temperature",
    "battery", "airbag", "tire_pressure", "other",
]


class _LogModel(CamelModel):
    # nested log entries keep whatever extra detail the backend stores
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class VehicleProfile(Car):
    year: Optional[int] = None
    trim: Optional[str] = None
    engine_type: Optional[str] = None
    engine_size: Optional[float] = None
    transmission_type: Optional[str] = None
    drivetrain: Optional[str] = None
    kilometerage_unit: Optional[str] = None
    plate_country: Optional[str] = None
    plate_region: Optional[str] = None
    service_history: List[str] = Field(default_factory=list)
    usage_data: List[str] = Field(default_factory=list)
    maintenance_history: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class VehicleProfileUpdate(CamelModel):
    """Partial update; only the fields that are set are sent."""
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    trim: Optional[str] = None
    engine_type: Optional[str] = None
    engine_size: Optional[float] = Field(default=None, gt=0)
    transmission_type: Optional[str] = None
    drivetrain: Optional[str] = None
    kilometerage_unit: Optional[str] = None
    plate_country: Optional[str] = None
    plate_region: Optional[str] = None
    kilometrage: Optional[int] = Field(default=None, ge=0)


class VehicleUsage(DocumentModel):
    car_id: Optional[str] = None
    user_id: Optional[str] = None
    session_type: str = "manual_entry"
    odometer_reading: float = Field(ge=0)
    trip_distance: Optional[float] = Field(default=None, ge=0)
    city_driving_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    highway_driving_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    average_trip_length: Optional[float] = None
    idle_time_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    harsh_acceleration_events: Optional[int] = None
    harsh_braking_events: Optional[int] = None
    cold_starts_count: Optional[int] = None
    load_carrying: Optional[bool] = None
    towing_frequency: Optional[str] = None
    parking_type: Optional[str] = None
    environmental_data: Optional[dict] = None
    extreme_temperature_exposure: Optional[dict] = None
    created_at: Optional[str] = None


class ReplacedPart(_LogModel):
    part_name: str
    part_sku: Optional[str] = Field(default=None, alias="partSKU")
    quantity: int = 1
    cost: Optional[float] = None


class FluidChange(_LogModel):
    fluid_type: str
    specification: Optional[str] = None
    viscosity_grade: Optional[str] = None
    quantity: Optional[float] = None
    cost: Optional[float] = None


class JobLine(_LogModel):
    service_category: str = "other"
    description: str
    parts_replaced: List[ReplacedPart] = Field(default_factory=list)
    fluids_changed: List[FluidChange] = Field(default_factory=list)
    labor_hours: Optional[float] = None
    labor_cost: Optional[float] = None


class TotalCost(CamelModel):
    parts: float = 0
    labor: float = 0
    total: float = 0


class WorkshopInfo(_LogModel):
    mechanic_id: Optional[str] = None
    workshop_name: Optional[str] = None
    workshop_location: Optional[str] = None
    contact_info: Optional[str] = None


class MaintenanceRecord(DocumentModel):
    car_id: Optional[str] = None
    user_id: Optional[str] = None
    service_date: str
    odometer_at_service: float = Field(ge=0)
    workshop_info: Optional[WorkshopInfo] = None
    service_type: str = "scheduled"
    reason_for_service: str = "scheduled_maintenance"
    job_lines: List[JobLine] = Field(default_factory=list)
    total_cost: Optional[TotalCost] = None
    warranty_work: Optional[bool] = None
    recall_work: Optional[bool] = None
    recall_number: Optional[str] = None
    service_notes: Optional[str] = None
    next_service_due: Optional[dict] = None
    photos: List[dict] = Field(default_factory=list)
    digital_receipt: Optional[dict] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def compute_total_cost(self) -> TotalCost:
        """Parts plus labor over every job line; fluids are not counted."""
        parts = sum(part.cost or 0 for job in self.job_lines for part in job.parts_replaced)
        labor = sum(job.labor_cost or 0 for job in self.job_lines)
        return TotalCost(parts=parts, labor=labor, total=parts + labor)


class Noise(_LogModel):
    type: str = "other"
    location: str = "other"
    when: str = "constant"
    speed: str = "all_speeds"
    description: Optional[str] = None
    severity: str = "moderate"


class Vibration(_LogModel):
    location: str = "other"
    when: str = "constant_speed"
    speed: str = "all_speeds"
    description: Optional[str] = None
    severity: str = "moderate"


class WarningLight(_LogModel):
    light_type: str
    behavior: str = "constant"
    when: str = "driving"
    description: Optional[str] = None


class Smell(_LogModel):
    type: str = "other"
    location: str = "other"
    when: str = "driving"
    intensity: str = "moderate"
    description: Optional[str] = None


class FluidSpot(_LogModel):
    color: str = "other"
    location: str = "center"
    consistency: str = "thin"
    size: str = "small_drops"
    frequency: str = "once"


class Symptoms(_LogModel):
    noises: List[Noise] = Field(default_factory=list)
    vibrations: List[Vibration] = Field(default_factory=list)
    warning_lights: List[WarningLight] = Field(default_factory=list)
    smells: List[Smell] = Field(default_factory=list)
    performance: dict[str, Any] = Field(default_factory=dict)
    fluid_spots: List[FluidSpot] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.noises or self.vibrations or self.warning_lights
            or self.smells or self.fluid_spots or any(self.performance.values())
        )


class SymptomReport(DocumentModel):
    car_id: Optional[str] = None
    user_id: Optional[str] = None
    report_date: Optional[str] = None
    odometer_reading: float = Field(default=0, ge=0)
    symptoms: Symptoms = Field(default_factory=Symptoms)
    audio_recordings: List[dict] = Field(default_factory=list)
    video_recordings: List[dict] = Field(default_factory=list)
    photos: List[dict] = Field(default_factory=list)
    urgency: str = "medium"
    driving_safety: str = "safe_to_drive"
    additional_notes: Optional[str] = None
    mechanic_response: Optional[dict] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UsageHistory(CamelModel):
    usage_data: List[VehicleUsage] = Field(default_factory=list)
    total: int = 0


class MaintenanceHistory(CamelModel):
    maintenance_history: List[MaintenanceRecord] = Field(default_factory=list)
    total: int = 0


class SymptomReportList(CamelModel):
    symptom_reports: List[SymptomReport] = Field(default_factory=list)
    total: int = 0
