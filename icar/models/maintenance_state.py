"""
Maintenance car state: the snapshot of a car's wear items recorded when a
service request is booked.

Every member is optional; the backend stores whatever the owner filled in.
"""

from typing import List, Optional

from pydantic import ConfigDict, Field

from icar.models.base import CamelModel, to_camel


class _StateModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class DueAt(_StateModel):
    km: Optional[int] = None
    date: Optional[str] = None


class ChangeRecord(_StateModel):
    last_change_km: Optional[int] = None
    last_change_date: Optional[str] = None
    next_change_due: Optional[DueAt] = None


class EngineOil(ChangeRecord):
    oil_type: Optional[str] = None


class TransmissionFluid(ChangeRecord):
    is_automatic: Optional[bool] = None


class PowerSteeringFluid(ChangeRecord):
    is_hydraulic: Optional[bool] = None


class ReplacementRecord(_StateModel):
    last_replacement_km: Optional[int] = None
    last_replacement_date: Optional[str] = None
    next_replacement_due: Optional[DueAt] = None


class SparkPlugs(ReplacementRecord):
    plug_type: Optional[str] = None


class TimingBelt(ReplacementRecord):
    belt_type: Optional[str] = None
    is_overdue: Optional[bool] = None


class BrakeFluid(_StateModel):
    last_change_date: Optional[str] = None
    is_overdue: Optional[bool] = None
    next_change_due: Optional[str] = None


class TirePressure(_StateModel):
    front_psi: Optional[float] = Field(default=None, alias="frontPSI")
    rear_psi: Optional[float] = Field(default=None, alias="rearPSI")
    last_check_date: Optional[str] = None


class AxlePair(_StateModel):
    front: Optional[ReplacementRecord] = None
    rear: Optional[ReplacementRecord] = None


class Tires(_StateModel):
    replacement_date: Optional[str] = None
    mileage_at_replacement: Optional[int] = None
    last_rotation_date: Optional[str] = None
    last_pressure_check_date: Optional[str] = None


class Battery12V(_StateModel):
    install_date: Optional[str] = None
    last_check_date: Optional[str] = None
    last_voltage: Optional[float] = None
    next_check_due: Optional[str] = None


class Inspection(_StateModel):
    last_inspection_date: Optional[str] = None
    last_repair_date: Optional[str] = None
    condition: Optional[str] = None


class Suspension(_StateModel):
    shocks_struts: Optional[Inspection] = None
    bushings: Optional[Inspection] = None


class WiperBlades(_StateModel):
    last_replacement_date: Optional[str] = None
    next_replacement_due: Optional[str] = None


class HvBattery(_StateModel):
    state_of_health: Optional[float] = None
    last_check_date: Optional[str] = None
    next_check_due: Optional[str] = None


class ChargingPortCable(_StateModel):
    last_inspection_date: Optional[str] = None
    condition: Optional[str] = None
    condition_notes: Optional[str] = None


class AdditionalDetails(_StateModel):
    recent_accidents: Optional[str] = None
    custom_modifications: Optional[str] = None
    fuel_type: Optional[str] = None
    exhaust_system_checks: Optional[str] = None
    alignment_history: Optional[str] = None
    other_notes: Optional[str] = None


class UploadedPhoto(_StateModel):
    url: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None


class MaintenanceCarState(_StateModel):
    current_mileage: Optional[int] = None
    engine_oil: Optional[EngineOil] = None
    oil_filter: Optional[ChangeRecord] = None
    coolant_antifreeze: Optional[ReplacementRecord] = None
    transmission_fluid: Optional[TransmissionFluid] = None
    brake_fluid: Optional[BrakeFluid] = None
    power_steering_fluid: Optional[PowerSteeringFluid] = None
    fuel_filter: Optional[ChangeRecord] = None
    air_filter: Optional[ChangeRecord] = None
    cabin_filter: Optional[ChangeRecord] = None
    tire_pressure: Optional[TirePressure] = None
    brake_pads: Optional[AxlePair] = None
    brake_discs_rotors: Optional[AxlePair] = None
    tires: Optional[Tires] = None
    battery_12v: Optional[Battery12V] = Field(default=None, alias="battery12V")
    spark_plugs_glow_plugs: Optional[SparkPlugs] = None
    timing_belt_chain: Optional[TimingBelt] = None
    suspension: Optional[Suspension] = None
    wiper_blades: Optional[WiperBlades] = None
    hv_battery: Optional[HvBattery] = None
    inverter_coolant: Optional[ReplacementRecord] = None
    charging_port_cable: Optional[ChargingPortCable] = None
    additional_details: Optional[AdditionalDetails] = None
    uploaded_photos: List[UploadedPhoto] = Field(default_factory=list)
