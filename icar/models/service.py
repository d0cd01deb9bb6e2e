from enum import Enum
from typing import Any, List, Literal, Optional, Union

from pydantic import Field

from icar.models.base import CamelModel, DocumentModel
from icar.models.irepair import Geolocation


class ServiceStatus(str, Enum):
    """Lifecycle of a service request; transitions happen server-side."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (ServiceStatus.COMPLETED, ServiceStatus.CANCELLED)


class ServiceGarage(DocumentModel):
    """Garage embedded in a service offering (populated ``irepairId``)."""
    nom_garage: Optional[str] = None
    adresse: Optional[str] = None
    geolocation: Optional[Geolocation] = None
    type_service: List[str] = Field(default_factory=list)
    verified: Optional[bool] = None


class ServiceOffering(DocumentModel):
    type: Optional[str] = None
    name: Optional[str] = None
    name_ar: Optional[str] = None
    name_fr: Optional[str] = None
    description: Optional[str] = None
    description_ar: Optional[str] = None
    description_fr: Optional[str] = None
    price: Optional[float] = None
    duration: Optional[str] = None
    includes: List[str] = Field(default_factory=list)
    includes_ar: List[str] = Field(default_factory=list)
    includes_fr: List[str] = Field(default_factory=list)
    icon: Optional[str] = None
    service_frequency: Optional[str] = None
    irepair: Optional[ServiceGarage] = Field(default=None, alias="irepairId")
    distance: Optional[str] = None

    def localized_name(self, language: str = "en") -> str:
        if language == "ar" and self.name_ar:
            return self.name_ar
        if language == "fr" and self.name_fr:
            return self.name_fr
        return self.name or ""

    def localized_description(self, language: str = "en") -> str:
        if language == "ar" and self.description_ar:
            return self.description_ar
        if language == "fr" and self.description_fr:
            return self.description_fr
        return self.description or ""

    def localized_includes(self, language: str = "en") -> List[str]:
        if language == "ar" and self.includes_ar:
            return self.includes_ar
        if language == "fr" and self.includes_fr:
            return self.includes_fr
        return self.includes

    @property
    def garage_name(self) -> str:
        return (self.irepair.nom_garage if self.irepair else None) or "Unknown garage"


class ServiceRequestData(CamelModel):
    service_id: str
    date: Optional[str] = None
    time: str
    payment_method: Literal["cash", "card"] = "cash"
    description: Optional[str] = None


class ManualServiceRequestData(CamelModel):
    service_type: str
    description: str
    date: str
    is_manual: bool = True
    service_name: Optional[str] = None


class StatusUpdate(CamelModel):
    status: str
    description: Optional[str] = None
    actual_cost: Optional[float] = None
    notes: Optional[str] = None


class ServiceRequest(DocumentModel):
    # car/service/irepair come back either as ids or as populated documents
    car: Optional[Union[str, dict]] = Field(default=None, alias="carId")
    service: Optional[Union[str, dict]] = Field(default=None, alias="serviceId")
    irepair: Optional[Union[str, dict]] = Field(default=None, alias="irepairId")
    icar: Optional[Union[str, dict]] = Field(default=None, alias="icarId")
    status: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    payment_method: Optional[str] = None
    description: Optional[str] = None
    service_type: Optional[str] = None
    is_manual: Optional[bool] = None
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def status_enum(self) -> Optional[ServiceStatus]:
        if not self.status:
            return None
        try:
            return ServiceStatus(self.status.lower().replace("-", "_").replace(" ", "_"))
        except ValueError:
            return None

    def _ref_id(self, value: Any) -> Optional[str]:
        if isinstance(value, dict):
            return value.get("_id") or value.get("id")
        return value

    @property
    def car_id(self) -> Optional[str]:
        return self._ref_id(self.car)

    @property
    def service_id(self) -> Optional[str]:
        return self._ref_id(self.service)
