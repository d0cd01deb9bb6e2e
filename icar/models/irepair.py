from typing import List, Optional

from pydantic import Field

from icar.models.base import CamelModel, DocumentModel
from icar.models.route import Coordinate
from icar.utils.geo import format_distance


class Geolocation(CamelModel):
    lat: float
    lng: float


class IrepairUser(DocumentModel):
    """Mechanic / garage account."""
    type: Optional[str] = None
    nom_garage: Optional[str] = None
    adresse: Optional[str] = None
    zone_geo: Optional[str] = None
    geolocation: Optional[Geolocation] = None
    nom_responsable: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    type_service: List[str] = Field(default_factory=list)
    verified: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Mechanic(CamelModel):
    """Map/list entry derived from an IrepairUser."""
    id: str
    name: str
    address: str = "Address not available"
    phone: Optional[str] = None
    specialties: List[str] = Field(default_factory=lambda: ["General Repair"])
    is_open: bool = True
    coordinates: Coordinate
    distance_km: Optional[float] = None

    @property
    def distance_label(self) -> str:
        if self.distance_km is None:
            return "0 km"
        return format_distance(self.distance_km)

    @classmethod
    def from_irepair(cls, irepair: IrepairUser) -> Optional["Mechanic"]:
        """None when the garage has no usable location."""
        if irepair.id is None or irepair.geolocation is None:
            return None
        return cls(
            id=irepair.id,
            name=irepair.nom_garage or "Unnamed garage",
            address=irepair.adresse or "Address not available",
            phone=irepair.phone_number,
            specialties=irepair.type_service or ["General Repair"],
            coordinates=Coordinate(
                latitude=irepair.geolocation.lat,
                longitude=irepair.geolocation.lng,
            ),
        )
