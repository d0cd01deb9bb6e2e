from datetime import date, datetime
from typing import Optional, Union

from icar.models.base import CamelModel, DocumentModel


class CarData(CamelModel):
    """Car form payload for add/edit."""
    vin: str
    marque: str
    modele: str
    fuel_type: str
    immatriculation_type: str
    numero_immatriculation: str
    registration_subtype: Optional[str] = None
    kilometrage: Optional[Union[int, str]] = None
    # dd/mm/yyyy as typed in the form, or a date
    date_premiere_mise_en_circulation: Union[date, datetime, str]


class Car(DocumentModel):
    vin: Optional[str] = None
    marque: Optional[str] = None
    modele: Optional[str] = None
    fuel_type: Optional[str] = None
    immatriculation_type: Optional[str] = None
    numero_immatriculation: Optional[str] = None
    registration_subtype: Optional[str] = None
    kilometrage: Optional[int] = None
    date_premiere_mise_en_circulation: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def label(self) -> str:
        parts = [self.marque or "", self.modele or ""]
        name = " ".join(p for p in parts if p) or "Unknown car"
        if self.numero_immatriculation:
            return f"{name} ({self.numero_immatriculation})"
        return name


class QrCode(CamelModel):
    qr_code: str
    qr_data: Optional[dict] = None
