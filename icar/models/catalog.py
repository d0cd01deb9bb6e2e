"""
Static reference data used by the car form and the booking wizard.
"""

from typing import Dict, List

FUEL_TYPES = ["Essence", "Diesel", "Hybride", "Électrique", "GPL"]

REGISTRATION_TYPE_TUN = "TUN"
REGISTRATION_TYPE_RS = "RS"
REGISTRATION_TYPES = [REGISTRATION_TYPE_TUN, REGISTRATION_TYPE_RS]

CAR_MODELS: Dict[str, List[str]] = {
    "Audi": ["A3", "A4", "A6", "Q3", "Q5", "Q7"],
    "BMW": ["Série 1", "Série 3", "Série 5", "X1", "X3", "X5"],
    "Chery": ["Arrizo 5", "Tiggo 2 Pro", "Tiggo 4 Pro", "Tiggo 7 Pro", "Tiggo 8 Pro"],
    "Citroën": ["Berlingo", "C3", "C4", "C5 Aircross", "Jumpy"],
    "Dacia": ["Duster", "Logan", "Sandero", "Sandero Stepway"],
    "Fiat": ["500", "Doblo", "Doblo Combi", "Ducato", "Fiorino Combi", "Scudo Combi", "Tipo Berline"],
    "Ford": ["Everest", "Ranger", "Ranger Raptor"],
    "Geely": ["Azkarra", "Coolray", "Emgrand", "Geometry C", "GX3 Pro", "Monjaro", "Starray", "Tugella"],
    "Honda": ["Accord", "City", "Civic", "Civic Hybride", "Civic Type R", "CR-V", "CR-V Hybride", "HR-V", "Jazz", "ZR-V"],
    "Hyundai": ["Bayon", "Creta", "Grand i10", "Grand i10 Populaire", "Grand i10 Sedan", "i20", "Ioniq 5", "Kona", "Tucson", "Venue"],
    "KIA": ["EV6", "EV9", "Niro Hybride", "Picanto", "Picanto Populaire", "Seltos", "Sonet", "Sportage", "Stonic"],
    "Mahindra": ["KUV 100", "Pick-up DC", "Pick-up SC", "XUV 300"],
    "Mercedes-Benz": ["CLA", "Classe A", "Classe C", "Classe E", "Classe S", "GLA", "GLC", "GLE"],
    "MG": ["3", "4", "5", "One", "RX5", "ZS"],
    "Mitsubishi": ["Attrage Populaire", "Eclipse Cross", "L200 Double Cabine", "Pajero", "Pajero Sport"],
    "Nissan": ["Juke", "Navara", "Qashqai e-Power"],
    "Opel": ["Combo Cargo", "Corsa", "Crossland", "Grandland", "Mokka"],
    "Peugeot": ["2008", "208", "308", "408", "Boxer", "Expert", "Landtrek Double Cabine", "Partner", "Rifter"],
    "Renault": ["Austral", "Clio", "Express Combi", "Express Van", "Kwid Populaire", "Master", "Megane"],
    "Seat": ["Arona", "Ateca", "Ibiza", "Leon"],
    "Skoda": ["Fabia", "Kamiq", "Kushaq", "Octavia", "Scala"],
    "Suzuki": ["Baleno", "Celerio Populaire", "Ertiga", "Fronx", "Jimny 3 portes", "Jimny 5 portes", "Swift"],
    "Toyota": ["Corolla Sedan", "Fortuner", "Hiace", "Hilux Double Cabine", "Land Cruiser 300", "Prado", "RAV 4 Hybride", "Yaris Cross Hybride", "Yaris Hybride"],
    "Volkswagen": ["Amarok", "Caddy Cargo", "Golf 8", "Polo", "T-Cross", "Tiguan", "Virtus"],
    "Wallyscar": ["Annibal", "Annibal XXL"],
}

# Service categories offered in the booking wizard; "id" matches ServiceOffering.type
SERVICE_CATEGORIES: List[Dict[str, str]] = [
    {"id": "Basic Service", "name": "Basic / Interim Service", "frequency": "every 6 months or 5,000–10,000 km"},
    {"id": "Full Service", "name": "Full / Major Service", "frequency": "every 12 months or 15,000–20,000 km"},
    {"id": "Manufacturer Service", "name": "Manufacturer / Scheduled Service", "frequency": "follows manufacturer schedule"},
    {"id": "Engine Diagnostic", "name": "Engine Diagnostic Service", "frequency": "when check engine light is on"},
    {"id": "Car Detailing", "name": "Car Detailing / Valet Service", "frequency": "as needed"},
    {"id": "AC Service", "name": "Air Conditioning Service", "frequency": "every 1–2 years"},
    {"id": "Transmission Service", "name": "Transmission Service", "frequency": "every 60,000–100,000 km"},
    {"id": "Brake Service", "name": "Brake Service", "frequency": "when performance drops"},
    {"id": "Tire Service", "name": "Tire and Alignment Service", "frequency": "every 10,000–15,000 km"},
    {"id": "Battery Service", "name": "Battery Service", "frequency": "every 3–5 years"},
]

# The "All" pseudo-category of the wizard
ALL_CATEGORIES = ""

CATEGORY_IDS = [c["id"] for c in SERVICE_CATEGORIES]

DEFAULT_BOOKING_TIME = "09:00"
DEFAULT_PAYMENT_METHOD = "cash"
PAYMENT_METHODS = ["cash", "card"]

SUPPORTED_LANGUAGES = ["en", "fr", "ar"]


def models_for(marque: str) -> List[str]:
    return CAR_MODELS.get(marque, [])
