from typing import Optional

from icar.apis.car_api import CarService
from icar.models.api_response import ApiResponse
from icar.models.car import CarData
from icar.utils.errors import ValidationError
from icar.utils.validation import CarForm, build_registration_number, validate_car_form


def form_to_car_data(form: CarForm) -> CarData:
    return CarData(
        vin=form.vin,
        marque=form.marque,
        modele=form.modele,
        fuel_type=form.fuel_type,
        immatriculation_type=form.immatriculation_type,
        numero_immatriculation=build_registration_number(form),
        kilometrage=int(form.kilometrage) if form.kilometrage else 0,
        date_premiere_mise_en_circulation=form.date_premiere_mise_en_circulation,
    )


def submit_car_form(car_service: CarService, form: CarForm, car_id: Optional[str] = None) -> ApiResponse:
    """Validate the form and add the car, or edit it when ``car_id`` is given."""
    errors = validate_car_form(form)
    if errors:
        raise ValidationError(errors)
    if not form.date_premiere_mise_en_circulation:
        raise ValidationError({"date_premiere_mise_en_circulation": "First registration date is required"})

    car_data = form_to_car_data(form)
    if car_id:
        return car_service.edit_car(car_id, car_data)
    return car_service.add_car(car_data)
