"""
Vehicle endpoints: the owner's garage of cars, carte grise OCR and QR codes.
"""

from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from icar.apis.http_client import ApiClient
from icar.models.api_response import ApiResponse
from icar.models.car import CarData
from icar.utils.errors import AuthenticationError
from icar.utils.logging_config import get_logger

logger = get_logger(__name__)


def format_registration_date(value: Union[date, datetime, str]) -> str:
    """
    First registration date as ISO-8601 UTC.

    Strings are read as dd/mm/yyyy (the form format); ISO strings pass through.
    """
    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min, tzinfo=timezone.utc)
    else:
        text = value.strip()
        if "/" in text:
            moment = datetime.strptime(text, "%d/%m/%Y").replace(tzinfo=timezone.utc)
        else:
            moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def car_payload(car_data: CarData) -> Dict[str, Any]:
    payload = car_data.to_payload()
    kilometrage = car_data.kilometrage
    if kilometrage in (None, ""):
        payload.pop("kilometrage", None)
    else:
        payload["kilometrage"] = int(kilometrage)
    payload["datePremiereMiseEnCirculation"] = format_registration_date(
        car_data.date_premiere_mise_en_circulation
    )
    return payload


class CarService(ApiClient):

    def add_car(self, car_data: CarData) -> ApiResponse:
        response = self.make_request("POST", "/api/vehicle/add", json=car_payload(car_data))
        return response.unwrap("car")

    def add_car_from_carte_grise(
        self,
        image_path: Union[str, Path],
        manual_overrides: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        """
        Upload a carte grise scan for OCR and create the car from it.

        Empty overrides are not sent. The OCR result is kept in
        ``extracted_data`` whether or not the car could be created.
        """
        if not self.get_token():
            return ApiResponse(success=False, message="No authentication token found")

        form: Dict[str, str] = {}
        for key, value in (manual_overrides or {}).items():
            if value is not None and value != "":
                form[key] = str(value)

        path = Path(image_path)
        try:
            with path.open("rb") as fh:
                response = self.make_request(
                    "POST",
                    "/api/vehicle/add-from-carte-grise",
                    files={"carteGrise": (path.name, fh)},
                    data=form,
                )
        except OSError as e:
            logger.error(f"Cannot read carte grise image {path}: {e}")
            return ApiResponse(success=False, error=str(e), message=str(e))

        if response.success and isinstance(response.data, dict):
            return response.model_copy(update={"data": response.data.get("car")})
        return response

    def test_ocr(self, image_path: Union[str, Path]) -> ApiResponse:
        path = Path(image_path)
        try:
            with path.open("rb") as fh:
                return self.make_request(
                    "POST",
                    "/api/vehicle/test-ocr",
                    files={"carteGrise": (path.name, fh)},
                )
        except OSError as e:
            logger.error(f"Cannot read carte grise image {path}: {e}")
            return ApiResponse(success=False, error=str(e), message=str(e))

    def get_user_cars(self) -> ApiResponse:
        return self.make_request("GET", "/api/vehicle/my-cars").unwrap("cars", missing=None)

    def generate_qr_code(self, car_id: str) -> ApiResponse:
        try:
            self.require_token()
        except AuthenticationError:
            return ApiResponse(success=False, message="No token found")
        response = self.make_request("GET", f"/api/vehicle/generate-qr/{car_id}")
        if not response.success:
            logger.error(f"Error generating QR code for {car_id}: {response.error}")
            return ApiResponse(success=False, message="Failed to generate QR code")
        return response

    def get_car_by_id(self, car_id: str) -> ApiResponse:
        return self.make_request("GET", f"/api/vehicle/car/{car_id}").unwrap("car")

    def edit_car(self, car_id: str, car_data: CarData) -> ApiResponse:
        response = self.make_request("PUT", f"/api/vehicle/edit/{car_id}", json=car_payload(car_data))
        return response.unwrap("car")

    def delete_car(self, car_id: str) -> ApiResponse:
        return self.make_request("DELETE", f"/api/vehicle/delete/{car_id}")

    def export_car(self, car_id: str) -> ApiResponse:
        return self.make_request("POST", f"/api/vehicle/export/{car_id}").unwrap("car")
