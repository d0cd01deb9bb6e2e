"""
Service booking wizard.

Three steps: pick a category (or "All"), pick one of the offerings in
that category, confirm. "Next" is only allowed once the current step has
its selection.
"""

from enum import IntEnum
from typing import Any, List, Optional

import pydantic

from icar.apis.service_api import ServiceAPI
from icar.models.catalog import ALL_CATEGORIES, CATEGORY_IDS, DEFAULT_BOOKING_TIME, DEFAULT_PAYMENT_METHOD
from icar.models.service import ServiceOffering, ServiceRequest, ServiceRequestData
from icar.utils.errors import ServiceAPIError, WizardError
from icar.utils.logging_config import get_logger

logger = get_logger(__name__)


class BookingStep(IntEnum):
    CATEGORY = 1
    SERVICE = 2
    CONFIRM = 3


def _records(payload: Any, key: str) -> List[dict]:
    """Lists arrive bare, wrapped in ``data`` or under a named key."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for candidate in ("data", key):
            value = payload.get(candidate)
            if isinstance(value, list):
                return value
    return []


def parse_offerings(payload: Any) -> List[ServiceOffering]:
    try:
        return [ServiceOffering.model_validate(item) for item in _records(payload, "services")]
    except pydantic.ValidationError as e:
        logger.error(f"Malformed service offering: {e}")
        raise ServiceAPIError("Unexpected response from the services endpoint", payload=payload)


def parse_service_request(payload: Any) -> ServiceRequest:
    if not isinstance(payload, dict):
        raise ServiceAPIError("Unexpected response from the booking endpoint")
    record = payload
    for key in ("serviceRequest", "request", "data"):
        if isinstance(payload.get(key), dict):
            record = payload[key]
            break
    try:
        return ServiceRequest.model_validate(record)
    except pydantic.ValidationError as e:
        logger.error(f"Malformed service request: {e}")
        raise ServiceAPIError("Unexpected response from the booking endpoint", payload=payload)


class BookingWizard:
    total_steps = len(BookingStep)

    def __init__(self, car_id: str, service_api: ServiceAPI, language: str = "en"):
        self.car_id = car_id
        self.service_api = service_api
        self.language = language
        self.step = BookingStep.CATEGORY
        self.all_services: List[ServiceOffering] = []
        # None until the user picks; ALL_CATEGORIES ("") is a valid pick
        self.category: Optional[str] = None
        self.selected_service: Optional[ServiceOffering] = None
        self.payment_method = DEFAULT_PAYMENT_METHOD
        self.time = DEFAULT_BOOKING_TIME

    def load_services(self) -> List[ServiceOffering]:
        """Fetch every offering, inactive ones included."""
        try:
            payload = self.service_api.get_all_services(include_inactive=True)
            self.all_services = parse_offerings(payload)
        except ServiceAPIError as e:
            logger.error(f"Error fetching services: {e}")
            self.all_services = []
            raise
        logger.debug(f"Loaded {len(self.all_services)} service offerings")
        return self.all_services

    @property
    def services(self) -> List[ServiceOffering]:
        """Offerings visible under the current category filter."""
        if not self.category:
            return list(self.all_services)
        return [s for s in self.all_services if s.type == self.category]

    def categories(self) -> List[str]:
        """Known categories first, then any extra types the backend offers."""
        extra = sorted({s.type for s in self.all_services if s.type and s.type not in CATEGORY_IDS})
        return [ALL_CATEGORIES] + CATEGORY_IDS + extra

    def select_category(self, category: str) -> None:
        if category not in self.categories():
            raise WizardError(f"Unknown service category: {category}")
        self.category = category
        if self.selected_service and self.selected_service not in self.services:
            self.selected_service = None

    def select_service(self, service_id: str) -> ServiceOffering:
        for service in self.services:
            if service.id == service_id:
                self.selected_service = service
                return service
        raise WizardError(f"Service {service_id} is not available in this category")

    def can_proceed(self) -> bool:
        if self.step == BookingStep.CATEGORY:
            return self.category is not None
        if self.step == BookingStep.SERVICE:
            return self.selected_service is not None
        return self.step == BookingStep.CONFIRM

    def next(self) -> BookingStep:
        if self.step == BookingStep.CONFIRM:
            raise WizardError("Already on the last step")
        if not self.can_proceed():
            raise WizardError("Please make a selection before continuing")
        self.step = BookingStep(self.step + 1)
        return self.step

    def back(self) -> BookingStep:
        if self.step > BookingStep.CATEGORY:
            self.step = BookingStep(self.step - 1)
        return self.step

    def summary(self) -> dict:
        service = self.selected_service
        return {
            "carId": self.car_id,
            "mechanic": service.garage_name if service else None,
            "service": service.localized_name(self.language) if service else None,
            "total": f"{service.price:g} TND" if service and service.price is not None else None,
            "paymentMethod": self.payment_method,
        }

    def submit(self) -> ServiceRequest:
        if self.step != BookingStep.CONFIRM:
            raise WizardError("Booking can only be confirmed on the last step")
        if not self.selected_service or not self.selected_service.id:
            raise WizardError("Please select a service")

        request = ServiceRequestData(
            service_id=self.selected_service.id,
            time=self.time,
            payment_method=self.payment_method,
            description=f"Service booking for {self.selected_service.name}",
        )
        try:
            payload = self.service_api.create_service_request(self.car_id, request)
        except ServiceAPIError as e:
            logger.error(f"Error booking service: {e}")
            raise
        booked = parse_service_request(payload)
        logger.info(f"Booked {self.selected_service.name} for car {self.car_id} (request {booked.id})")
        return booked
