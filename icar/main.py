"""
Command-line front end for the ICAR client.

Run with:
    icar --help
"""

import argparse
import getpass
import json
import sys
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from icar.apis.auth_api import AuthService
from icar.apis.car_api import CarService
from icar.apis.fuel_api import FuelService
from icar.apis.maintenance_state_api import MaintenanceCarStateAPI
from icar.apis.service_api import ServiceAPI
from icar.apis.user_api import UserService
from icar.apis.vehicle_profile_api import VehicleProfileAPI
from icar.config import Settings, get_settings
from icar.flows.auth_flow import AuthFlow
from icar.flows.booking import BookingWizard, parse_offerings, parse_service_request
from icar.flows.car_registration import submit_car_form
from icar.flows.mechanics import MechanicsFinder
from icar.models.api_response import ApiResponse
from icar.models.catalog import (
    CAR_MODELS,
    FUEL_TYPES,
    PAYMENT_METHODS,
    REGISTRATION_TYPES,
    SERVICE_CATEGORIES,
    SUPPORTED_LANGUAGES,
    models_for,
)
from icar.models.car import Car, QrCode
from icar.models.fuel import CreateFuelEntryData, FuelEntry, FuelStatistics
from icar.models.irepair import IrepairUser
from icar.models.service import ManualServiceRequestData
from icar.models.user import LoginResponse, RegisterData, UserProfile
from icar.models.vehicle_profile import (
    DISTANCE_UNITS,
    DRIVETRAINS,
    DRIVING_SAFETY,
    ENGINE_TYPES,
    JOB_CATEGORIES,
    MAINTENANCE_REASONS,
    MAINTENANCE_SERVICE_TYPES,
    PARKING_TYPES,
    SYMPTOM_STATUSES,
    TOWING_FREQUENCIES,
    TRANSMISSION_TYPES,
    URGENCY_LEVELS,
    WARNING_LIGHTS,
    JobLine,
    MaintenanceRecord,
    Noise,
    ReplacedPart,
    Smell,
    SymptomReport,
    Symptoms,
    VehicleProfileUpdate,
    VehicleUsage,
    WarningLight,
)
from icar.plugin.chatbot import ChatbotClient, ChatSession
from icar.plugin.openroute import OpenRouteServiceClient
from icar.utils.errors import IcarError, ValidationError
from icar.utils.logging_config import configure_logging, get_logger
from icar.utils.storage import KeyValueStore
from icar.utils.validation import CarForm

logger = get_logger(__name__)

UNEXPECTED_RESPONSE = "Unexpected response from the server. Please try again."

M = TypeVar("M", bound=BaseModel)


class App:
    """Wires the API wrappers to one storage file and one HTTP session."""

    def __init__(self, settings: Settings, store: Optional[KeyValueStore] = None):
        self.settings = settings
        self.store = store or KeyValueStore(settings.storage_path)
        self.auth = AuthService(self.store, settings)
        self.cars = CarService(self.store, settings, self.auth.session)
        self.services = ServiceAPI(self.store, settings, self.auth.session)
        self.users = UserService(self.store, settings, self.auth.session)
        self.fuel = FuelService(self.store, settings, self.auth.session)
        self.maintenance_states = MaintenanceCarStateAPI(self.store, settings, self.auth.session)
        self.vehicle_profiles = VehicleProfileAPI(self.store, settings, self.auth.session)
        self.router = OpenRouteServiceClient(settings)
        self.chatbot = ChatbotClient(settings)
        self.auth_flow = AuthFlow(self.auth)


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def emit(value: Any) -> None:
    print(json.dumps(_jsonable(value), indent=2, ensure_ascii=False, default=str))


def report(response: ApiResponse, payload: Any = None) -> int:
    """Print the outcome of an envelope call; the CLI's equivalent of an alert."""
    if not response.success:
        print(f"Error: {response.display_message}", file=sys.stderr)
        if response.extracted_data:
            emit({"extractedData": response.extracted_data})
        return 1
    if payload is not None:
        emit(payload)
    elif response.data is not None:
        emit(response.data)
    elif response.message:
        print(response.message)
    return 0


def _password(value: Optional[str], prompt: str = "Password: ") -> str:
    return value if value is not None else getpass.getpass(prompt)


def form_input(model: Type[M], **values) -> M:
    """Build a request body from command-line values; bad values are reported per field."""
    try:
        return model(**values)
    except ModelValidationError as e:
        errors = {".".join(str(p) for p in err["loc"]) or "input": err["msg"] for err in e.errors()}
        raise ValidationError(errors)


# -- auth -------------------------------------------------------------------

def cmd_login(app: App, args) -> int:
    response = app.auth_flow.login(args.phone, _password(args.password))
    if not response.success or not isinstance(response.data, dict) or not response.data.get("token"):
        return report(response)
    login = LoginResponse.model_validate(response.data)
    if login.user:
        logger.info(f"Logged in as {login.user.full_name or login.user.phone_number}")
        return report(response, login.user)
    return report(response, {"message": "Logged in"})


def cmd_logout(app: App, args) -> int:
    response = app.auth.logout()
    if not response.success:
        logger.warning(f"Backend logout failed: {response.display_message}")
    print("Logged out")
    return 0


def cmd_register(app: App, args) -> int:
    password = _password(args.password)
    confirm = args.confirm_password if args.confirm_password is not None else (
        password if args.password is not None else getpass.getpass("Confirm password: ")
    )
    data = RegisterData(
        first_name=args.first_name,
        last_name=args.last_name,
        email=args.email,
        phone_number=args.phone,
        type=args.type,
        password=password,
    )
    response = app.auth_flow.register(data, confirm)
    return report(response, {"message": response.message or "Registered, a verification code was sent"})


def cmd_verify(app: App, args) -> int:
    return report(app.auth_flow.verify(args.code, args.phone))


def cmd_resend_code(app: App, args) -> int:
    return report(app.auth_flow.resend_code(args.phone))


def cmd_forgot_password(app: App, args) -> int:
    return report(app.auth_flow.forgot_password(args.phone))


def cmd_reset_code(app: App, args) -> int:
    app.auth_flow.enter_reset_code(args.code)
    print("Code saved, now run: icar reset-password")
    return 0


def cmd_reset_password(app: App, args) -> int:
    password = _password(args.password, "New password: ")
    confirm = args.confirm_password if args.confirm_password is not None else password
    return report(app.auth_flow.reset_password(password, confirm))


def cmd_status(app: App, args) -> int:
    emit({
        "authenticated": app.auth.is_authenticated(),
        "pendingStep": app.auth_flow.pending_step().value,
        "apiUrl": app.settings.api_url,
    })
    return 0


def cmd_profile(app: App, args) -> int:
    response = app.auth.get_profile()
    if response.success and isinstance(response.data, dict):
        user = response.data.get("user", response.data)
        return report(response, UserProfile.model_validate(user))
    return report(response)


# -- cars -------------------------------------------------------------------

def cmd_cars(app: App, args) -> int:
    response = app.cars.get_user_cars()
    cars = [Car.model_validate(c) for c in response.data or []] if response.success else None
    return report(response, cars if cars is not None else [])


def cmd_car(app: App, args) -> int:
    response = app.cars.get_car_by_id(args.car_id)
    if response.success and isinstance(response.data, dict):
        return report(response, Car.model_validate(response.data))
    return report(response)


def cmd_add_car(app: App, args) -> int:
    form = CarForm(
        marque=args.marque,
        modele=args.modele,
        vin=args.vin,
        fuel_type=args.fuel_type,
        immatriculation_type=args.registration_type,
        immatriculation_first=args.first or "",
        immatriculation_second=args.second or "",
        immatriculation=args.number or "",
        kilometrage=args.km or "",
        date_premiere_mise_en_circulation=args.date,
    )
    return report(submit_car_form(app.cars, form, car_id=args.edit))


def cmd_delete_car(app: App, args) -> int:
    return report(app.cars.delete_car(args.car_id))


def cmd_scan(app: App, args) -> int:
    if args.test:
        return report(app.cars.test_ocr(args.image))
    return report(app.cars.add_car_from_carte_grise(args.image))


def cmd_qr(app: App, args) -> int:
    response = app.cars.generate_qr_code(args.car_id)
    if response.success and isinstance(response.data, dict) and response.data.get("qrCode"):
        return report(response, QrCode.model_validate(response.data))
    return report(response)


def cmd_export_car(app: App, args) -> int:
    return report(app.cars.export_car(args.car_id))


def cmd_catalog(app: App, args) -> int:
    if args.marque:
        models = models_for(args.marque)
        if not models:
            print(f"Error: Unknown brand: {args.marque}", file=sys.stderr)
            return 1
        emit(models)
        return 0
    emit({
        "brands": sorted(CAR_MODELS),
        "fuelTypes": FUEL_TYPES,
        "registrationTypes": REGISTRATION_TYPES,
        "serviceCategories": SERVICE_CATEGORIES,
        "paymentMethods": PAYMENT_METHODS,
        "languages": SUPPORTED_LANGUAGES,
    })
    return 0


# -- services & bookings ------------------------------------------------------

def cmd_services(app: App, args) -> int:
    if args.type:
        payload = app.services.get_services_by_type(args.type, args.location)
    else:
        payload = app.services.get_all_services(location=args.location, include_inactive=args.all)
    emit(parse_offerings(payload))
    return 0


def cmd_book(app: App, args) -> int:
    wizard = BookingWizard(args.car_id, app.services, language=args.language)
    wizard.load_services()
    wizard.select_category(args.category or "")
    wizard.next()
    wizard.select_service(args.service)
    wizard.next()
    emit(wizard.summary())
    if not args.yes:
        answer = input("Confirm booking? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("Booking cancelled")
            return 1
    emit(wizard.submit())
    return 0


def cmd_manual_request(app: App, args) -> int:
    request = form_input(
        ManualServiceRequestData,
        service_type=args.type,
        description=args.description,
        date=args.date,
        service_name=args.name,
    )
    emit(parse_service_request(app.services.create_manual_service_request(args.car_id, request)))
    return 0


def cmd_requests(app: App, args) -> int:
    if args.car:
        payload = app.services.get_service_requests_by_car(args.car)
    elif args.icar:
        payload = app.services.get_service_requests_by_icar(args.icar)
    else:
        payload = app.services.get_my_service_history()
    items = payload if isinstance(payload, list) else (
        payload.get("data") or payload.get("serviceRequests") or payload.get("history") or []
        if isinstance(payload, dict) else []
    )
    emit([parse_service_request(item) for item in items])
    return 0


def cmd_request(app: App, args) -> int:
    emit(parse_service_request(app.services.get_service_request(args.request_id)))
    return 0


def cmd_car_state(app: App, args) -> int:
    if args.car_id is None:
        emit(app.maintenance_states.get_user_maintenance_car_states())
    elif args.dashboard:
        emit(app.maintenance_states.get_maintenance_dashboard(args.car_id))
    elif args.request_id:
        emit(app.maintenance_states.get_maintenance_car_state(args.car_id, args.request_id))
    else:
        emit(app.maintenance_states.get_maintenance_car_states_by_car(args.car_id))
    return 0


# -- vehicle profile & logs ---------------------------------------------------

def _split_pair(value: str, sep: str, field: str) -> tuple:
    head, _, tail = value.partition(sep)
    if not head:
        raise ValidationError({field: f"Invalid value: {value!r}"})
    return head, tail


def _part(value: str) -> ReplacedPart:
    name, cost = _split_pair(value, ":", "part")
    try:
        price = float(cost) if cost else None
    except ValueError:
        raise ValidationError({"part": f"Invalid cost in {value!r}"})
    return ReplacedPart(part_name=name, cost=price)


def _noise(value: str) -> Noise:
    kind, location = _split_pair(value, "@", "noise")
    return Noise(type=kind, location=location or "other")


def _smell(value: str) -> Smell:
    kind, location = _split_pair(value, "@", "smell")
    return Smell(type=kind, location=location or "other")


def cmd_vehicle_profile(app: App, args) -> int:
    update = form_input(
        VehicleProfileUpdate,
        year=args.year,
        trim=args.trim,
        engine_type=args.engine_type,
        engine_size=args.engine_size,
        transmission_type=args.transmission,
        drivetrain=args.drivetrain,
        kilometerage_unit=args.unit,
        plate_country=args.plate_country,
        plate_region=args.plate_region,
        kilometrage=args.km,
    )
    if update.to_payload():
        emit(app.vehicle_profiles.update_vehicle_profile(args.car_id, update))
    else:
        emit(app.vehicle_profiles.get_vehicle_profile(args.car_id))
    return 0


def cmd_usage(app: App, args) -> int:
    emit(app.vehicle_profiles.get_usage_data(args.car_id, limit=args.limit, skip=args.skip))
    return 0


def cmd_add_usage(app: App, args) -> int:
    usage = form_input(
        VehicleUsage,
        odometer_reading=args.odometer,
        trip_distance=args.trip_distance,
        city_driving_percentage=args.city,
        highway_driving_percentage=args.highway,
        parking_type=args.parking,
        towing_frequency=args.towing,
    )
    emit(app.vehicle_profiles.add_usage_data(args.car_id, usage))
    return 0


def cmd_maintenance_history(app: App, args) -> int:
    emit(app.vehicle_profiles.get_maintenance_history(args.car_id, limit=args.limit, skip=args.skip))
    return 0


def cmd_add_maintenance(app: App, args) -> int:
    job = form_input(
        JobLine,
        service_category=args.category,
        description=args.description,
        parts_replaced=[_part(p) for p in args.part],
        labor_cost=args.labor_cost,
    )
    record = form_input(
        MaintenanceRecord,
        service_date=args.date,
        odometer_at_service=args.odometer,
        service_type=args.service_type,
        reason_for_service=args.reason,
        job_lines=[job],
        service_notes=args.notes,
    )
    emit(app.vehicle_profiles.add_maintenance_record(args.car_id, record))
    return 0


def cmd_symptoms(app: App, args) -> int:
    emit(app.vehicle_profiles.get_symptom_reports(args.car_id, status=args.status, limit=args.limit, skip=args.skip))
    return 0


def cmd_report_symptom(app: App, args) -> int:
    symptom_report = form_input(
        SymptomReport,
        odometer_reading=args.odometer,
        symptoms=Symptoms(
            noises=[_noise(n) for n in args.noise],
            warning_lights=[WarningLight(light_type=w) for w in args.warning_light],
            smells=[_smell(s) for s in args.smell],
        ),
        urgency=args.urgency,
        driving_safety=args.driving_safety,
        additional_notes=args.notes,
    )
    emit(app.vehicle_profiles.add_symptom_report(args.car_id, symptom_report))
    return 0


# -- map ------------------------------------------------------------------------

def cmd_mechanics(app: App, args) -> int:
    finder = MechanicsFinder(app.users, app.router)
    finder.load()
    if args.lat is not None and args.lon is not None:
        finder.set_user_location(args.lat, args.lon)
    rows = []
    for mechanic in finder.sorted_by_distance()[: args.limit]:
        row = mechanic.model_dump(mode="json", exclude_none=True)
        row["distance"] = mechanic.distance_label
        row["nearest"] = finder.nearest is not None and finder.nearest.id == mechanic.id
        rows.append(row)
    emit(rows)
    return 0


def cmd_mechanic(app: App, args) -> int:
    response = app.users.get_irepair_by_id(args.mechanic_id)
    if response.success and isinstance(response.data, dict):
        irepair = IrepairUser.model_validate(response.data.get("irepair", response.data))
        return report(response, irepair)
    return report(response)


def cmd_directions(app: App, args) -> int:
    finder = MechanicsFinder(app.users, app.router)
    finder.load()
    finder.set_user_location(args.lat, args.lon)
    route = finder.get_directions(args.mechanic_id)
    out = {"mechanic": finder.selected.name, "points": len(route.coordinates)}
    if route.summary:
        out["distance"] = f"{route.summary.distance_km:.1f} km"
        out["duration"] = f"{route.summary.duration_minutes} min"
    if args.geometry:
        out["coordinates"] = [c.model_dump() for c in route.coordinates]
    emit(out)
    return 0


# -- fuel & chat ------------------------------------------------------------------

def cmd_fuel(app: App, args) -> int:
    if args.stats:
        response = app.fuel.get_fuel_statistics(args.car_id)
        stats = response.data.get("statistics", response.data) if response.success and isinstance(response.data, dict) else None
        return report(response, FuelStatistics.model_validate(stats) if stats is not None else None)
    response = app.fuel.get_fuel_entries(args.car_id)
    entries = [FuelEntry.model_validate(e) for e in response.data or []] if response.success else None
    return report(response, entries)


def cmd_add_fuel(app: App, args) -> int:
    entry = form_input(
        CreateFuelEntryData,
        car_id=args.car_id,
        date=args.date,
        odometer_reading=args.odometer,
        fuel_quantity=args.liters,
        price_per_liter=args.price,
        fuel_station=args.station,
        driving_conditions=args.conditions,
        fuel_type=args.fuel_type,
    )
    response = app.fuel.create_fuel_entry(entry)
    if response.success and isinstance(response.data, dict):
        return report(response, FuelEntry.model_validate(response.data))
    return report(response)


def cmd_chat(app: App, args) -> int:
    session = ChatSession(app.chatbot, language=args.language)
    session.open()
    reply = session.ask(" ".join(args.message))
    print(reply.text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="icar", description="ICAR automotive service marketplace client")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Log in with phone number and password")
    p.add_argument("--phone", required=True)
    p.add_argument("--password")
    p.set_defaults(func=cmd_login)

    p = sub.add_parser("logout", help="Log out and forget the token")
    p.set_defaults(func=cmd_logout)

    p = sub.add_parser("register", help="Create an Icar account")
    p.add_argument("--first-name", required=True)
    p.add_argument("--last-name", required=True)
    p.add_argument("--phone", required=True)
    p.add_argument("--email")
    p.add_argument("--type", choices=["personal", "entreprise"], default="personal")
    p.add_argument("--password")
    p.add_argument("--confirm-password")
    p.set_defaults(func=cmd_register)

    p = sub.add_parser("verify", help="Verify the phone number with the SMS code")
    p.add_argument("--code", required=True)
    p.add_argument("--phone", help="Defaults to the number used at signup")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("resend-code", help="Resend the verification code")
    p.add_argument("--phone")
    p.set_defaults(func=cmd_resend_code)

    p = sub.add_parser("forgot-password", help="Start a password reset")
    p.add_argument("--phone", required=True)
    p.set_defaults(func=cmd_forgot_password)

    p = sub.add_parser("reset-code", help="Enter the password reset code")
    p.add_argument("--code", required=True)
    p.set_defaults(func=cmd_reset_code)

    p = sub.add_parser("reset-password", help="Choose a new password")
    p.add_argument("--password")
    p.add_argument("--confirm-password")
    p.set_defaults(func=cmd_reset_password)

    p = sub.add_parser("status", help="Show authentication and pending flow state")
    p.set_defaults(func=cmd_status)

    p = sub.add_parser("profile", help="Show the current user")
    p.set_defaults(func=cmd_profile)

    p = sub.add_parser("cars", help="List my cars")
    p.set_defaults(func=cmd_cars)

    p = sub.add_parser("car", help="Show one car")
    p.add_argument("car_id")
    p.set_defaults(func=cmd_car)

    p = sub.add_parser("add-car", help="Register a car (or edit one with --edit)")
    p.add_argument("--marque", required=True)
    p.add_argument("--modele", required=True)
    p.add_argument("--vin", required=True)
    p.add_argument("--fuel-type", required=True, choices=FUEL_TYPES)
    p.add_argument("--registration-type", required=True, choices=REGISTRATION_TYPES)
    p.add_argument("--first", help="TUN: digits before 'TUN'")
    p.add_argument("--second", help="TUN: digits after 'TUN'")
    p.add_argument("--number", help="RS: registration number")
    p.add_argument("--km", help="Mileage")
    p.add_argument("--date", required=True, help="First registration date, DD/MM/YYYY")
    p.add_argument("--edit", metavar="CAR_ID")
    p.set_defaults(func=cmd_add_car)

    p = sub.add_parser("delete-car", help="Delete a car")
    p.add_argument("car_id")
    p.set_defaults(func=cmd_delete_car)

    p = sub.add_parser("scan-carte-grise", help="Add a car from a carte grise photo")
    p.add_argument("image")
    p.add_argument("--test", action="store_true", help="Only run OCR, do not create the car")
    p.set_defaults(func=cmd_scan)

    p = sub.add_parser("qr", help="Generate the QR code of a car")
    p.add_argument("car_id")
    p.set_defaults(func=cmd_qr)

    p = sub.add_parser("export-car", help="Export a car record")
    p.add_argument("car_id")
    p.set_defaults(func=cmd_export_car)

    p = sub.add_parser("catalog", help="Brands, fuel types, service categories (or the models of --marque)")
    p.add_argument("--marque")
    p.set_defaults(func=cmd_catalog)

    p = sub.add_parser("services", help="List service offerings")
    p.add_argument("--type", help="Service category")
    p.add_argument("--location")
    p.add_argument("--all", action="store_true", help="Include inactive offerings")
    p.set_defaults(func=cmd_services)

    p = sub.add_parser("book", help="Book a service for a car")
    p.add_argument("car_id")
    p.add_argument("--category", default="", help="Service category (default: all)")
    p.add_argument("--service", required=True, help="Service offering id")
    p.add_argument("--language", choices=["en", "fr", "ar"], default="en")
    p.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    p.set_defaults(func=cmd_book)

    p = sub.add_parser("manual-request", help="Request a service that is not in the catalogue")
    p.add_argument("car_id")
    p.add_argument("--type", required=True, help="Service category")
    p.add_argument("--description", required=True)
    p.add_argument("--date", required=True, help="Preferred date, YYYY-MM-DD")
    p.add_argument("--name", help="Service name")
    p.set_defaults(func=cmd_manual_request)

    p = sub.add_parser("requests", help="Service history (or one car's requests)")
    p.add_argument("--car")
    p.add_argument("--icar", help="Requests of an icar account (garage side)")
    p.set_defaults(func=cmd_requests)

    p = sub.add_parser("request", help="Show a service request")
    p.add_argument("request_id")
    p.set_defaults(func=cmd_request)

    p = sub.add_parser("car-state", help="Maintenance car states of a car (all of mine without CAR_ID)")
    p.add_argument("car_id", nargs="?")
    p.add_argument("--request-id")
    p.add_argument("--dashboard", action="store_true")
    p.set_defaults(func=cmd_car_state)

    p = sub.add_parser("vehicle-profile", help="Show a car's extended profile, or update it with any option")
    p.add_argument("car_id")
    p.add_argument("--year", type=int)
    p.add_argument("--trim")
    p.add_argument("--engine-type", choices=ENGINE_TYPES)
    p.add_argument("--engine-size", type=float, help="Litres")
    p.add_argument("--transmission", choices=TRANSMISSION_TYPES)
    p.add_argument("--drivetrain", choices=DRIVETRAINS)
    p.add_argument("--unit", choices=DISTANCE_UNITS, help="Odometer unit")
    p.add_argument("--plate-country")
    p.add_argument("--plate-region")
    p.add_argument("--km", type=int, help="Mileage")
    p.set_defaults(func=cmd_vehicle_profile)

    p = sub.add_parser("usage", help="Usage sessions of a car")
    p.add_argument("car_id")
    p.add_argument("--limit", type=int, default=50)
    p.add_argument("--skip", type=int, default=0)
    p.set_defaults(func=cmd_usage)

    p = sub.add_parser("add-usage", help="Record a usage session")
    p.add_argument("car_id")
    p.add_argument("--odometer", type=float, required=True)
    p.add_argument("--trip-distance", type=float)
    p.add_argument("--city", type=float, help="City driving, percent")
    p.add_argument("--highway", type=float, help="Highway driving, percent")
    p.add_argument("--parking", choices=PARKING_TYPES, default="street")
    p.add_argument("--towing", choices=TOWING_FREQUENCIES, default="never")
    p.set_defaults(func=cmd_add_usage)

    p = sub.add_parser("maintenance-history", help="Workshop maintenance records of a car")
    p.add_argument("car_id")
    p.add_argument("--limit", type=int, default=20)
    p.add_argument("--skip", type=int, default=0)
    p.set_defaults(func=cmd_maintenance_history)

    p = sub.add_parser("add-maintenance", help="Record a workshop visit with one job line")
    p.add_argument("car_id")
    p.add_argument("--date", required=True, help="Service date, YYYY-MM-DD")
    p.add_argument("--odometer", type=float, required=True)
    p.add_argument("--service-type", choices=MAINTENANCE_SERVICE_TYPES, default="scheduled")
    p.add_argument("--reason", choices=MAINTENANCE_REASONS, default="scheduled_maintenance")
    p.add_argument("--category", choices=JOB_CATEGORIES, default="other")
    p.add_argument("--description", required=True)
    p.add_argument("--part", action="append", default=[], metavar="NAME[:COST]")
    p.add_argument("--labor-cost", type=float)
    p.add_argument("--notes")
    p.set_defaults(func=cmd_add_maintenance)

    p = sub.add_parser("symptoms", help="Symptom reports of a car")
    p.add_argument("car_id")
    p.add_argument("--status", choices=SYMPTOM_STATUSES)
    p.add_argument("--limit", type=int, default=20)
    p.add_argument("--skip", type=int, default=0)
    p.set_defaults(func=cmd_symptoms)

    p = sub.add_parser("report-symptom", help="Report noises, warning lights or smells")
    p.add_argument("car_id")
    p.add_argument("--odometer", type=float, default=0)
    p.add_argument("--noise", action="append", default=[], metavar="TYPE[@LOCATION]")
    p.add_argument("--warning-light", action="append", default=[], choices=WARNING_LIGHTS)
    p.add_argument("--smell", action="append", default=[], metavar="TYPE[@LOCATION]")
    p.add_argument("--urgency", choices=URGENCY_LEVELS, default="medium")
    p.add_argument("--driving-safety", choices=DRIVING_SAFETY, default="safe_to_drive")
    p.add_argument("--notes")
    p.set_defaults(func=cmd_report_symptom)

    p = sub.add_parser("mechanics", help="List garages, nearest first when a location is given")
    p.add_argument("--lat", type=float)
    p.add_argument("--lon", type=float)
    p.add_argument("--limit", type=int, default=20)
    p.set_defaults(func=cmd_mechanics)

    p = sub.add_parser("mechanic", help="Show one garage")
    p.add_argument("mechanic_id")
    p.set_defaults(func=cmd_mechanic)

    p = sub.add_parser("directions", help="Driving route to a garage")
    p.add_argument("mechanic_id")
    p.add_argument("--lat", type=float, required=True)
    p.add_argument("--lon", type=float, required=True)
    p.add_argument("--geometry", action="store_true", help="Include the decoded route points")
    p.set_defaults(func=cmd_directions)

    p = sub.add_parser("fuel", help="Fuel entries of a car")
    p.add_argument("car_id")
    p.add_argument("--stats", action="store_true")
    p.set_defaults(func=cmd_fuel)

    p = sub.add_parser("add-fuel", help="Record a fuel fill-up")
    p.add_argument("car_id")
    p.add_argument("--date", required=True, help="YYYY-MM-DD")
    p.add_argument("--odometer", type=float, required=True, help="Odometer reading (km)")
    p.add_argument("--liters", type=float, required=True)
    p.add_argument("--price", type=float, required=True, help="Price per liter")
    p.add_argument("--station", default="")
    p.add_argument("--conditions", default="mixed", help="city, highway or mixed")
    p.add_argument("--fuel-type", default="Essence", choices=FUEL_TYPES)
    p.set_defaults(func=cmd_add_fuel)

    p = sub.add_parser("chat", help="Ask the support chatbot")
    p.add_argument("message", nargs="+")
    p.add_argument("--language", choices=["en", "fr", "ar"])
    p.set_defaults(func=cmd_chat)

    return parser


def main(argv: Optional[List[str]] = None, app: Optional[App] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level, simple=True)
    app = app or App(settings)

    try:
        return args.func(app, args)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        for field, message in e.errors.items():
            print(f"  {field}: {message}", file=sys.stderr)
        return 2
    except IcarError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ModelValidationError as e:
        logger.error(f"Malformed backend record: {e}")
        print(f"Error: {UNEXPECTED_RESPONSE}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
