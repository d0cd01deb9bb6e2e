"""
Form validation for the car, signup, login and password reset forms.

Validators return a mapping of field name -> message; an empty mapping
means the form may be submitted.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from icar.models.catalog import FUEL_TYPES, REGISTRATION_TYPE_RS, REGISTRATION_TYPE_TUN, REGISTRATION_TYPES

TUN_FIRST_PART = re.compile(r"^[0-9]{1,3}$")
TUN_SECOND_PART = re.compile(r"^[0-9]{1,7}$")
RS_NUMBER = re.compile(r"^[0-9]{1,6}$")
EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE = re.compile(r"^\+?[0-9]{8,15}$")
RESET_CODE = re.compile(r"^[0-9]{6}$")

MIN_PASSWORD_LENGTH = 6


@dataclass
class CarForm:
    marque: str = ""
    modele: str = ""
    vin: str = ""
    fuel_type: str = ""
    immatriculation_type: str = ""
    immatriculation_first: str = ""
    immatriculation_second: str = ""
    immatriculation: str = ""
    kilometrage: str = ""
    # dd/mm/yyyy
    date_premiere_mise_en_circulation: str = ""


def validate_car_form(form: CarForm) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not form.marque:
        errors["marque"] = "Brand is required"
    if not form.modele:
        errors["modele"] = "Model is required"
    if not form.vin:
        errors["vin"] = "VIN code is required"
    if not form.fuel_type:
        errors["fuel_type"] = "Fuel type is required"
    elif form.fuel_type not in FUEL_TYPES:
        errors["fuel_type"] = f"Fuel type must be one of: {', '.join(FUEL_TYPES)}"
    if not form.immatriculation_type:
        errors["immatriculation_type"] = "Registration type is required"
    elif form.immatriculation_type not in REGISTRATION_TYPES:
        errors["immatriculation_type"] = f"Registration type must be one of: {', '.join(REGISTRATION_TYPES)}"

    if form.immatriculation_type == REGISTRATION_TYPE_TUN:
        if not form.immatriculation_first or not form.immatriculation_second:
            errors["immatriculation"] = "Both registration parts are required"
        elif not TUN_FIRST_PART.match(form.immatriculation_first):
            errors["immatriculation"] = "First part must be 1-3 digits"
        elif not TUN_SECOND_PART.match(form.immatriculation_second):
            errors["immatriculation"] = "Second part must be 1-7 digits"
    elif form.immatriculation_type == REGISTRATION_TYPE_RS:
        if not form.immatriculation:
            errors["immatriculation"] = "Registration number is required"
        elif not RS_NUMBER.match(form.immatriculation):
            errors["immatriculation"] = "Registration must be 1-6 digits"

    if form.kilometrage and not form.kilometrage.isdigit():
        errors["kilometrage"] = "Mileage must be a whole number"

    if form.date_premiere_mise_en_circulation:
        try:
            datetime.strptime(form.date_premiere_mise_en_circulation, "%d/%m/%Y")
        except ValueError:
            errors["date_premiere_mise_en_circulation"] = "Date must be in DD/MM/YYYY format"

    return errors


def build_registration_number(form: CarForm) -> str:
    if form.immatriculation_type == REGISTRATION_TYPE_TUN:
        return f"{form.immatriculation_first} {REGISTRATION_TYPE_TUN} {form.immatriculation_second}"
    return form.immatriculation


def _password_errors(password: str, confirm: Optional[str], field: str) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not password:
        errors[field] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors[field] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if confirm is not None and password and password != confirm:
        errors["confirm_password"] = "Passwords do not match"
    return errors


def validate_signup(
    first_name: str,
    last_name: str,
    phone_number: str,
    password: str,
    confirm_password: Optional[str] = None,
    email: Optional[str] = None,
) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not first_name.strip():
        errors["first_name"] = "First name is required"
    if not last_name.strip():
        errors["last_name"] = "Last name is required"
    if not phone_number.strip():
        errors["phone_number"] = "Phone number is required"
    elif not PHONE.match(phone_number.replace(" ", "")):
        errors["phone_number"] = "Invalid phone number"
    if email and not EMAIL.match(email.strip()):
        errors["email"] = "Invalid email address"
    errors.update(_password_errors(password, confirm_password, "password"))
    return errors


def validate_login(phone_number: str, password: str) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not phone_number.strip():
        errors["phone_number"] = "Phone number is required"
    if not password:
        errors["password"] = "Password is required"
    return errors


def validate_reset_code(code: str) -> Dict[str, str]:
    if not RESET_CODE.match(code.strip()):
        return {"code": "Code must be 6 digits"}
    return {}


def validate_new_password(new_password: str, confirm_password: Optional[str] = None) -> Dict[str, str]:
    return _password_errors(new_password, confirm_password, "new_password")
