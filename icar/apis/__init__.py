"""
Backend API wrappers.

Every wrapper shares one ``ApiClient`` base: base URL from settings,
bearer token from device storage and a ``requests`` session.
"""

from icar.apis.http_client import ApiClient
from icar.apis.auth_api import AuthService
from icar.apis.car_api import CarService
from icar.apis.fuel_api import FuelService
from icar.apis.maintenance_state_api import MaintenanceCarStateAPI
from icar.apis.service_api import ServiceAPI
from icar.apis.user_api import UserService
from icar.apis.vehicle_profile_api import VehicleProfileAPI

__all__ = [
    'ApiClient',
    'AuthService',
    'CarService',
    'FuelService',
    'MaintenanceCarStateAPI',
    'ServiceAPI',
    'UserService',
    'VehicleProfileAPI',
]
