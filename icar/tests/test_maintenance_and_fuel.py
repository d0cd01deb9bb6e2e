import pytest

from icar.apis.fuel_api import FUEL_PREFIX, FuelService
from icar.apis.maintenance_state_api import MaintenanceCarStateAPI
from icar.models.maintenance_state import MaintenanceCarState
from icar.tests.conftest import make_response
from icar.utils.errors import ApiError


def test_state_payload_keeps_backend_spelling():
    state = MaintenanceCarState.model_validate({
        "currentMileage": 120000,
        "tirePressure": {"frontPSI": 32, "rearPSI": 30},
        "battery12V": {"lastVoltage": 12.6},
        "somethingNew": {"kept": True},
    })
    payload = state.to_payload()

    assert state.tire_pressure.front_psi == 32
    assert payload["tirePressure"] == {"frontPSI": 32.0, "rearPSI": 30.0}
    assert payload["battery12V"] == {"lastVoltage": 12.6}
    assert payload["somethingNew"] == {"kept": True}


def test_create_state(logged_in_store, settings, session):
    session.request.return_value = make_response(201, {"_id": "m1"})
    api = MaintenanceCarStateAPI(logged_in_store, settings, session)

    body = api.create_maintenance_car_state("car1", "req1", MaintenanceCarState(current_mileage=1000))

    args, kwargs = session.request.call_args
    assert args == ("POST", "http://backend.test/api/vehicle/car1/maintenance-state/req1")
    assert kwargs["json"] == {"currentMileage": 1000, "uploadedPhotos": []}
    assert body == {"_id": "m1"}


def test_states_by_car_paging(logged_in_store, settings, session):
    session.request.return_value = make_response(200, {"data": []})
    MaintenanceCarStateAPI(logged_in_store, settings, session).get_maintenance_car_states_by_car("car1")
    assert session.request.call_args.kwargs["params"] == {"limit": 20, "skip": 0}


def test_state_error_raises(logged_in_store, settings, session):
    session.request.return_value = make_response(404, {"error": "Maintenance state not found"})
    with pytest.raises(ApiError, match="Maintenance state not found"):
        MaintenanceCarStateAPI(logged_in_store, settings, session).get_maintenance_car_state("car1", "req1")


def test_fuel_entries_default_to_empty_list(logged_in_store, settings, session):
    session.request.return_value = make_response(200, {"message": "no entries"})
    response = FuelService(logged_in_store, settings, session).get_fuel_entries("car1")

    assert session.request.call_args.args[1] == f"http://backend.test{FUEL_PREFIX}/car1"
    assert response.data == []
