import json

import pytest
import requests

from icar.main import App, main
from icar.tests.conftest import make_response
from icar.utils.storage import AUTH_TOKEN_KEY


@pytest.fixture
def app(settings, store, session):
    app = App(settings, store)
    for client in (app.auth, app.cars, app.services, app.users, app.fuel, app.maintenance_states, app.vehicle_profiles):
        client.session = session
    app.router.session = session
    app.chatbot.session = session
    return app


def test_login_command(app, session, store, capsys):
    session.request.return_value = make_response(200, {
        "token": "jwt", "user": {"_id": "u1", "firstName": "Amine"},
    })
    assert main(["login", "--phone", "20123456", "--password", "secret1"], app=app) == 0
    assert store.get_item(AUTH_TOKEN_KEY) == "jwt"
    assert json.loads(capsys.readouterr().out)["firstName"] == "Amine"


def test_validation_error_exit_code(app, session, capsys):
    code = main(["reset-code", "--code", "12"], app=app)
    assert code == 2
    assert "Code must be 6 digits" in capsys.readouterr().err
    session.request.assert_not_called()


def test_backend_failure_exit_code(app, session, capsys):
    session.request.return_value = make_response(500, {"error": "Database unavailable"})
    assert main(["cars"], app=app) == 1
    assert "Database unavailable" in capsys.readouterr().err


def test_mechanics_command_sorts_by_distance(app, session, capsys):
    session.request.return_value = make_response(200, [
        {"_id": "far", "nomGarage": "Far", "geolocation": {"lat": 34.74, "lng": 10.76}},
        {"_id": "near", "nomGarage": "Near", "geolocation": {"lat": 36.8, "lng": 10.18}},
    ])
    assert main(["mechanics", "--lat", "36.81", "--lon", "10.17"], app=app) == 0
    rows = json.loads(capsys.readouterr().out)
    assert [r["id"] for r in rows] == ["near", "far"]
    assert rows[0]["nearest"] is True


def test_book_command(app, session, capsys):
    session.request.side_effect = [
        make_response(200, [{"_id": "s1", "type": "Brake Service", "name": "Brake pads", "price": 90}]),
        make_response(201, {"serviceRequest": {"_id": "r1", "status": "pending"}}),
    ]
    code = main(["book", "car1", "--category", "Brake Service", "--service", "s1", "--yes"], app=app)
    assert code == 0
    assert '"r1"' in capsys.readouterr().out


def test_chat_offline(app, session, capsys):
    session.get.side_effect = requests.ConnectionError("down")
    assert main(["chat", "hello", "there"], app=app) == 0
    assert "unable to connect" in capsys.readouterr().out


def test_catalog_command(app, capsys):
    assert main(["catalog", "--marque", "Dacia"], app=app) == 0
    assert "Duster" in json.loads(capsys.readouterr().out)
    assert main(["catalog", "--marque", "Trabant"], app=app) == 1


def test_car_state_without_car_lists_mine(app, session, capsys):
    session.request.return_value = make_response(200, {"data": [], "total": 0})
    assert main(["car-state"], app=app) == 0
    args, kwargs = session.request.call_args
    assert args[1] == "http://backend.test/api/vehicle/user/maintenance-states"
    assert kwargs["params"] == {"limit": 50, "skip": 0}


def test_mechanics_command_skips_malformed_garage(app, session, capsys):
    session.request.return_value = make_response(200, [
        {"_id": "broken", "nomGarage": "Broken", "geolocation": {"lat": None, "lng": None}},
        {"_id": "near", "nomGarage": "Near", "geolocation": {"lat": 36.8, "lng": 10.18}},
    ])
    assert main(["mechanics"], app=app) == 0
    assert [r["id"] for r in json.loads(capsys.readouterr().out)] == ["near"]


def test_malformed_car_record_exit_code(app, session, capsys):
    session.request.return_value = make_response(200, {"cars": [{"_id": "c1", "kilometrage": "a lot"}]})
    assert main(["cars"], app=app) == 1
    assert "Unexpected response from the server" in capsys.readouterr().err


def test_blank_chat_message_exit_code(app, session, capsys):
    assert main(["chat", " "], app=app) == 2
    assert "Message is empty" in capsys.readouterr().err
    session.post.assert_not_called()


def test_vehicle_profile_command_reads_profile(app, session, capsys):
    session.request.return_value = make_response(200, {"car": {"_id": "car1", "marque": "Kia", "year": 2021}})
    assert main(["vehicle-profile", "car1"], app=app) == 0
    assert session.request.call_args.args[0] == "GET"
    assert json.loads(capsys.readouterr().out)["year"] == 2021


def test_vehicle_profile_command_updates_with_options(app, session):
    session.request.return_value = make_response(200, {"car": {"_id": "car1", "drivetrain": "AWD"}})
    assert main(["vehicle-profile", "car1", "--drivetrain", "AWD", "--year", "2021"], app=app) == 0
    args, kwargs = session.request.call_args
    assert args[0] == "PUT"
    assert kwargs["json"] == {"year": 2021, "drivetrain": "AWD"}


def test_add_maintenance_command_totals_parts_and_labor(app, session):
    session.request.return_value = make_response(201, {"maintenance": {
        "_id": "m1", "serviceDate": "2026-10-01", "odometerAtService": 98000,
    }})
    code = main([
        "add-maintenance", "car1", "--date", "2026-10-01", "--odometer", "98000",
        "--category", "brakes", "--description", "Front pads",
        "--part", "Pads:80", "--part", "Clips", "--labor-cost", "40",
    ], app=app)
    assert code == 0
    body = session.request.call_args.kwargs["json"]
    assert [p["partName"] for p in body["jobLines"][0]["partsReplaced"]] == ["Pads", "Clips"]
    assert body["totalCost"] == {"parts": 80.0, "labor": 40.0, "total": 120.0}


def test_bad_part_cost_exit_code(app, session, capsys):
    code = main([
        "add-maintenance", "car1", "--date", "2026-10-01", "--odometer", "1000",
        "--description", "Pads", "--part", "Pads:cheap",
    ], app=app)
    assert code == 2
    assert "Invalid cost" in capsys.readouterr().err
    session.request.assert_not_called()


def test_out_of_range_usage_exit_code(app, session, capsys):
    assert main(["add-usage", "car1", "--odometer", "1000", "--city", "150"], app=app) == 2
    assert "less than or equal to 100" in capsys.readouterr().err
    session.request.assert_not_called()


def test_report_symptom_command(app, session):
    session.request.return_value = make_response(201, {"symptomReport": {"_id": "s1", "status": "submitted"}})
    code = main([
        "report-symptom", "car1", "--odometer", "120000",
        "--noise", "grinding@brakes", "--warning-light", "abs", "--urgency", "high",
    ], app=app)
    assert code == 0
    args, kwargs = session.request.call_args
    assert args == ("POST", "http://backend.test/api/vehicles/car1/symptoms")
    symptoms = kwargs["json"]["symptoms"]
    assert symptoms["noises"][0]["type"] == "grinding"
    assert symptoms["noises"][0]["location"] == "brakes"
    assert symptoms["warningLights"][0]["lightType"] == "abs"


def test_symptoms_command_filters_by_status(app, session, capsys):
    session.request.return_value = make_response(200, {"symptomReports": [], "total": 0})
    assert main(["symptoms", "car1", "--status", "resolved"], app=app) == 0
    assert session.request.call_args.kwargs["params"]["status"] == "resolved"
    assert json.loads(capsys.readouterr().out) == {"symptomReports": [], "total": 0}
