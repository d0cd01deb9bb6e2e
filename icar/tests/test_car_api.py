from datetime import date

import pytest

from icar.apis.car_api import CarService, format_registration_date
from icar.models.car import CarData
from icar.tests.conftest import make_response


@pytest.mark.parametrize("value, expected", [
    ("15/03/2019", "2019-03-15T00:00:00.000Z"),
    (date(2020, 1, 2), "2020-01-02T00:00:00.000Z"),
    ("2021-06-30T10:20:30.123Z", "2021-06-30T10:20:30.123Z"),
])
def test_format_registration_date(value, expected):
    assert format_registration_date(value) == expected


def _car_data(**kwargs):
    values = dict(
        vin="VF3XXXXXXXX123456",
        marque="Peugeot",
        modele="208",
        fuel_type="Diesel",
        immatriculation_type="TUN",
        numero_immatriculation="123 TUN 4567",
        kilometrage="85000",
        date_premiere_mise_en_circulation="15/03/2019",
    )
    values.update(kwargs)
    return CarData(**values)


def test_add_car_payload_and_unwrap(logged_in_store, settings, session):
    session.request.return_value = make_response(201, {"message": "Car added", "car": {"_id": "c1"}})
    response = CarService(logged_in_store, settings, session).add_car(_car_data())

    payload = session.request.call_args.kwargs["json"]
    assert payload["kilometrage"] == 85000
    assert payload["datePremiereMiseEnCirculation"] == "2019-03-15T00:00:00.000Z"
    assert payload["numeroImmatriculation"] == "123 TUN 4567"
    assert response.data == {"_id": "c1"}


def test_user_cars(logged_in_store, settings, session):
    session.request.return_value = make_response(200, {"cars": [{"_id": "c1"}]})
    response = CarService(logged_in_store, settings, session).get_user_cars()
    assert response.data == [{"_id": "c1"}]


def test_carte_grise_requires_token(store, settings, session, tmp_path):
    response = CarService(store, settings, session).add_car_from_carte_grise(tmp_path / "scan.jpg")
    assert not response.success
    assert response.message == "No authentication token found"
    session.request.assert_not_called()


def test_carte_grise_upload(logged_in_store, settings, session, tmp_path):
    image = tmp_path / "scan.jpg"
    image.write_bytes(b"\xff\xd8fake")
    session.request.return_value = make_response(
        201, {"car": {"_id": "c1"}, "extractedData": {"vin": "VF3XXXXXXXX123456"}}
    )

    response = CarService(logged_in_store, settings, session).add_car_from_carte_grise(
        image, manual_overrides={"kilometrage": 1200, "marque": ""}
    )

    kwargs = session.request.call_args.kwargs
    assert "carteGrise" in kwargs["files"]
    assert kwargs["data"] == {"kilometrage": "1200"}
    assert response.data == {"_id": "c1"}
    assert response.extracted_data == {"vin": "VF3XXXXXXXX123456"}


def test_carte_grise_failure_keeps_extracted_data(logged_in_store, settings, session, tmp_path):
    image = tmp_path / "scan.jpg"
    image.write_bytes(b"\xff\xd8fake")
    session.request.return_value = make_response(
        400, {"error": "VIN not readable", "extractedData": {"marque": "Peugeot"}}
    )
    response = CarService(logged_in_store, settings, session).add_car_from_carte_grise(image)

    assert not response.success
    assert response.display_message == "VIN not readable"
    assert response.data == {"marque": "Peugeot"}


def test_qr_code_messages(store, settings, session):
    assert CarService(store, settings, session).generate_qr_code("c1").message == "No token found"

    store.set_item("@auth_token", "t")
    session.request.return_value = make_response(500, {"error": "boom"})
    assert CarService(store, settings, session).generate_qr_code("c1").message == "Failed to generate QR code"
