from unittest.mock import MagicMock

import pytest

from icar.apis.user_api import UserService
from icar.flows.mechanics import MechanicsFinder
from icar.models.api_response import ApiResponse
from icar.models.route import Coordinate, Route
from icar.plugin.openroute import OpenRouteServiceClient
from icar.utils.errors import ApiError, RouteError

IREPAIRS = [
    {"_id": "g1", "nomGarage": "Garage Sfax", "geolocation": {"lat": 34.7406, "lng": 10.7603}},
    {"_id": "g2", "nomGarage": "Garage Tunis", "adresse": "Rue de Marseille",
     "geolocation": {"lat": 36.8, "lng": 10.18}, "typeService": ["Brake Service"]},
    {"_id": "g3", "nomGarage": "No location"},
]


@pytest.fixture
def user_service():
    service = MagicMock(spec=UserService)
    service.get_all_irepairs.return_value = ApiResponse(success=True, data=IREPAIRS)
    return service


def test_load_skips_garages_without_location(user_service):
    finder = MechanicsFinder(user_service)
    mechanics = finder.load()

    assert [m.id for m in mechanics] == ["g1", "g2"]
    assert mechanics[0].address == "Address not available"
    assert mechanics[0].specialties == ["General Repair"]
    assert mechanics[1].specialties == ["Brake Service"]


def test_load_failure(user_service):
    user_service.get_all_irepairs.return_value = ApiResponse(success=False, error="boom", status_code=500)
    with pytest.raises(ApiError, match="Failed to load mechanics"):
        MechanicsFinder(user_service).load()


def test_load_skips_malformed_garage_records(user_service):
    user_service.get_all_irepairs.return_value = ApiResponse(success=True, data=IREPAIRS + [
        {"_id": "g4", "nomGarage": "Null coordinates", "geolocation": {"lat": None, "lng": None}},
        {"_id": "g5", "nomGarage": "Bad services", "typeService": "Oil Change"},
    ])
    mechanics = MechanicsFinder(user_service).load()

    assert [m.id for m in mechanics] == ["g1", "g2"]


def test_nearest_and_sorting(user_service):
    finder = MechanicsFinder(user_service)
    finder.load()
    assert finder.nearest is None

    finder.set_user_location(36.81, 10.17)

    assert finder.nearest.id == "g2"
    assert [m.id for m in finder.sorted_by_distance()] == ["g2", "g1"]
    assert finder.nearest.distance_km < 2
    assert finder.nearest.distance_label.endswith(" km")


def test_directions_need_user_location(user_service):
    finder = MechanicsFinder(user_service, MagicMock(spec=OpenRouteServiceClient))
    finder.load()
    with pytest.raises(RouteError, match="User location not available."):
        finder.get_directions("g1")


def test_directions_replace_previous_route(user_service):
    router = MagicMock(spec=OpenRouteServiceClient)
    route = Route(coordinates=[Coordinate(latitude=36.81, longitude=10.17)])
    router.get_directions.return_value = route

    finder = MechanicsFinder(user_service, router)
    finder.load()
    finder.set_user_location(36.81, 10.17)

    assert finder.get_directions("g1") is route
    start, end = router.get_directions.call_args.args
    assert (start.latitude, start.longitude) == (36.81, 10.17)
    assert (end.latitude, end.longitude) == (34.7406, 10.7603)

    router.get_directions.side_effect = RouteError("Could not get route.")
    with pytest.raises(RouteError):
        finder.get_directions("g2")
    assert finder.route is None
    assert finder.selected.id == "g2"


def test_unknown_mechanic(user_service):
    finder = MechanicsFinder(user_service)
    finder.load()
    with pytest.raises(ApiError) as exc:
        finder.find("nope")
    assert exc.value.status_code == 404
