from dataclasses import replace

import pytest
import requests

from icar.models.route import Coordinate
from icar.plugin.openroute import OpenRouteServiceClient
from icar.tests.conftest import make_response
from icar.utils.errors import RouteError

START = Coordinate(latitude=36.81, longitude=10.17)
END = Coordinate(latitude=34.74, longitude=10.76)


def test_directions_request_and_decoding(settings, session):
    session.post.return_value = make_response(200, {
        "routes": [{
            "geometry": "_p~iF~ps|U_ulLnnqC_mqNvxq`@",
            "summary": {"distance": 12340.0, "duration": 960.0},
        }]
    })
    route = OpenRouteServiceClient(settings, session).get_directions(START, END)

    args, kwargs = session.post.call_args
    assert args == ("https://ors.test/v2/directions/driving-car",)
    assert kwargs["json"] == {"coordinates": [[10.17, 36.81], [10.76, 34.74]]}
    assert kwargs["headers"]["Authorization"] == "ors-test-key"

    assert len(route.coordinates) == 3
    assert route.coordinates[0].latitude == pytest.approx(38.5)
    assert route.summary.distance_km == 12.3
    assert route.summary.duration_minutes == 16


def test_missing_key(settings, session):
    client = OpenRouteServiceClient(replace(settings, ors_api_key=""), session)
    with pytest.raises(RouteError, match="ORS_API_KEY"):
        client.get_directions(START, END)
    session.post.assert_not_called()


def test_error_status_message(settings, session):
    session.post.return_value = make_response(403, {"error": {"code": 2, "message": "Quota exceeded"}})
    with pytest.raises(RouteError, match="Quota exceeded"):
        OpenRouteServiceClient(settings, session).get_directions(START, END)


def test_transport_failure(settings, session):
    session.post.side_effect = requests.ConnectionError("down")
    with pytest.raises(RouteError, match="Failed to get directions."):
        OpenRouteServiceClient(settings, session).get_directions(START, END)


def test_missing_geometry():
    with pytest.raises(RouteError, match="Could not find a route to this mechanic."):
        OpenRouteServiceClient.parse_route({"routes": [{"summary": {}}]})
