import pytest

from icar.models.route import Coordinate
from icar.utils.geo import decode_polyline, distance_between, format_distance, haversine_km, map_delta


def test_same_point_is_zero_distance():
    assert haversine_km(36.8065, 10.1815, 36.8065, 10.1815) == 0


def test_tunis_to_sfax_distance():
    # Tunis -> Sfax is roughly 230 km in a straight line
    distance = haversine_km(36.8065, 10.1815, 34.7406, 10.7603)
    assert 225 < distance < 240


def test_distance_is_symmetric():
    a = Coordinate(latitude=36.8, longitude=10.18)
    b = Coordinate(latitude=35.82, longitude=10.63)
    assert distance_between(a, b) == pytest.approx(distance_between(b, a))


def test_decode_reference_polyline():
    points = decode_polyline("_p~iF~ps|U_ulLnnqC_mqNvxq`@")
    assert [(p.latitude, p.longitude) for p in points] == [
        pytest.approx((38.5, -120.2)),
        pytest.approx((40.7, -120.95)),
        pytest.approx((43.252, -126.453)),
    ]


def test_decode_empty_polyline():
    assert decode_polyline("") == []


def test_decode_truncated_polyline_raises():
    with pytest.raises(ValueError):
        decode_polyline("_p~iF~ps|U_ulL")


def test_format_distance():
    assert format_distance(3.14159) == "3.1 km"


def test_map_delta_has_a_minimum_span():
    point = Coordinate(latitude=36.8, longitude=10.18)
    assert map_delta(point, point) == (0.05, 0.05)
