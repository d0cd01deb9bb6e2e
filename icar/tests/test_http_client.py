import pytest
import requests

from icar.apis.http_client import BAD_GATEWAY_ERROR, BAD_GATEWAY_MESSAGE, INVALID_JSON_ERROR, ApiClient, error_text
from icar.tests.conftest import make_response
from icar.utils.errors import ApiError, AuthenticationError


def _client(store, settings, session):
    return ApiClient(store, settings, session)


def test_success_envelope(store, settings, session):
    session.request.return_value = make_response(200, {"message": "ok", "cars": []})
    response = _client(store, settings, session).make_request("GET", "/api/vehicle/my-cars")

    assert response.success
    assert response.data == {"message": "ok", "cars": []}
    assert response.message == "ok"
    assert response.status_code == 200


def test_bearer_token_and_timeout(logged_in_store, settings, session):
    session.request.return_value = make_response(200, {})
    _client(logged_in_store, settings, session).make_request("GET", "/api/auth/me")

    args, kwargs = session.request.call_args
    assert args == ("GET", "http://backend.test/api/auth/me")
    assert kwargs["headers"]["Authorization"] == "Bearer test-token"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == 10.0


def test_multipart_request_leaves_content_type_to_requests(logged_in_store, settings, session):
    session.request.return_value = make_response(200, {})
    _client(logged_in_store, settings, session).make_request("POST", "/upload", files={"f": ("a.jpg", b"x")})
    assert "Content-Type" not in session.request.call_args.kwargs["headers"]


def test_html_body_is_bad_gateway(store, settings, session):
    session.request.return_value = make_response(502, text="<html><body>502 Bad Gateway</body></html>")
    response = _client(store, settings, session).make_request("GET", "/api/user/irepairs")

    assert not response.success
    assert response.error == BAD_GATEWAY_ERROR
    assert response.message == BAD_GATEWAY_MESSAGE


def test_invalid_json_keeps_raw_text(store, settings, session):
    session.request.return_value = make_response(200, text="plain text")
    response = _client(store, settings, session).make_request("GET", "/x")

    assert not response.success
    assert response.error == INVALID_JSON_ERROR
    assert response.message == "plain text"


def test_error_status_uses_backend_error(store, settings, session):
    session.request.return_value = make_response(400, {"error": "Phone number already registered"})
    response = _client(store, settings, session).make_request("POST", "/api/auth/icar/register", json={})

    assert not response.success
    assert response.display_message == "Phone number already registered"
    assert response.status_code == 400


def test_network_error_is_folded_into_envelope(store, settings, session):
    session.request.side_effect = requests.ConnectionError("connection refused")
    response = _client(store, settings, session).make_request("GET", "/x")

    assert not response.success
    assert response.error == "connection refused"


def test_error_text_fallbacks():
    assert error_text({"message": "m"}) == "m"
    assert error_text({"error": {"message": "nested"}}) == "nested"
    assert error_text([1, 2], "default") == "default"


def test_request_json_raises_on_error_status(store, settings, session):
    session.request.return_value = make_response(404, {"message": "Maintenance state not found"})
    with pytest.raises(ApiError) as exc:
        _client(store, settings, session).request_json("GET", "/x")
    assert exc.value.status_code == 404
    assert exc.value.message == "Maintenance state not found"


def test_require_token(store, settings, session):
    with pytest.raises(AuthenticationError):
        _client(store, settings, session).require_token()
