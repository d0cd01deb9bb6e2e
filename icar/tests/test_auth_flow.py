import pytest

from icar.apis.auth_api import AuthService
from icar.flows.auth_flow import AuthFlow, PendingStep
from icar.models.user import RegisterData
from icar.tests.conftest import make_response
from icar.utils.errors import ValidationError
from icar.utils.storage import AUTH_TOKEN_KEY, RESET_CODE_KEY, RESET_PHONE_KEY, USER_PHONE_KEY


@pytest.fixture
def flow(store, settings, session):
    return AuthFlow(AuthService(store, settings, session))


def test_signup_then_verify(flow, store, session):
    session.request.return_value = make_response(201, {"message": "Verification code sent"})
    flow.register(
        RegisterData(first_name="Amine", last_name="Ben Ali", phone_number="20123456", password="secret1"),
        "secret1",
    )
    assert store.get_item(USER_PHONE_KEY) == "20123456"
    assert flow.pending_step() == PendingStep.VERIFY_PHONE

    session.request.return_value = make_response(200, {"message": "Phone verified"})
    response = flow.verify("123456")

    assert response.success
    assert session.request.call_args.kwargs["json"] == {"phoneNumber": "20123456", "code": "123456"}
    assert store.get_item(USER_PHONE_KEY) is None
    assert flow.pending_step() == PendingStep.NONE


def test_invalid_signup_is_not_sent(flow, session):
    with pytest.raises(ValidationError) as exc:
        flow.register(RegisterData(first_name="", last_name="X", phone_number="1", password="123"))
    assert "first_name" in exc.value.errors
    session.request.assert_not_called()


def test_failed_verification_keeps_phone(flow, store, session):
    store.set_item(USER_PHONE_KEY, "20123456")
    session.request.return_value = make_response(400, {"error": "Invalid code"})
    assert not flow.verify("000000").success
    assert store.get_item(USER_PHONE_KEY) == "20123456"


def test_verify_without_phone(flow):
    with pytest.raises(ValidationError):
        flow.verify("123456")


def test_password_reset_flow(flow, store, session):
    session.request.return_value = make_response(200, {"message": "Code sent"})
    flow.forgot_password("20123456")
    assert flow.pending_step() == PendingStep.ENTER_RESET_CODE

    with pytest.raises(ValidationError):
        flow.enter_reset_code("12")
    flow.enter_reset_code("654321")
    assert store.get_item(RESET_CODE_KEY) == "654321"
    assert flow.pending_step() == PendingStep.NEW_PASSWORD

    session.request.return_value = make_response(200, {"message": "Password reset"})
    flow.reset_password("newsecret", "newsecret")

    assert session.request.call_args.kwargs["json"] == {
        "phoneNumber": "20123456",
        "code": "654321",
        "newPassword": "newsecret",
    }
    assert store.get_item(RESET_PHONE_KEY) is None
    assert store.get_item(RESET_CODE_KEY) is None


def test_reset_code_needs_reset_in_progress(flow):
    with pytest.raises(ValidationError):
        flow.enter_reset_code("654321")


def test_mismatched_new_password(flow, store, session):
    store.set_item(RESET_PHONE_KEY, "20123456")
    store.set_item(RESET_CODE_KEY, "654321")
    with pytest.raises(ValidationError) as exc:
        flow.reset_password("newsecret", "other")
    assert exc.value.errors == {"confirm_password": "Passwords do not match"}
    session.request.assert_not_called()


def test_clear(flow, store):
    for key in (AUTH_TOKEN_KEY, USER_PHONE_KEY, RESET_PHONE_KEY):
        store.set_item(key, "x")
    flow.clear()
    assert store.get_all() == {}
