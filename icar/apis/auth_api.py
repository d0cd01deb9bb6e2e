from icar.apis.http_client import ApiClient
from icar.models.api_response import ApiResponse
from icar.models.user import (
    ChangePasswordData,
    ForgotPasswordData,
    LoginData,
    RegisterData,
    ResetPasswordData,
    UpdateProfileData,
    VerifyPhoneData,
)
from icar.utils.logging_config import get_logger
from icar.utils.storage import AUTH_TOKEN_KEY
from icar.utils.token import is_token_expired

logger = get_logger(__name__)


class AuthService(ApiClient):
    """Icar account endpoints."""

    def register(self, user_data: RegisterData) -> ApiResponse:
        return self.make_request("POST", "/api/auth/icar/register", json=user_data.to_payload())

    def verify_phone(self, data: VerifyPhoneData) -> ApiResponse:
        return self.make_request("POST", "/api/auth/icar/verify", json=data.to_payload())

    def login(self, credentials: LoginData) -> ApiResponse:
        """Log in and keep the returned token for the following calls."""
        response = self.make_request("POST", "/api/auth/icar/login", json=credentials.to_payload())
        token = response.data.get("token") if response.success and isinstance(response.data, dict) else None
        if token:
            self.store.set_item(AUTH_TOKEN_KEY, token)
            logger.info("Logged in, token stored")
        return response

    def forgot_password(self, data: ForgotPasswordData) -> ApiResponse:
        return self.make_request("POST", "/api/auth/icar/forgot-password", json=data.to_payload())

    def reset_password(self, data: ResetPasswordData) -> ApiResponse:
        return self.make_request("POST", "/api/auth/icar/reset-password", json=data.to_payload())

    def change_password(self, data: ChangePasswordData) -> ApiResponse:
        return self.make_request("PUT", "/api/auth/change-password", json=data.to_payload())

    def get_profile(self) -> ApiResponse:
        return self.make_request("GET", "/api/auth/me")

    def update_profile(self, data: UpdateProfileData) -> ApiResponse:
        return self.make_request("PUT", "/api/auth/profile", json=data.to_payload())

    def resend_verification_code(self, phone_number: str) -> ApiResponse:
        return self.make_request("POST", "/api/auth/icar/resend-code", json={"phoneNumber": phone_number})

    def logout(self) -> ApiResponse:
        """Tell the backend, then drop the token whatever it answered."""
        response = self.make_request("POST", "/api/auth/icar/logout")
        self.store.remove_item(AUTH_TOKEN_KEY)
        return response

    def is_authenticated(self) -> bool:
        token = self.get_token()
        if not token:
            return False
        return not is_token_expired(token)
