"""
Signup and password reset flows.

The phone number being verified, the phone number being reset and the
reset code are kept in device storage so an interrupted flow can resume
where it stopped.
"""

from enum import Enum
from typing import Optional

from icar.apis.auth_api import AuthService
from icar.models.api_response import ApiResponse
from icar.models.user import ForgotPasswordData, LoginData, RegisterData, ResetPasswordData, VerifyPhoneData
from icar.utils.errors import ValidationError
from icar.utils.logging_config import get_logger
from icar.utils.storage import ALL_KEYS, RESET_CODE_KEY, RESET_PHONE_KEY, USER_PHONE_KEY
from icar.utils.validation import validate_login, validate_new_password, validate_reset_code, validate_signup

logger = get_logger(__name__)


class PendingStep(str, Enum):
    NONE = "none"
    VERIFY_PHONE = "verify"
    ENTER_RESET_CODE = "reset-code"
    NEW_PASSWORD = "new-password"


class AuthFlow:

    def __init__(self, auth_service: AuthService):
        self.auth = auth_service
        self.store = auth_service.store

    @property
    def user_phone(self) -> Optional[str]:
        return self.store.get_item(USER_PHONE_KEY)

    @property
    def reset_phone(self) -> Optional[str]:
        return self.store.get_item(RESET_PHONE_KEY)

    @property
    def reset_code(self) -> Optional[str]:
        return self.store.get_item(RESET_CODE_KEY)

    def pending_step(self) -> PendingStep:
        if self.user_phone:
            return PendingStep.VERIFY_PHONE
        if self.reset_phone and self.reset_code:
            return PendingStep.NEW_PASSWORD
        if self.reset_phone:
            return PendingStep.ENTER_RESET_CODE
        return PendingStep.NONE

    def register(self, data: RegisterData, confirm_password: Optional[str] = None) -> ApiResponse:
        errors = validate_signup(
            data.first_name,
            data.last_name,
            data.phone_number,
            data.password,
            confirm_password,
            data.email,
        )
        if errors:
            raise ValidationError(errors)
        response = self.auth.register(data)
        if response.success:
            self.store.set_item(USER_PHONE_KEY, data.phone_number)
        return response

    def verify(self, code: str, phone_number: Optional[str] = None) -> ApiResponse:
        phone = phone_number or self.user_phone
        if not phone:
            raise ValidationError({"phone_number": "No phone number awaiting verification"})
        response = self.auth.verify_phone(VerifyPhoneData(phone_number=phone, code=code))
        if response.success:
            self.store.remove_item(USER_PHONE_KEY)
        return response

    def resend_code(self, phone_number: Optional[str] = None) -> ApiResponse:
        phone = phone_number or self.user_phone
        if not phone:
            raise ValidationError({"phone_number": "No phone number awaiting verification"})
        return self.auth.resend_verification_code(phone)

    def login(self, phone_number: str, password: str) -> ApiResponse:
        errors = validate_login(phone_number, password)
        if errors:
            raise ValidationError(errors)
        return self.auth.login(LoginData(phone_number=phone_number, password=password))

    def forgot_password(self, phone_number: str) -> ApiResponse:
        if not phone_number.strip():
            raise ValidationError({"phone_number": "Phone number is required"})
        response = self.auth.forgot_password(ForgotPasswordData(phone_number=phone_number))
        if response.success:
            self.store.set_item(RESET_PHONE_KEY, phone_number)
        return response

    def enter_reset_code(self, code: str) -> None:
        errors = validate_reset_code(code)
        if errors:
            raise ValidationError(errors)
        if not self.reset_phone:
            raise ValidationError({"phone_number": "No password reset in progress"})
        self.store.set_item(RESET_CODE_KEY, code.strip())

    def reset_password(self, new_password: str, confirm_password: Optional[str] = None) -> ApiResponse:
        phone, code = self.reset_phone, self.reset_code
        if not phone or not code:
            raise ValidationError({"code": "No password reset in progress"})
        errors = validate_new_password(new_password, confirm_password)
        if errors:
            raise ValidationError(errors)
        response = self.auth.reset_password(
            ResetPasswordData(phone_number=phone, code=code, new_password=new_password)
        )
        if response.success:
            self.store.multi_remove([RESET_PHONE_KEY, RESET_CODE_KEY])
        return response

    def clear(self) -> None:
        """Forget the token and every in-flight flow flag."""
        self.store.multi_remove(ALL_KEYS)
        logger.info("Auth state cleared")
