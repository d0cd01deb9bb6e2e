from typing import Literal, Optional

from icar.models.base import CamelModel, DocumentModel


class UserProfile(DocumentModel):
    """Icar (vehicle owner) account as returned by /api/auth/me and login."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    type: Optional[str] = None
    is_verified: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


class RegisterData(CamelModel):
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone_number: str
    type: Literal["entreprise", "personal"] = "personal"
    password: str


class LoginData(CamelModel):
    phone_number: str
    password: str


class LoginResponse(CamelModel):
    token: str
    user: Optional[UserProfile] = None


class VerifyPhoneData(CamelModel):
    phone_number: str
    code: str


class ForgotPasswordData(CamelModel):
    phone_number: str


class ResetPasswordData(CamelModel):
    phone_number: str
    code: str
    new_password: str


class ChangePasswordData(CamelModel):
    current_password: str
    new_password: str


class UpdateProfileData(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
