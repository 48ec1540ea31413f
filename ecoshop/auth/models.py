from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str | None) -> str | None:
    if value is not None and len(value.encode()) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value: str | None) -> str | None:
        return _check_password_bytes(value)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    token: str | None = Field(default=None, description="TOTP code when 2FA is enabled")


class ProfileUpdateRequest(BaseModel):
    username: str | None = Field(default=None, min_length=1, max_length=64)
    password: str | None = Field(default=None, min_length=6)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value: str | None) -> str | None:
        return _check_password_bytes(value)


class UserOut(BaseModel):
    id: str
    username: str
    email: str
    role: str
    is_2fa_enabled: bool = False


class TwoFactorSetupResponse(BaseModel):
    otpauth_url: str
    message: str
