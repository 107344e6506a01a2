# findata/schemas/user.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., description="At least 6 characters")
    company_name: str = Field(..., max_length=255)

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError("password too short")
        return value

    @field_validator("company_name")
    @classmethod
    def company_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("company_name is blank")
        return value


class LoginRequest(BaseModel):
    # Presence is checked by the login route so it can answer with its own message
    email: str = ""
    password: str = ""


# Public fields, never includes the password hash
class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    company_name: str
    created_at: datetime


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserRead


class CurrentUser(BaseModel):
    """Identity decoded from a bearer token."""
    id: int
    email: str
