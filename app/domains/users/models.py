# app/domains/users/models.py

from enum import Enum
from typing import Any, Optional
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError
from app.config.setting import settings
from app.shared.phone import is_mobile_phone

BOOLEAN_STRINGS = {"true": True, "false": False, "1": True, "0": False}


class Role(str, Enum):
    CITIZEN = "Citizen"
    OFFICER = "Law Enforcement Officer"


class Account(BaseModel):
    """Row stored in the users table. The id is assigned by the database."""

    id: Optional[Any] = None
    full_name: str
    email: str
    phone: str
    password: str
    role: Role
    anonymous_status: bool
    officer_verification: Optional[bool] = None
    verification_status: bool = False

    def to_row(self) -> dict:
        return self.model_dump(mode="json", exclude={"id"})


def _violation(field: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(field, message)


def _as_boolean(value, message: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value in BOOLEAN_STRINGS:
        return BOOLEAN_STRINGS[value]
    raise _violation("boolean", message)


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Any = Field(None, alias="fullName")
    email: Any = None
    phone: Any = None
    password: Any = None
    anonymous: Any = None
    is_officer: Any = Field(None, alias="isOfficer")

    @model_validator(mode="before")
    @classmethod
    def fill_missing_fields(cls, data):
        # Missing keys become null so every rule runs and errors carry the request key
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name, field in cls.model_fields.items():
            key = field.alias or name
            if key not in data and name not in data:
                data[key] = None
        return data

    @field_validator("full_name")
    @classmethod
    def check_full_name(cls, value):
        if not isinstance(value, str) or len(value) < 3:
            raise _violation("min_length", "Full name must be at least 3 characters long")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        if not isinstance(value, str):
            raise _violation("email", "Invalid email address")
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise _violation("email", "Invalid email address")
        return value

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        if not is_mobile_phone(value, settings.default_phone_region):
            raise _violation("phone", "Invalid phone number")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value):
        if not isinstance(value, str) or len(value) < 6:
            raise _violation("min_length", "Password must be at least 6 characters long")
        return value

    @field_validator("anonymous")
    @classmethod
    def check_anonymous(cls, value):
        return _as_boolean(value, "Anonymous status must be a boolean")

    @field_validator("is_officer")
    @classmethod
    def check_is_officer(cls, value):
        return _as_boolean(value, "isOfficer must be a boolean")
