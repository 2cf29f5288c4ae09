from typing import Optional
from pydantic import BaseModel, field_validator


class OTPRequest(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def numbers_as_text(cls, value):
        # clients may send the code or number as a JSON number
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class SendOTPRequest(OTPRequest):
    phone: Optional[str] = None


class VerifyOTPRequest(OTPRequest):
    phone: Optional[str] = None
    token: Optional[str] = None
