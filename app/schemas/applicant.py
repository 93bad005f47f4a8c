# app/schemas/applicant.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional

MOBILE_PATTERN = r"^(\+91)?[6-9]\d{9}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    post_code: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=2)
    mobile_number: str = Field(..., pattern=MOBILE_PATTERN)
    alternate_mobile_number: Optional[str] = None
    email_address: EmailStr
    password: Optional[str] = Field(default=None, min_length=6)

    model_config = ConfigDict(title="RegisterRequest")


class LoginRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(title="LoginRequest")


class RegistrationOtpRequest(CamelModel):
    mobile_number: str = Field(..., pattern=MOBILE_PATTERN)
    email_address: EmailStr


class UserOtpRequest(CamelModel):
    mobile_number: str = Field(..., pattern=MOBILE_PATTERN)
    email_address: Optional[EmailStr] = None


class OtpVerifyRequest(CamelModel):
    mobile_number: str = Field(..., pattern=MOBILE_PATTERN)
    otp: str = Field(..., min_length=1)


class ForgotPasswordRequest(CamelModel):
    user_id: str = Field(..., min_length=1)


class ChangePasswordRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
