# app/schemas/__init__.py
from .applicant import (
    RegisterRequest,
    LoginRequest,
    RegistrationOtpRequest,
    UserOtpRequest,
    OtpVerifyRequest,
    ForgotPasswordRequest,
    ChangePasswordRequest,
)
from .sections import (
    CandidateDetails,
    QualificationDetails,
    DocumentFile,
    PaymentSubmission,
    PaymentStatusUpdate,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "RegistrationOtpRequest",
    "UserOtpRequest",
    "OtpVerifyRequest",
    "ForgotPasswordRequest",
    "ChangePasswordRequest",
    "CandidateDetails",
    "QualificationDetails",
    "DocumentFile",
    "PaymentSubmission",
    "PaymentStatusUpdate",
]
