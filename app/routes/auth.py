# app/routes/auth.py
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
import logging

from app.config import settings
from app.database import get_db
from app.schemas.applicant import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    OtpVerifyRequest,
    RegisterRequest,
    RegistrationOtpRequest,
    UserOtpRequest,
)
from app.services import credentials, otp_gate
from app.services.notification_outbox import deliver_pending
from app.services.progress import progress_for_admin, progress_for_applicant
from app.utils.token import issue_token, ROLE_APPLICANT

router = APIRouter(tags=["Authentication"])
logger = logging.getLogger(__name__)


# -------------------- REGISTRATION --------------------
@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    applicant, _ = credentials.register(
        db,
        full_name=payload.full_name,
        mobile_number=payload.mobile_number,
        email_address=payload.email_address,
        post_code=payload.post_code,
        password=payload.password,
        alternate_mobile_number=payload.alternate_mobile_number,
    )
    background_tasks.add_task(deliver_pending)
    logger.info(f"✅ Registered applicant {applicant.applicant_id}")

    return {
        "success": True,
        "message": "Registration successful. Your login credentials have been sent to your email.",
        "data": {
            "userId": applicant.applicant_id,
            "fullName": applicant.full_name,
            "emailAddress": applicant.email_address,
            "mobileNumber": applicant.mobile_number,
            "postCode": applicant.post_code,
            "token": issue_token(applicant.applicant_id, ROLE_APPLICANT),
        },
    }


# -------------------- OTP --------------------
@router.post("/generate-otp")
async def generate_otp(
    payload: RegistrationOtpRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    code = otp_gate.request_registration_otp(db, payload.mobile_number, payload.email_address)
    background_tasks.add_task(deliver_pending)

    response = {"success": True, "message": "OTP sent successfully"}
    if settings.DEBUG:
        response["otp"] = code
    return response


@router.post("/generate-otp-user")
async def generate_otp_user(
    payload: UserOtpRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    applicant = otp_gate.request_user_otp(db, payload.mobile_number)
    background_tasks.add_task(deliver_pending)

    response = {"success": True, "message": "OTP sent successfully"}
    if settings.DEBUG:
        response["otp"] = applicant.otp_code
    return response


@router.post("/verify-otp")
async def verify_otp(payload: OtpVerifyRequest):
    otp_gate.verify_registration_otp(payload.mobile_number, payload.otp)
    return {"success": True, "message": "OTP verified successfully"}


@router.post("/verify-otp-user")
async def verify_otp_user(payload: OtpVerifyRequest, db: Session = Depends(get_db)):
    applicant = otp_gate.verify_user_otp(db, payload.mobile_number, payload.otp)
    return {
        "success": True,
        "message": "OTP verified successfully",
        "data": {"userId": applicant.applicant_id, "isVerified": applicant.is_verified},
    }


# -------------------- LOGIN --------------------
@router.post("/login")
async def login(payload: LoginRequest, db: Session = Depends(get_db)):
    token, record = credentials.login(db, payload.user_id, payload.password)

    if record.admin is not None:
        data = {
            "userId": record.admin.login_id,
            "fullName": record.admin.full_name,
            "emailAddress": record.admin.email_address,
            "mobileNumber": None,
            "role": record.role,
            "token": token,
            "progress": progress_for_admin().to_dict(),
        }
    else:
        applicant = record.applicant
        data = {
            "userId": applicant.applicant_id,
            "fullName": applicant.full_name,
            "emailAddress": applicant.email_address,
            "mobileNumber": applicant.mobile_number,
            "role": record.role,
            "token": token,
            "progress": progress_for_applicant(applicant).to_dict(),
        }

    return {"success": True, "message": "Login successful", "data": data}


# -------------------- PASSWORDS --------------------
@router.post("/forgot-password")
async def forgot_password(
    payload: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    credentials.reset_password(db, payload.user_id)
    background_tasks.add_task(deliver_pending)
    return {"success": True, "message": "A temporary password has been sent to your registered email address."}


@router.post("/change-password")
async def change_password(payload: ChangePasswordRequest, db: Session = Depends(get_db)):
    credentials.change_password(db, payload.user_id, payload.old_password, payload.new_password)
    return {"success": True, "message": "Password changed successfully"}
