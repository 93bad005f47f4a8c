# app/services/otp_gate.py
import logging

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import AlreadyRegistered, InvalidOrExpiredOtp, NotFound
from app.models.applicant import Applicant
from app.services import identity_store, notification_outbox
from app.utils.otp import generate_otp, has_otp_format, otp_expiry, otp_matches

logger = logging.getLogger(__name__)


# -------------------- PRE-REGISTRATION --------------------
def request_registration_otp(db: Session, mobile_number: str, email_address: str) -> str:
    """
    Send a registration code to a prospective applicant. Nothing is stored,
    the matching verification step only checks the code's format.
    """
    if identity_store.identity_taken(db, mobile_number, email_address):
        raise AlreadyRegistered()

    code = generate_otp()
    notification_outbox.enqueue(
        db,
        recipient=identity_store.normalize_email(email_address),
        subject="Registration OTP - IOCL Recruitment",
        template="otp.html",
        context={
            "heading": "Registration OTP",
            "full_name": None,
            "otp": code,
            "expires_minutes": settings.OTP_EXPIRE_MINUTES,
        },
    )
    db.commit()
    logger.info(f"Registration OTP queued for {email_address}")
    return code


def verify_registration_otp(mobile_number: str, code: str) -> None:
    # Registration codes are not stored; only the format is checked.
    if not has_otp_format(code):
        raise InvalidOrExpiredOtp("Invalid OTP format")
    logger.info(f"Registration OTP accepted for {mobile_number}")


# -------------------- EXISTING APPLICANTS --------------------
def _applicant_by_mobile(db: Session, mobile_number: str) -> Applicant:
    applicant = identity_store.find_by_field(db, "mobile_number", mobile_number)
    if applicant is None:
        raise NotFound()
    return applicant


def request_user_otp(db: Session, mobile_number: str) -> Applicant:
    applicant = _applicant_by_mobile(db, mobile_number)

    code = generate_otp()
    applicant.otp_code = code
    applicant.otp_expires_at = otp_expiry()
    notification_outbox.enqueue(
        db,
        recipient=applicant.email_address,
        subject="OTP Verification - IOCL Recruitment",
        template="otp.html",
        context={
            "heading": "OTP Verification",
            "full_name": applicant.full_name,
            "otp": code,
            "expires_minutes": settings.OTP_EXPIRE_MINUTES,
        },
    )
    db.commit()
    logger.info(f"OTP stored for {applicant.applicant_id}, expires {applicant.otp_expires_at}")
    if settings.DEBUG:
        logger.info(f"DEBUG: OTP for {applicant.applicant_id} is {code}")
    return applicant


def verify_user_otp(db: Session, mobile_number: str, code: str) -> Applicant:
    applicant = _applicant_by_mobile(db, mobile_number)

    if not otp_matches(applicant.otp_code, applicant.otp_expires_at, code):
        logger.info(f"❌ OTP rejected for {applicant.applicant_id}")
        raise InvalidOrExpiredOtp()

    applicant.is_verified = True
    applicant.otp_code = None
    applicant.otp_expires_at = None
    db.commit()
    logger.info(f"✅ OTP verified for {applicant.applicant_id}")
    return applicant
