# app/utils/otp.py
from datetime import datetime, timedelta
from typing import Optional
import secrets
import string

from app.config import settings

OTP_LENGTH = 6


# -------------------- OTP GENERATOR --------------------
def generate_otp(length: int = OTP_LENGTH) -> str:
    """Generate a numeric OTP of given length (default 6 digits)."""
    return ''.join(secrets.choice(string.digits) for _ in range(length))


def otp_expiry(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.utcnow()
    return now + timedelta(minutes=settings.OTP_EXPIRE_MINUTES)


# -------------------- CHECKS --------------------
def has_otp_format(code: Optional[str]) -> bool:
    return code is not None and len(code) == OTP_LENGTH


def otp_matches(
    stored_code: Optional[str],
    expires_at: Optional[datetime],
    submitted_code: str,
    now: Optional[datetime] = None,
) -> bool:
    """
    True when the stored code equals the submitted one and has not expired.
    A missing code or expiry never matches.
    """
    if not stored_code or expires_at is None:
        return False
    now = now or datetime.utcnow()
    if expires_at < now:
        return False
    return secrets.compare_digest(stored_code, submitted_code or "")
