# app/services/credentials.py
"""
Credential verification for applicants and the single administrator.

The administrator is a credential record built from settings at startup. It
goes through the same lookup and hash check as applicants and is told apart
only by its role.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import DuplicateIdentity, InvalidCredentials, NotFound
from app.models.applicant import Applicant
from app.services import identity_store, notification_outbox
from app.utils.hash import hash_password, verify_password
from app.utils.password import generate_password
from app.utils.token import issue_token, ROLE_ADMIN, ROLE_APPLICANT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminCredential:
    login_id: str
    password_hash: Optional[str]
    full_name: str
    email_address: str
    role: str = ROLE_ADMIN


@dataclass(frozen=True)
class CredentialRecord:
    subject: str
    password_hash: Optional[str]
    role: str
    applicant: Optional[Applicant] = None
    admin: Optional[AdminCredential] = None


@lru_cache()
def get_admin_credential() -> AdminCredential:
    if not settings.ADMIN_PASSWORD:
        logger.warning("⚠️ ADMIN_PASSWORD is not set, administrator login is disabled")
    return AdminCredential(
        login_id=settings.ADMIN_LOGIN_ID,
        password_hash=hash_password(settings.ADMIN_PASSWORD) if settings.ADMIN_PASSWORD else None,
        full_name=settings.ADMIN_FULL_NAME,
        email_address=settings.ADMIN_EMAIL,
    )


def is_admin_identifier(identifier: str) -> bool:
    return identifier == get_admin_credential().login_id


def resolve_credential(db: Session, identifier: str) -> Optional[CredentialRecord]:
    admin = get_admin_credential()
    if identifier == admin.login_id:
        return CredentialRecord(subject=admin.login_id, password_hash=admin.password_hash, role=admin.role, admin=admin)

    applicant = identity_store.find_by_field(db, "applicant_id", identifier)
    if applicant is None:
        return None
    return CredentialRecord(
        subject=applicant.applicant_id,
        password_hash=applicant.password_hash,
        role=ROLE_APPLICANT,
        applicant=applicant,
    )


def register(
    db: Session,
    *,
    full_name: str,
    mobile_number: str,
    email_address: str,
    post_code: str,
    password: Optional[str] = None,
    alternate_mobile_number: Optional[str] = None,
) -> Tuple[Applicant, str]:
    """Create the applicant and queue the credentials email in one commit."""
    raw_password = password or generate_password()

    applicant = identity_store.create(
        db,
        full_name=full_name,
        mobile_number=mobile_number,
        email_address=email_address,
        post_code=post_code,
        password_hash=hash_password(raw_password),
        alternate_mobile_number=alternate_mobile_number,
    )
    notification_outbox.enqueue(
        db,
        recipient=applicant.email_address,
        subject="Registration Successful - IOCL Recruitment",
        template="registration_success.html",
        context={
            "full_name": applicant.full_name,
            "applicant_id": applicant.applicant_id,
            "password": raw_password,
        },
    )

    try:
        db.commit()
    except IntegrityError:
        # A concurrent registration took the same mobile number or email
        db.rollback()
        raise DuplicateIdentity()

    db.refresh(applicant)
    return applicant, raw_password


def login(db: Session, identifier: str, password: str) -> Tuple[str, CredentialRecord]:
    record = resolve_credential(db, identifier)
    if record is None or not verify_password(password, record.password_hash):
        logger.info(f"Failed login attempt for {identifier}")
        raise InvalidCredentials()

    logger.info(f"✅ {record.role} {record.subject} logged in")
    return issue_token(record.subject, record.role), record


def change_password(db: Session, identifier: str, old_password: str, new_password: str) -> Applicant:
    applicant = identity_store.get_or_404(db, identifier)
    if not verify_password(old_password, applicant.password_hash):
        raise InvalidCredentials("Current password is incorrect")

    applicant.password_hash = hash_password(new_password)
    db.commit()
    logger.info(f"Password changed for {applicant.applicant_id}")
    return applicant


def reset_password(db: Session, identifier: str) -> Applicant:
    """Replace the password with a temporary one and queue it for email."""
    applicant = identity_store.find_by_field(db, "applicant_id", identifier)
    if applicant is None:
        raise NotFound()

    temp_password = generate_password()
    applicant.password_hash = hash_password(temp_password)
    notification_outbox.enqueue(
        db,
        recipient=applicant.email_address,
        subject="Password Reset - IOCL Recruitment",
        template="password_reset.html",
        context={
            "full_name": applicant.full_name,
            "applicant_id": applicant.applicant_id,
            "password": temp_password,
        },
    )
    db.commit()
    logger.info(f"Temporary password issued for {applicant.applicant_id}")
    if settings.DEBUG:
        logger.info(f"DEBUG: temporary password for {applicant.applicant_id} is {temp_password}")
    return applicant
