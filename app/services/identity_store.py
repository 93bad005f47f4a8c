# app/services/identity_store.py
from typing import Optional
import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import DuplicateIdentity, IdentifierSpaceExhausted, NotFound
from app.models.applicant import Applicant, ApplicantIdReservation

logger = logging.getLogger(__name__)

ID_SUFFIX_START = 100000
ID_SUFFIX_END = 999999

LOOKUP_FIELDS = {
    "applicant_id": Applicant.applicant_id,
    "mobile_number": Applicant.mobile_number,
    "email_address": Applicant.email_address,
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_by_field(db: Session, field: str, value: str) -> Optional[Applicant]:
    if field not in LOOKUP_FIELDS:
        raise ValueError(f"Applicants cannot be looked up by {field}")
    if field == "email_address":
        value = normalize_email(value)
    return db.query(Applicant).filter(LOOKUP_FIELDS[field] == value).first()


def get_or_404(db: Session, applicant_id: str) -> Applicant:
    applicant = find_by_field(db, "applicant_id", applicant_id)
    if not applicant:
        raise NotFound()
    return applicant


def identity_taken(db: Session, mobile_number: str, email_address: str) -> bool:
    existing = db.query(Applicant.id).filter(
        or_(
            Applicant.mobile_number == mobile_number,
            func.lower(Applicant.email_address) == normalize_email(email_address),
        )
    ).first()
    return existing is not None


def generate_unique_applicant_id(db: Session) -> str:
    """
    Reserve the next applicant id. The reservation row number is turned into
    the numeric suffix, so ids never collide and no retry loop is needed.
    """
    reservation = ApplicantIdReservation()
    db.add(reservation)
    db.flush()

    suffix = ID_SUFFIX_START + reservation.id - 1
    if suffix > ID_SUFFIX_END:
        raise IdentifierSpaceExhausted()
    return f"{settings.APPLICANT_ID_PREFIX}{suffix}"


def create(
    db: Session,
    *,
    full_name: str,
    mobile_number: str,
    email_address: str,
    post_code: str,
    password_hash: str,
    alternate_mobile_number: Optional[str] = None,
) -> Applicant:
    """Add a new applicant to the session with every sub-profile defaulted. The caller commits."""
    if identity_taken(db, mobile_number, email_address):
        raise DuplicateIdentity()

    applicant = Applicant(
        applicant_id=generate_unique_applicant_id(db),
        full_name=full_name.strip(),
        mobile_number=mobile_number,
        alternate_mobile_number=alternate_mobile_number or None,
        email_address=normalize_email(email_address),
        post_code=post_code,
        password_hash=password_hash,
    )
    db.add(applicant)
    db.flush()
    logger.info(f"Applicant {applicant.applicant_id} created for {applicant.email_address}")
    return applicant
