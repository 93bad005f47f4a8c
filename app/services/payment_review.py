# app/services/payment_review.py
"""
Payment status lifecycle.

    pending    -> processing          applicant submits a UTR
    processing -> processing          applicant corrects the UTR before review
    processing -> verified|cancelled  admin decision
    cancelled  -> processing          applicant resubmits after a rejection

Every change goes through :func:`transition`; anything outside the table
raises InvalidTransition.
"""
from datetime import datetime
from typing import List
import logging

from sqlalchemy.orm import Session

from app.exceptions import InvalidTransition
from app.models.applicant import Applicant, PaymentStatus
from app.services import notification_outbox

logger = logging.getLogger(__name__)

TRANSITIONS = {
    PaymentStatus.pending: {PaymentStatus.processing},
    PaymentStatus.processing: {PaymentStatus.processing, PaymentStatus.verified, PaymentStatus.cancelled},
    PaymentStatus.cancelled: {PaymentStatus.processing},
    PaymentStatus.verified: set(),
}

# Statuses an admin may set; the others follow from applicant actions
ADMIN_DECISIONS = {PaymentStatus.verified, PaymentStatus.cancelled}


def can_transition(current: PaymentStatus, requested: PaymentStatus) -> bool:
    return requested in TRANSITIONS[current]


def transition(applicant: Applicant, requested: PaymentStatus) -> PaymentStatus:
    current = PaymentStatus(applicant.payment_status)
    if not can_transition(current, requested):
        raise InvalidTransition(current.value, requested.value)
    applicant.payment_status = requested.value
    return requested


# -------------------- APPLICANT SIDE --------------------
def submit_utr(db: Session, applicant: Applicant, utr_number: str) -> Applicant:
    transition(applicant, PaymentStatus.processing)
    applicant.utr_number = utr_number.strip()
    applicant.payment_date = datetime.utcnow()
    applicant.admin_remarks = None
    applicant.admin_verified_at = None
    db.commit()
    db.refresh(applicant)
    logger.info(f"💳 UTR {applicant.utr_number} submitted by {applicant.applicant_id}")
    return applicant


# -------------------- ADMIN SIDE --------------------
def list_paid_applicants(db: Session) -> List[Applicant]:
    return (
        db.query(Applicant)
        .filter(Applicant.utr_number.isnot(None), Applicant.utr_number != "")
        .order_by(Applicant.payment_date.desc(), Applicant.id.desc())
        .all()
    )


def set_payment_status(db: Session, applicant: Applicant, status: PaymentStatus, remarks: str = None) -> Applicant:
    """Record the admin decision and queue the matching notification in the same commit."""
    if status not in ADMIN_DECISIONS:
        raise InvalidTransition(applicant.payment_status, status.value)

    transition(applicant, status)
    applicant.admin_remarks = remarks or None
    applicant.admin_verified_at = datetime.utcnow()

    if status == PaymentStatus.verified:
        notification_outbox.enqueue(
            db,
            recipient=applicant.email_address,
            subject="Payment Verified Successfully - Registration Complete - IOCL Recruitment",
            template="payment_verified.html",
            context={
                "full_name": applicant.full_name,
                "utr_number": applicant.utr_number,
                "verified_on": applicant.admin_verified_at.strftime("%d/%m/%Y"),
            },
        )
    elif status == PaymentStatus.cancelled:
        notification_outbox.enqueue(
            db,
            recipient=applicant.email_address,
            subject="Payment Verification Failed - Action Required - IOCL Recruitment",
            template="payment_cancelled.html",
            context={
                "full_name": applicant.full_name,
                "utr_number": applicant.utr_number,
                "remarks": applicant.admin_remarks,
            },
        )

    db.commit()
    db.refresh(applicant)
    logger.info(f"🧾 Payment of {applicant.applicant_id} marked {status.value}")
    return applicant
