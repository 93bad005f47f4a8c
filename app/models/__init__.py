# app/models/__init__.py

from .applicant import Applicant, ApplicantIdReservation, PaymentStatus, DocumentKind
from .notification import NotificationOutbox, NotificationStatus

__all__ = [
    "Applicant",
    "ApplicantIdReservation",
    "PaymentStatus",
    "DocumentKind",
    "NotificationOutbox",
    "NotificationStatus",
]
