from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from sqlalchemy.ext.mutable import MutableDict
from app.database import Base
from enum import Enum


class PaymentStatus(str, Enum):
    pending = "pending"
    processing = "processing"
    verified = "verified"
    cancelled = "cancelled"


class DocumentKind(str, Enum):
    passport_photo = "passportPhoto"
    signature = "signature"
    class10_marksheet = "class10Marksheet"
    class12_marksheet = "class12Marksheet"
    iti_marksheet = "itiMarksheet"
    cast_certificate = "castCertificate"


def empty_documents() -> dict:
    return {kind.value: None for kind in DocumentKind}


# Candidate sub-profile, one JSON column per wizard section
CANDIDATE_SECTIONS = (
    "personal_details",
    "benchmark_disability",
    "ex_servicemen",
    "employee_details",
    "wcl_details",
    "correspondence_address",
    "permanent_address",
    "dob_details",
)


def _json_column(default):
    return Column(MutableDict.as_mutable(JSON), nullable=False, default=default)


class Applicant(Base):
    __tablename__ = "applicants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    applicant_id = Column(String(20), unique=True, nullable=False, index=True)

    # SECTION A: Identity
    post_code = Column(String(50), nullable=False)
    full_name = Column(String(100), nullable=False)
    mobile_number = Column(String(20), unique=True, nullable=False, index=True)
    alternate_mobile_number = Column(String(20), nullable=True)
    email_address = Column(String(255), unique=True, nullable=False, index=True)

    # SECTION B: Credentials
    password_hash = Column(String(255), nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False)
    otp_code = Column(String(6), nullable=True)
    otp_expires_at = Column(DateTime, nullable=True)

    # SECTION C: Candidate details
    personal_details = _json_column(dict)
    benchmark_disability = _json_column(lambda: {"isDisabled": False})
    ex_servicemen = _json_column(lambda: {"isExServicemen": False})
    employee_details = _json_column(dict)
    wcl_details = _json_column(dict)
    correspondence_address = _json_column(dict)
    permanent_address = _json_column(lambda: {"sameAsCorrespondence": False})
    dob_details = _json_column(dict)

    # SECTION D: Qualification details
    qualification_details = _json_column(dict)

    # SECTION E: Documents (blob store URLs)
    document_details = _json_column(empty_documents)

    # SECTION F: Payment
    utr_number = Column(String(50), nullable=True)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.pending.value)
    payment_date = Column(DateTime, nullable=True)
    admin_verified_at = Column(DateTime, nullable=True)
    admin_remarks = Column(String(500), nullable=True)

    # SECTION G: Meta
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Applicant {self.applicant_id}: {self.email_address}>"

    def payment_details(self) -> dict:
        return {
            "utrNumber": self.utr_number,
            "paymentStatus": self.payment_status,
            "paymentDate": self.payment_date.isoformat() if self.payment_date else None,
            "adminVerifiedAt": self.admin_verified_at.isoformat() if self.admin_verified_at else None,
            "adminRemarks": self.admin_remarks,
        }


class ApplicantIdReservation(Base):
    """One row per allocated applicant id; the row number is the id suffix."""
    __tablename__ = "applicant_id_reservations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    reserved_at = Column(DateTime(timezone=True), server_default=func.now())
