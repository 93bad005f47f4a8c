# app/services/sections.py
"""
Read and replace the candidate, qualification, document and payment
sub-profiles of an applicant. Each PUT overwrites the whole sub-profile;
the "completed" flags in the responses are derived from the stored data.
"""
from datetime import date
from typing import Optional
import logging

from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from app.exceptions import AdminNotAllowed
from app.models.applicant import Applicant, CANDIDATE_SECTIONS, empty_documents
from app.schemas.sections import CandidateDetails, QualificationDetails
from app.services import identity_store, progress
from app.services.credentials import is_admin_identifier

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = (
    "addressLine1",
    "addressLine2",
    "country",
    "state",
    "cityDistrict",
    "postOffice",
    "pincode",
    "policeStation",
    "nearestRailwayStation",
)


def load_applicant(db: Session, applicant_id: str) -> Applicant:
    """Fetch an applicant for a section endpoint; the administrator has no sections."""
    if is_admin_identifier(applicant_id):
        raise AdminNotAllowed()
    return identity_store.get_or_404(db, applicant_id)


def calculate_age(date_of_birth: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    had_birthday = (today.month, today.day) >= (date_of_birth.month, date_of_birth.day)
    return today.year - date_of_birth.year - (0 if had_birthday else 1)


# -------------------- CANDIDATE --------------------
def candidate_details(applicant: Applicant) -> dict:
    return {
        "postCode": applicant.post_code,
        "personalDetails": applicant.personal_details,
        "benchmarkDisability": applicant.benchmark_disability,
        "exServicemen": applicant.ex_servicemen,
        "employeeDetails": applicant.employee_details,
        "wclDetails": applicant.wcl_details,
        "correspondenceAddress": applicant.correspondence_address,
        "permanentAddress": applicant.permanent_address,
        "dobDetails": applicant.dob_details,
    }


def candidate_status(applicant: Applicant) -> dict:
    return {"allSectionsCompleted": progress.candidate_complete(applicant.personal_details)}


def save_candidate_details(db: Session, applicant: Applicant, payload: CandidateDetails) -> Applicant:
    data = payload.stored()

    permanent = data["permanentAddress"]
    if permanent.get("sameAsCorrespondence"):
        correspondence = data["correspondenceAddress"]
        permanent = {"sameAsCorrespondence": True}
        permanent.update({k: correspondence[k] for k in ADDRESS_FIELDS if k in correspondence})
        data["permanentAddress"] = permanent

    dob = payload.dob_details.date_of_birth
    if dob is not None:
        data["dobDetails"]["calculatedAge"] = calculate_age(dob)

    for column in CANDIDATE_SECTIONS:
        setattr(applicant, column, data[to_camel(column)])

    db.commit()
    db.refresh(applicant)
    logger.info(f"Candidate details saved for {applicant.applicant_id}")
    return applicant


# -------------------- QUALIFICATION --------------------
def qualification_status(applicant: Applicant) -> dict:
    return {"allQualificationSectionsCompleted": progress.qualification_complete(applicant.qualification_details)}


def save_qualification_details(db: Session, applicant: Applicant, payload: QualificationDetails) -> Applicant:
    applicant.qualification_details = payload.stored()
    db.commit()
    db.refresh(applicant)
    logger.info(f"Qualification details saved for {applicant.applicant_id}")
    return applicant


# -------------------- DOCUMENTS --------------------
def document_details(applicant: Applicant) -> dict:
    return {**empty_documents(), **(applicant.document_details or {})}


def document_status(applicant: Applicant) -> dict:
    return {"documentsUploaded": progress.documents_complete(applicant.document_details)}


# -------------------- PAYMENT --------------------
def payment_status(applicant: Applicant) -> dict:
    return {"paymentCompleted": progress.payment_complete(applicant.utr_number)}
