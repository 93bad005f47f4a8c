# app/routes/sections.py
from typing import Dict, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.schemas.sections import CandidateDetails, DocumentFile, PaymentSubmission, QualificationDetails
from app.services import documents, identity_store, payment_review, sections
from app.services.blob_store import BlobStore, get_blob_store
from app.services.credentials import is_admin_identifier
from app.services.progress import progress_for_admin, progress_for_applicant

router = APIRouter(tags=["Application Sections"])
logger = logging.getLogger(__name__)


# -------------------- CANDIDATE --------------------
@router.get("/candidate-details/{applicant_id}")
async def get_candidate_details(applicant_id: str, db: Session = Depends(get_db)):
    applicant = sections.load_applicant(db, applicant_id)
    return {
        "success": True,
        "candidateDetails": sections.candidate_details(applicant),
        "candidateDetailsStatus": sections.candidate_status(applicant),
    }


@router.put("/candidate-details/{applicant_id}")
async def save_candidate_details(applicant_id: str, payload: CandidateDetails, db: Session = Depends(get_db)):
    applicant = sections.load_applicant(db, applicant_id)
    applicant = sections.save_candidate_details(db, applicant, payload)
    return {
        "success": True,
        "message": "Candidate details saved successfully",
        "candidateDetails": sections.candidate_details(applicant),
        "candidateDetailsStatus": sections.candidate_status(applicant),
    }


# -------------------- QUALIFICATION --------------------
@router.get("/qualification-details/{applicant_id}")
async def get_qualification_details(applicant_id: str, db: Session = Depends(get_db)):
    applicant = sections.load_applicant(db, applicant_id)
    return {
        "success": True,
        "qualificationDetails": applicant.qualification_details or {},
        "qualificationDetailsStatus": sections.qualification_status(applicant),
    }


@router.put("/qualification-details/{applicant_id}")
async def save_qualification_details(applicant_id: str, payload: QualificationDetails, db: Session = Depends(get_db)):
    applicant = sections.load_applicant(db, applicant_id)
    applicant = sections.save_qualification_details(db, applicant, payload)
    return {
        "success": True,
        "message": "Qualification details saved successfully",
        "qualificationDetails": applicant.qualification_details,
        "qualificationDetailsStatus": sections.qualification_status(applicant),
    }


# -------------------- DOCUMENTS --------------------
@router.get("/document-details/{applicant_id}")
async def get_document_details(applicant_id: str, db: Session = Depends(get_db)):
    applicant = sections.load_applicant(db, applicant_id)
    return {
        "success": True,
        "documentDetails": sections.document_details(applicant),
        "documentDetailsStatus": sections.document_status(applicant),
    }


@router.put("/document-details/{applicant_id}")
async def save_document_details(
    applicant_id: str,
    files: Dict[str, Optional[DocumentFile]] = Body(...),
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Body maps document kind (e.g. ``passportPhoto``) to ``{data, name, type}`` with base64 data."""
    applicant = sections.load_applicant(db, applicant_id)
    documents.upload_documents(db, applicant, files, blob_store)
    return {
        "success": True,
        "message": "Documents uploaded successfully",
        "documentDetails": sections.document_details(applicant),
        "documentDetailsStatus": sections.document_status(applicant),
    }


@router.delete("/document-details/{applicant_id}")
async def delete_document_details(
    applicant_id: str,
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
):
    applicant = sections.load_applicant(db, applicant_id)
    documents.delete_all_documents(db, applicant, blob_store)
    return {"success": True, "message": "All documents deleted successfully"}


# -------------------- PAYMENT --------------------
@router.get("/payment-details/{applicant_id}")
async def get_payment_details(applicant_id: str, db: Session = Depends(get_db)):
    applicant = sections.load_applicant(db, applicant_id)
    return {
        "success": True,
        "paymentDetails": applicant.payment_details(),
        "paymentDetailsStatus": sections.payment_status(applicant),
    }


@router.put("/payment-details/{applicant_id}")
async def save_payment_details(applicant_id: str, payload: PaymentSubmission, db: Session = Depends(get_db)):
    applicant = sections.load_applicant(db, applicant_id)
    applicant = payment_review.submit_utr(db, applicant, payload.utr_number)
    return {
        "success": True,
        "message": "Payment details saved successfully",
        "paymentDetails": applicant.payment_details(),
        "paymentDetailsStatus": sections.payment_status(applicant),
    }


# -------------------- PROGRESS --------------------
@router.get("/user-progress/{applicant_id}")
async def get_user_progress(applicant_id: str, db: Session = Depends(get_db)):
    if is_admin_identifier(applicant_id):
        progress = progress_for_admin()
    else:
        progress = progress_for_applicant(identity_store.get_or_404(db, applicant_id))
    return {"success": True, **progress.to_dict()}
