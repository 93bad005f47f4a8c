# app/routes/admin.py
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session
import logging

from app.auth.dependencies import get_current_admin
from app.database import get_db
from app.schemas.sections import PaymentStatusUpdate
from app.services import identity_store, payment_review
from app.services.credentials import AdminCredential
from app.services.notification_outbox import deliver_pending

router = APIRouter(
    prefix="/admin",
    tags=["Admin Payment Review"]
)

logger = logging.getLogger(__name__)


@router.get("/users-payments")
async def list_users_with_payments(
    db: Session = Depends(get_db),
    admin: AdminCredential = Depends(get_current_admin),
):
    """Every applicant that has submitted a UTR, newest payment first."""
    users = [
        {
            "userId": applicant.applicant_id,
            "fullName": applicant.full_name,
            "emailAddress": applicant.email_address,
            "mobileNumber": applicant.mobile_number,
            "paymentDetails": applicant.payment_details(),
            "createdAt": applicant.created_at.isoformat() if applicant.created_at else None,
        }
        for applicant in payment_review.list_paid_applicants(db)
    ]
    return {"success": True, "users": users}


@router.put("/payment-status/{applicant_id}")
async def update_payment_status(
    applicant_id: str,
    payload: PaymentStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    admin: AdminCredential = Depends(get_current_admin),
):
    applicant = identity_store.get_or_404(db, applicant_id)
    applicant = payment_review.set_payment_status(db, applicant, payload.status, payload.admin_remarks)
    background_tasks.add_task(deliver_pending)

    logger.info(f"Admin {admin.login_id} set payment of {applicant_id} to {payload.status.value}")
    return {
        "success": True,
        "message": f"Payment status updated to {payload.status.value}",
        "paymentDetails": applicant.payment_details(),
        "trackingStage": applicant.payment_status,
    }
