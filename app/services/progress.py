# app/services/progress.py
"""
Step progression for the registration wizard.

The wizard has four steps: candidate, qualification, documents and payment.
A step is unlocked only when every step before it is complete, and the
completion of each step is derived from what is actually stored in the
applicant's sub-profiles, never from a flag the client sends.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional

from app.models.applicant import Applicant, DocumentKind, PaymentStatus

# Any one of these uploads counts as the documents step being done
KEY_DOCUMENTS = (
    DocumentKind.passport_photo,
    DocumentKind.signature,
    DocumentKind.class10_marksheet,
)


class Step(str, Enum):
    candidate = "candidate"
    qualification = "qualification"
    documents = "documents"
    payment = "payment"


STEP_ROUTES = {
    Step.candidate: "/dashboard/candidate-details",
    Step.qualification: "/dashboard/qualification-details",
    Step.documents: "/dashboard/document-details",
    Step.payment: "/dashboard/payment-details",
}
TRACKING_ROUTE = "/dashboard/tracking"
ADMIN_ROUTE = "/admin"


def is_populated(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, Mapping):
        return any(is_populated(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(is_populated(v) for v in value)
    return True


@dataclass
class Progress:
    step: Optional[Step]
    completed: List[Step] = field(default_factory=list)
    payment_status: str = PaymentStatus.pending.value
    is_admin: bool = False

    def is_complete(self, step: Step) -> bool:
        return step in self.completed

    @property
    def current_route(self) -> str:
        if self.is_admin:
            return ADMIN_ROUTE
        if self.is_complete(Step.payment):
            return TRACKING_ROUTE
        return STEP_ROUTES[self.step]

    def flags(self) -> dict:
        return {
            "candidateCompleted": self.is_complete(Step.candidate),
            "qualificationCompleted": self.is_complete(Step.qualification),
            "documentCompleted": self.is_complete(Step.documents),
            "paymentCompleted": self.is_complete(Step.payment),
            "paymentStatus": self.payment_status,
        }

    def to_dict(self) -> dict:
        return {
            "step": self.step.value if self.step else None,
            "completedSteps": [s.value for s in self.completed],
            "progress": self.flags(),
            "currentRoute": self.current_route,
        }


def candidate_complete(personal_details: Optional[Mapping]) -> bool:
    return is_populated(personal_details)


def qualification_complete(qualification_details: Optional[Mapping]) -> bool:
    return is_populated(qualification_details)


def documents_complete(document_details: Optional[Mapping]) -> bool:
    document_details = document_details or {}
    return any(is_populated(document_details.get(kind.value)) for kind in KEY_DOCUMENTS)


def payment_complete(utr_number: Optional[str]) -> bool:
    return is_populated(utr_number)


def compute_progress(
    personal_details: Optional[Mapping],
    qualification_details: Optional[Mapping],
    document_details: Optional[Mapping],
    utr_number: Optional[str],
    payment_status: str = PaymentStatus.pending.value,
) -> Progress:
    completed: List[Step] = []

    if not candidate_complete(personal_details):
        return Progress(step=Step.candidate, completed=completed, payment_status=payment_status)
    completed.append(Step.candidate)

    if not qualification_complete(qualification_details):
        return Progress(step=Step.qualification, completed=completed, payment_status=payment_status)
    completed.append(Step.qualification)

    if not documents_complete(document_details):
        return Progress(step=Step.documents, completed=completed, payment_status=payment_status)
    completed.append(Step.documents)

    if payment_complete(utr_number):
        completed.append(Step.payment)

    return Progress(step=Step.payment, completed=completed, payment_status=payment_status)


def progress_for_applicant(applicant: Applicant) -> Progress:
    return compute_progress(
        applicant.personal_details,
        applicant.qualification_details,
        applicant.document_details,
        applicant.utr_number,
        applicant.payment_status,
    )


def progress_for_admin() -> Progress:
    """The administrator has no wizard: neutral step, nothing unlocked."""
    return Progress(step=None, completed=[], is_admin=True)
