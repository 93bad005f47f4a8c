from app.services.progress import (
    Step,
    compute_progress,
    is_populated,
    progress_for_admin,
)

PERSONAL = {"fatherName": "Mohan Lal"}
QUALIFICATION = {"matriculation": {"boardName": "JAC"}}
DOCUMENTS = {"passportPhoto": None, "signature": "http://blob/sig.png"}


def test_empty_applicant_starts_at_candidate():
    progress = compute_progress({}, {}, {}, None)

    assert progress.step == Step.candidate
    assert progress.completed == []
    assert progress.current_route == "/dashboard/candidate-details"


def test_steps_unlock_in_order():
    assert compute_progress(PERSONAL, {}, {}, None).step == Step.qualification
    assert compute_progress(PERSONAL, QUALIFICATION, {}, None).step == Step.documents

    at_payment = compute_progress(PERSONAL, QUALIFICATION, DOCUMENTS, None)
    assert at_payment.step == Step.payment
    assert at_payment.completed == [Step.candidate, Step.qualification, Step.documents]
    assert at_payment.current_route == "/dashboard/payment-details"


def test_paid_applicant_is_sent_to_tracking():
    progress = compute_progress(PERSONAL, QUALIFICATION, DOCUMENTS, "UTR42", "processing")

    assert progress.step == Step.payment
    assert progress.is_complete(Step.payment)
    assert progress.current_route == "/dashboard/tracking"
    assert progress.flags() == {
        "candidateCompleted": True,
        "qualificationCompleted": True,
        "documentCompleted": True,
        "paymentCompleted": True,
        "paymentStatus": "processing",
    }


def test_later_sections_do_not_skip_earlier_ones():
    # Qualification and payment filled but candidate empty
    progress = compute_progress({}, QUALIFICATION, DOCUMENTS, "UTR42")

    assert progress.step == Step.candidate
    assert progress.completed == []


def test_only_key_documents_count():
    progress = compute_progress(PERSONAL, QUALIFICATION, {"itiMarksheet": "http://blob/iti.pdf"}, None)

    assert progress.step == Step.documents


def test_blank_values_are_not_populated():
    assert not is_populated(None)
    assert not is_populated("   ")
    assert not is_populated({})
    assert not is_populated({"boardName": "", "nested": {"x": None}})
    assert is_populated({"nested": {"x": "value"}})
    assert is_populated(0)


def test_admin_progress_is_neutral():
    progress = progress_for_admin()

    assert progress.step is None
    assert progress.completed == []
    assert progress.to_dict()["currentRoute"] == "/admin"
