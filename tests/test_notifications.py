import asyncio

from app.config import settings
from app.database import SessionLocal
from app.exceptions import NotificationFailed
from app.models.notification import NotificationOutbox, NotificationStatus
from app.services import email_service, notification_outbox


def _queue(db, **context):
    record = notification_outbox.enqueue(
        db,
        recipient="asha@example.com",
        subject="Payment Verified",
        template="payment_verified.html",
        context={"full_name": "Asha", "utr_number": "UTR1", "verified_on": "01/01/2024", **context},
    )
    db.commit()
    return record


def test_enqueue_does_not_commit(db):
    notification_outbox.enqueue(db, "a@example.com", "Subject", "otp.html", {"otp": "123456"})
    db.rollback()

    assert db.query(NotificationOutbox).count() == 0


def test_deliver_pending_sends_and_marks_sent(db, send_email):
    record = _queue(db)

    sent = asyncio.run(notification_outbox.deliver_pending(SessionLocal))

    assert sent == 1
    db.refresh(record)
    assert record.status == NotificationStatus.sent.value
    assert record.attempts == 1
    assert record.sent_at is not None
    to_email, subject, html = send_email.await_args.args
    assert to_email == "asha@example.com"
    assert "UTR1" in html


def test_failed_delivery_is_retried_then_given_up(db, send_email):
    send_email.side_effect = NotificationFailed("smtp down")
    record = _queue(db)

    for _ in range(settings.NOTIFICATION_MAX_ATTEMPTS - 1):
        assert asyncio.run(notification_outbox.deliver_pending(SessionLocal)) == 0
        db.refresh(record)
        assert record.status == NotificationStatus.pending.value
        assert record.last_error == "smtp down"

    asyncio.run(notification_outbox.deliver_pending(SessionLocal))
    db.refresh(record)
    assert record.status == NotificationStatus.failed.value
    assert record.attempts == settings.NOTIFICATION_MAX_ATTEMPTS

    # Failed rows are no longer picked up
    send_email.reset_mock()
    asyncio.run(notification_outbox.deliver_pending(SessionLocal))
    send_email.assert_not_awaited()


def test_retry_succeeds_after_transient_failure(db, send_email):
    send_email.side_effect = [NotificationFailed("timeout"), None]
    record = _queue(db)

    asyncio.run(notification_outbox.deliver_pending(SessionLocal))
    asyncio.run(notification_outbox.deliver_pending(SessionLocal))

    db.refresh(record)
    assert record.status == NotificationStatus.sent.value
    assert record.attempts == 2
    assert record.last_error is None


def test_overlapping_delivery_passes_send_once(db, send_email):
    async def slow_send(*args):
        await asyncio.sleep(0.05)

    send_email.side_effect = slow_send
    record = _queue(db)

    async def two_passes():
        return await asyncio.gather(
            notification_outbox.deliver_pending(SessionLocal),
            notification_outbox.deliver_pending(SessionLocal),
        )

    assert sorted(asyncio.run(two_passes())) == [0, 1]
    send_email.assert_awaited_once()
    db.refresh(record)
    assert record.status == NotificationStatus.sent.value
    assert record.attempts == 1


def test_row_claimed_elsewhere_is_not_sent(db, send_email):
    record = _queue(db)
    record.status = NotificationStatus.sending.value
    db.commit()

    assert asyncio.run(notification_outbox.deliver(db, record)) is False
    send_email.assert_not_awaited()
    db.refresh(record)
    assert record.status == NotificationStatus.sending.value
    assert record.attempts == 0


def test_template_error_counts_as_failed_attempt(db, send_email):
    broken = notification_outbox.enqueue(db, "a@example.com", "Broken", "missing.html", {})
    db.commit()
    record = _queue(db)

    sent = asyncio.run(notification_outbox.deliver_pending(SessionLocal))

    assert sent == 1
    db.refresh(broken)
    db.refresh(record)
    assert broken.status == NotificationStatus.pending.value
    assert broken.attempts == 1
    assert broken.last_error.startswith("Template error")
    assert record.status == NotificationStatus.sent.value
    send_email.assert_awaited_once()


def test_mail_failure_does_not_fail_the_request(client, db, send_email):
    send_email.side_effect = NotificationFailed("smtp down")

    response = client.post("/api/auth/register", json={
        "postCode": "JE-01",
        "fullName": "Mail Less",
        "mobileNumber": "9000011111",
        "emailAddress": "mailless@example.com",
    })

    assert response.status_code == 201
    record = db.query(NotificationOutbox).one()
    assert record.status == NotificationStatus.pending.value
    assert record.attempts == 1


def test_templates_render_with_context():
    html = email_service.render_template("otp.html", {
        "heading": "OTP Verification",
        "full_name": "Asha",
        "otp": "482913",
        "expires_minutes": 10,
    })

    assert "482913" in html
    assert "Asha" in html


def test_cancel_template_escapes_remarks():
    html = email_service.render_template("payment_cancelled.html", {
        "full_name": "Asha",
        "utr_number": "UTR1",
        "remarks": "<b>mismatch</b>",
    })

    assert "&lt;b&gt;mismatch&lt;/b&gt;" in html
