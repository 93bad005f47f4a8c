# app/services/notification_outbox.py
"""
Transactional outbox for outbound email.

Request handlers call :func:`enqueue` inside the same session that persists
their state change, so the intent to notify is committed together with it.
Delivery happens afterwards, either as a FastAPI background task right after
the response or from the :class:`NotificationDispatcher` loop, which retries
rows that are still pending.
"""
import asyncio
import logging
import weakref
from datetime import datetime, timezone
from typing import Callable, Optional

from jinja2 import TemplateError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import SessionLocal
from app.exceptions import NotificationFailed
from app.models.notification import NotificationOutbox, NotificationStatus
from app.services import email_service

logger = logging.getLogger(__name__)

_delivery_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = weakref.WeakKeyDictionary()


def enqueue(db: Session, recipient: str, subject: str, template: str, context: dict) -> NotificationOutbox:
    """Add a pending email to the session. The caller commits."""
    record = NotificationOutbox(
        recipient=recipient,
        subject=subject,
        template=template,
        context=context,
        status=NotificationStatus.pending.value,
        attempts=0,
    )
    db.add(record)
    return record


def claim(db: Session, record: NotificationOutbox) -> bool:
    """Move a pending row to ``sending``. Only one delivery pass can win the row."""
    claimed = (
        db.query(NotificationOutbox)
        .filter(
            NotificationOutbox.id == record.id,
            NotificationOutbox.status == NotificationStatus.pending.value,
        )
        .update({NotificationOutbox.status: NotificationStatus.sending.value}, synchronize_session=False)
    )
    db.commit()
    return claimed == 1


async def deliver(db: Session, record: NotificationOutbox) -> bool:
    if not claim(db, record):
        logger.debug(f"Notification {record.id} already claimed by another delivery pass")
        return False

    try:
        html = email_service.render_template(record.template, record.context or {})
        await email_service.send_email(record.recipient, record.subject, html)
    except (NotificationFailed, TemplateError) as e:
        record.attempts += 1
        record.last_error = e.message if isinstance(e, NotificationFailed) else f"Template error: {e}"
        if record.attempts >= settings.NOTIFICATION_MAX_ATTEMPTS:
            record.status = NotificationStatus.failed.value
            logger.error(f"❌ Giving up on notification {record.id} to {record.recipient} after {record.attempts} attempts")
        else:
            record.status = NotificationStatus.pending.value
            logger.warning(f"⚠️ Notification {record.id} to {record.recipient} failed (attempt {record.attempts}), will retry")
        db.commit()
        return False

    record.attempts += 1
    record.status = NotificationStatus.sent.value
    record.sent_at = datetime.now(timezone.utc)
    record.last_error = None
    db.commit()
    logger.info(f"📧 Notification {record.id} ({record.template}) delivered to {record.recipient}")
    return True


def _delivery_lock() -> asyncio.Lock:
    # asyncio locks belong to one event loop; keep one per running loop
    loop = asyncio.get_running_loop()
    lock = _delivery_locks.get(loop)
    if lock is None:
        lock = _delivery_locks[loop] = asyncio.Lock()
    return lock


async def deliver_pending(session_factory: Optional[Callable[[], Session]] = None, limit: int = 50) -> int:
    """Try every pending notification once. Returns how many were sent."""
    session_factory = session_factory or SessionLocal
    sent = 0
    async with _delivery_lock():
        db = session_factory()
        try:
            pending = (
                db.query(NotificationOutbox)
                .filter(NotificationOutbox.status == NotificationStatus.pending.value)
                .order_by(NotificationOutbox.id)
                .limit(limit)
                .all()
            )
            for record in pending:
                if await deliver(db, record):
                    sent += 1
        finally:
            db.close()
    return sent


class NotificationDispatcher:
    """Background loop that keeps retrying pending notifications."""

    def __init__(self, interval: Optional[int] = None):
        self.interval = interval or settings.NOTIFICATION_POLL_SECONDS
        self.task: Optional[asyncio.Task] = None
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def run(self):
        self._is_running = True
        logger.info(f"🚀 Notification dispatcher started (every {self.interval}s)")

        while self._is_running:
            try:
                sent = await deliver_pending()
                if sent:
                    logger.info(f"📨 Dispatcher delivered {sent} queued notification(s)")
                await asyncio.sleep(self.interval)
            except asyncio.CancelledError:
                logger.info("🛑 Notification dispatcher cancelled")
                break
            except Exception as e:
                logger.error(f"❌ Notification dispatcher loop error: {str(e)}")
                await asyncio.sleep(self.interval)

        self._is_running = False

    def start(self) -> bool:
        if not self._is_running:
            self.task = asyncio.create_task(self.run())
            return True
        return False

    async def stop(self):
        self._is_running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
        logger.info("🛑 Notification dispatcher stopped")


dispatcher = NotificationDispatcher()
