# app/routes/health.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
import datetime
import logging
from fastapi.responses import JSONResponse

from app.database import get_db
from app.models.notification import NotificationOutbox, NotificationStatus
from app.services.notification_outbox import dispatcher

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health Check"])


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check with database connectivity and outbox backlog
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.datetime.now().isoformat(),
        "service": "IOCL Recruitment Portal API",
        "version": "1.0.0",
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["database"] = {
            "status": "connected",
            "dialect": db.bind.dialect.name if db.bind is not None else "unknown",
        }
    except Exception as e:
        health_status["database"] = {
            "status": "disconnected",
            "error": str(e)
        }
        health_status["status"] = "degraded"

    if health_status["database"]["status"] == "connected":
        health_status["notifications"] = {
            "pending": db.query(NotificationOutbox).filter(NotificationOutbox.status == NotificationStatus.pending.value).count(),
            "sending": db.query(NotificationOutbox).filter(NotificationOutbox.status == NotificationStatus.sending.value).count(),
            "failed": db.query(NotificationOutbox).filter(NotificationOutbox.status == NotificationStatus.failed.value).count(),
            "dispatcher_running": dispatcher.is_running,
        }

    logger.info(f"Health check completed: {health_status['status']}")

    return JSONResponse(
        content=health_status,
        headers={
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "Pragma": "no-cache",
            "Expires": "0",
            "X-Health-Check": "true"
        }
    )
