from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pathlib import Path
from app.config import settings
from app.exceptions import NotificationFailed
import logging

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parents[2] / "templates" / "email"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


# Two configs: one for TLS (587), one for SSL (465)
def _connection_config(use_ssl: bool) -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.EMAIL_HOST_USER,
        MAIL_PASSWORD=settings.EMAIL_HOST_PASSWORD,
        MAIL_FROM=settings.EMAIL_FROM,
        MAIL_FROM_NAME=settings.EMAIL_FROM_NAME,
        MAIL_PORT=465 if use_ssl else settings.EMAIL_PORT,
        MAIL_SERVER=settings.EMAIL_HOST,
        MAIL_STARTTLS=not use_ssl,
        MAIL_SSL_TLS=use_ssl,
        USE_CREDENTIALS=bool(settings.EMAIL_HOST_USER),
        VALIDATE_CERTS=True,
        SUPPRESS_SEND=1 if settings.MAIL_SUPPRESS_SEND else 0,
    )


def render_template(template: str, context: dict) -> str:
    return env.get_template(template).render(client_url=settings.CLIENT_URL, **context)


# 🔁 Central retry wrapper
async def send_email(to_email: str, subject: str, html: str) -> None:
    """Try sending via TLS first (587), then SSL (465); raise NotificationFailed if both fail"""
    message = MessageSchema(
        subject=subject,
        recipients=[to_email],
        body=html,
        subtype=MessageType.html,
    )

    try:
        await FastMail(_connection_config(use_ssl=False)).send_message(message)
        logger.info(f"{subject} email sent to {to_email} via port {settings.EMAIL_PORT}")
        return
    except Exception as e:
        logger.warning(f"Failed to send {subject} via port {settings.EMAIL_PORT}: {str(e)}")

    try:
        await FastMail(_connection_config(use_ssl=True)).send_message(message)
        logger.info(f"{subject} email sent to {to_email} via port 465")
    except Exception as e2:
        logger.error(f"Failed to send {subject} email via both ports: {str(e2)}")
        raise NotificationFailed(f"Email could not be sent to {to_email}") from e2
