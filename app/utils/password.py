import secrets
import string

from app.config import settings

ALPHABET = string.ascii_letters + string.digits


def generate_password(length: int = None) -> str:
    """Random alphanumeric temporary password."""
    length = length or settings.TEMP_PASSWORD_LENGTH
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
