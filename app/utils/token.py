# app/utils/token.py
from datetime import datetime, timedelta
from typing import Optional
from jose import jwt, JWTError
from pydantic import BaseModel
import logging

from app.config import settings

logger = logging.getLogger(__name__)

ROLE_APPLICANT = "applicant"
ROLE_ADMIN = "admin"


class TokenData(BaseModel):
    subject: str
    role: str


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT token with expiration
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "iat": datetime.utcnow()})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def issue_token(subject: str, role: str) -> str:
    return create_access_token({"sub": subject, "role": role})


def decode_access_token(token: str) -> Optional[TokenData]:
    """
    Decode and validate a JWT, returning None when it is invalid or expired
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {str(e)}")
        return None

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or not role:
        return None
    return TokenData(subject=subject, role=role)
