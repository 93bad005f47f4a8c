# app/auth/dependencies.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import logging

from app.services.credentials import get_admin_credential, AdminCredential
from app.utils.token import decode_access_token, ROLE_ADMIN

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()


def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> AdminCredential:
    token_data = decode_access_token(credentials.credentials)
    admin = get_admin_credential()

    if token_data is None or token_data.role != ROLE_ADMIN or token_data.subject != admin.login_id:
        logger.warning("❌ Rejected admin request with invalid token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return admin
