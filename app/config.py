from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
import os

class Settings(BaseSettings):
    # === DATABASE ===
    DATABASE_URL: str = Field(default=os.environ.get("DATABASE_URL", "sqlite:///./portal.db"), description="Identity store connection string")

    # === JWT AUTH ===
    SECRET_KEY: str = Field(default=os.environ.get("SECRET_KEY", "change-me"), description="Secret key for JWT token signing")
    ALGORITHM: str = Field(default=os.environ.get("ALGORITHM", "HS256"), description="JWT algorithm")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 1440)), description="JWT token expiration time in minutes")

    # === ADMINISTRATOR ===
    ADMIN_LOGIN_ID: str = Field(default=os.environ.get("ADMIN_LOGIN_ID", "admin"), description="Login id of the single administrator")
    ADMIN_PASSWORD: str = Field(default=os.environ.get("ADMIN_PASSWORD", ""), description="Administrator password, hashed at startup")
    ADMIN_FULL_NAME: str = Field(default=os.environ.get("ADMIN_FULL_NAME", "System Administrator"), description="Administrator display name")
    ADMIN_EMAIL: str = Field(default=os.environ.get("ADMIN_EMAIL", "admin@example.com"), description="Administrator contact address")

    # === APPLICANTS ===
    APPLICANT_ID_PREFIX: str = Field(default=os.environ.get("APPLICANT_ID_PREFIX", "IOCL"), description="Prefix of generated applicant ids")
    OTP_EXPIRE_MINUTES: int = Field(default=int(os.environ.get("OTP_EXPIRE_MINUTES", 10)), description="OTP validity window")
    TEMP_PASSWORD_LENGTH: int = Field(default=int(os.environ.get("TEMP_PASSWORD_LENGTH", 8)), description="Length of generated temporary passwords")

    # === EMAIL ===
    EMAIL_HOST: str = Field(default=os.environ.get("EMAIL_HOST", ""), description="SMTP host")
    EMAIL_PORT: int = Field(default=int(os.environ.get("EMAIL_PORT", 587)), description="SMTP port")
    EMAIL_HOST_USER: str = Field(default=os.environ.get("EMAIL_HOST_USER", ""), description="SMTP username")
    EMAIL_HOST_PASSWORD: str = Field(default=os.environ.get("EMAIL_HOST_PASSWORD", ""), description="SMTP password")
    EMAIL_FROM: str = Field(default=os.environ.get("EMAIL_FROM", "noreply@example.com"), description="Email sender address")
    EMAIL_FROM_NAME: str = Field(default=os.environ.get("EMAIL_FROM_NAME", "IOCL Recruitment"), description="Email sender display name")
    MAIL_SUPPRESS_SEND: bool = Field(default=os.environ.get("MAIL_SUPPRESS_SEND", "False").lower() == "true", description="Build messages without sending them")

    # === NOTIFICATION OUTBOX ===
    NOTIFICATION_MAX_ATTEMPTS: int = Field(default=int(os.environ.get("NOTIFICATION_MAX_ATTEMPTS", 5)), description="Delivery attempts before an email is marked failed")
    NOTIFICATION_POLL_SECONDS: int = Field(default=int(os.environ.get("NOTIFICATION_POLL_SECONDS", 60)), description="Outbox dispatcher interval")
    NOTIFICATION_DISPATCHER_ENABLED: bool = Field(default=os.environ.get("NOTIFICATION_DISPATCHER_ENABLED", "True").lower() == "true", description="Run the outbox dispatcher on startup")

    # === PUBLIC URLS / UPLOADS ===
    CLIENT_URL: str = Field(default=os.environ.get("CLIENT_URL", "http://localhost:5173"), description="Front end base URL used in emailed links")
    PUBLIC_BASE_URL: str = Field(default=os.environ.get("PUBLIC_BASE_URL", "http://localhost:8000"), description="Base URL of this API, used for blob URLs")
    UPLOAD_DIR: str = Field(default=os.environ.get("UPLOAD_DIR", "static/uploads"), description="Root directory of the blob store")
    MAX_REQUEST_BODY_BYTES: int = Field(default=int(os.environ.get("MAX_REQUEST_BODY_BYTES", 50 * 1024 * 1024)), description="Largest accepted request body")

    # === HTTP ===
    API_PREFIX: str = Field(default=os.environ.get("API_PREFIX", "/api/auth"), description="Mount point of the portal routes")
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"], description="Allowed front end origins")

    # === DEBUG MODE ===
    DEBUG: bool = Field(default=os.environ.get("DEBUG", "False").lower() == "true", description="Debug mode")

    class Config:
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
