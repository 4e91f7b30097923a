"""Application configuration"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from ..domain.enums import AuthMode


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "TuneDrop"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Music demo submission and review platform"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Identity provider
    AUTH_MODE: AuthMode = AuthMode.PROVIDER
    DEV_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    IDENTITY_PROVIDER_PROJECT_ID: Optional[str] = None
    IDENTITY_PROVIDER_JWKS_URL: str = (
        "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"
    )
    IDENTITY_PROVIDER_ISSUER: Optional[str] = None  # defaults to securetoken issuer of the project
    JWKS_CACHE_SECONDS: int = 3600

    # Database
    DATABASE_URL: str

    # Redis / Celery
    REDIS_URL: str = "redis://localhost:6379"
    NOTIFICATION_QUEUE: str = "background"  # 'background' or 'celery'

    # Primary email provider (SendGrid)
    SENDGRID_API_KEY: Optional[str] = None
    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"

    # Fallback SMTP relay
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    FROM_EMAIL: str = "submissions@tunedrop.com"
    FROM_NAME: str = "TuneDrop"
    TEST_EMAIL: str = "test@example.com"
    EMAIL_ARCHIVE_DIR: str = "emails"

    # MinIO File Storage
    MINIO_ENDPOINT: str = "localhost:9000"
    MINIO_ACCESS_KEY: str = "minioadmin"
    MINIO_SECRET_KEY: str = "minioadmin"
    MINIO_BUCKET_NAME: str = "tracks"
    MINIO_SECURE: bool = False  # Use HTTPS
    PRESIGNED_URL_EXPIRE_SECONDS: int = 7 * 24 * 3600

    # CORS
    ALLOWED_HOSTS: list[str] = ["http://localhost:3000"]

    # Application URLs
    FRONTEND_URL: str = "http://localhost:3000"

    # Track uploads
    MAX_TRACK_SIZE: int = 50 * 1024 * 1024  # 50MB
    ALLOWED_TRACK_EXTENSIONS: list[str] = [".mp3", ".wav", ".flac", ".m4a"]
    UPLOAD_CHUNK_SIZE: int = 1024 * 1024
    UPLOAD_IDLE_TIMEOUT_SECONDS: float = 30.0

    # Review workflow
    LOCK_REVIEWED_SUBMISSIONS: bool = False

    # Development
    DEBUG: bool = False
    TESTING: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    @property
    def identity_provider_issuer(self) -> Optional[str]:
        if self.IDENTITY_PROVIDER_ISSUER:
            return self.IDENTITY_PROVIDER_ISSUER
        if self.IDENTITY_PROVIDER_PROJECT_ID:
            return f"https://securetoken.google.com/{self.IDENTITY_PROVIDER_PROJECT_ID}"
        return None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
