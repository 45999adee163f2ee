"""
Configuration management for Strategy Analyst API
Uses pydantic-settings for environment variable validation
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database (from environment; SQLite default only suits local runs)
    DATABASE_URL: str = "sqlite:///./analyst.db"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    API_RELOAD: bool = False
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Application
    APP_NAME: str = "Strategy Analyst"
    APP_VERSION: str = "0.1.0"

    # Redis & Celery
    REDIS_URL: str = "redis://localhost:6379/0"
    CELERY_TASK_ALWAYS_EAGER: bool = False  # Run processing inline (local development)
    PROCESSING_TASK_TIME_LIMIT: int = 900  # Background processing deadline in seconds

    # Authentication (bearer tokens issued by the external identity provider)
    AUTH_JWT_SECRET: str = ""  # Shared secret for HS256 tokens
    AUTH_JWT_ALGORITHMS: List[str] = ["HS256"]
    AUTH_JWKS_URL: str = ""  # Optional: verify RS256 tokens against a JWKS endpoint
    AUTH_AUDIENCE: str = ""
    AUTH_ISSUER: str = ""

    # Storage
    UPLOAD_DIR: str = "./uploads"
    MAX_UPLOAD_SIZE: int = 32 * 1024 * 1024  # 32MB
    ALLOWED_EXTENSIONS: List[str] = [".pdf", ".txt"]
    STORAGE_BACKEND: str = "local"  # "local" or "s3"

    # S3 Storage (if STORAGE_BACKEND="s3")
    S3_BUCKET_NAME: str = "strategy-analyst-documents"
    S3_ACCESS_KEY_ID: str = ""  # Optional: uses AWS credentials if empty
    S3_SECRET_ACCESS_KEY: str = ""  # Optional: uses AWS credentials if empty
    S3_REGION: str = "us-east-1"
    S3_ENDPOINT_URL: str = ""  # Optional: for MinIO, DigitalOcean Spaces, etc.

    # Processing
    CHUNK_SIZE: int = 1000  # Max characters per chunk

    # LLM Provider (LiteLLM format: provider/model)
    LLM_PROVIDER: str = "gemini"
    CHAT_MODEL: str = "gemini-1.5-flash"
    LLM_MODEL_STRING: str = ""  # Optional: override full model string (e.g., "openai/gpt-4o-mini")
    LLM_API_KEY: str = ""  # Empty disables the AI features
    LLM_API_BASE: str = ""  # Optional: custom API base URL
    LLM_TIMEOUT: int = 60  # Timeout in seconds for LLM requests

    # Chat answers
    CHAT_TEMPERATURE: float = 0.3
    CHAT_MAX_TOKENS: int = 2048

    # Document comparison
    COMPARE_TEMPERATURE: float = 0.4
    COMPARE_MAX_TOKENS: int = 3000
    COMPARE_MIN_DOCUMENTS: int = 2
    COMPARE_MAX_DOCUMENTS: int = 5
    COMPARE_MAX_CHUNKS_PER_DOCUMENT: int = 10

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_CHAT: str = "10/minute"
    RATE_LIMIT_UPLOAD: str = "20/hour"

    # Retry Logic
    RETRY_ENABLED: bool = True
    RETRY_MAX_ATTEMPTS: int = 3
    RETRY_EXPONENTIAL_BASE: int = 2

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
