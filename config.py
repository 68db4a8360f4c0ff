"""
Global Configuration for the IEP Harmony File Processing Server
"""

from typing import List

from pydantic_settings import BaseSettings

SERVICE_NAME = "IEP Harmony File Processing Server"

SUPPORTED_TYPES = [".docx", ".pdf"]

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "POST /upload",
    "POST /analyze",
]


class Settings(BaseSettings):
    """
    Global Base settings for the file processing server
    """
    # App Configuration
    APP_ENV: str = "development"
    APP_HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    # Client Hosts
    CORS_ORIGINS: List[str] = ["*"]

    # Max upload size
    MAX_FILE_SIZE: int = 10 * 1024 * 1024       # 10 MB

    class Config:
        env_file = ".env"

settings = Settings()
