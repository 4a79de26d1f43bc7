# jobboard/core/config.py

import os
from typing import List

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load_dotenv() makes sure .env values are visible to os.getenv below
# before Pydantic initializes the Settings.
load_dotenv()


class Settings(BaseSettings):
    """
    Application configuration settings.
    Pydantic reads these from environment variables or a .env file.
    The defaults are used when the variable is not set.
    """
    # --- Database Settings ---
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./jobboard.db")

    # --- Authentication Settings ---
    # No default: without a key tokens can be neither issued nor verified.
    SECRET_KEY_FOR_AUTH: str | None = None
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60

    # --- Resume Upload Constraints ---
    UPLOAD_DIR: str = "./uploads"
    MAX_RESUME_SIZE: int = 5 * 1024 * 1024
    ALLOWED_RESUME_TYPES: List[str] = [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ]

    # --- Application Lifecycle ---
    # False keeps any-to-any status changes; True restricts them to
    # PENDING -> REVIEWED -> ACCEPTED | REJECTED.
    STRICT_STATUS_TRANSITIONS: bool = False

    # --- HTTP ---
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"


# Single, reusable instance of the settings
settings = Settings()
