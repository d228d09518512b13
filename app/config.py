# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()  # Load from .env file in project root

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
_PROJECT_ROOT = Path(__file__).parent.parent

# Draft persistence
_DRAFT_SAVE_DEBOUNCE_MS = int(os.getenv("ENROLL_DRAFT_DEBOUNCE_MS", "500"))
_DRAFT_DB_PATH = os.getenv("ENROLL_DRAFT_DB_PATH", None)

# Submission
_SUBMISSION_MODE = os.getenv("ENROLL_SUBMISSION_MODE", "simulated").lower()
_SUBMISSION_URL = os.getenv("ENROLL_SUBMISSION_URL", "http://localhost:8080/api/v1/enrollments")
_SUBMISSION_TIMEOUT = int(os.getenv("ENROLL_SUBMISSION_TIMEOUT", "30"))
_SUBMISSION_DELAY_MS = int(os.getenv("ENROLL_SUBMISSION_DELAY_MS", "1000"))

# Logging
_LOGS_DIR = os.getenv("ENROLL_LOGS_DIR", None)
_LOG_CONSOLE_LEVEL = os.getenv("ENROLL_LOG_LEVEL", "INFO")


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Enrollment Wizard"
    APP_TITLE: str = "Student Enrollment"
    VERSION: str = "1.0.0"
    ORGANIZATION: str = "Edzy"

    # Paths
    PROJECT_ROOT: Path = _PROJECT_ROOT
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = Path(_LOGS_DIR) if _LOGS_DIR else PROJECT_ROOT / "logs"

    # Draft persistence
    # A single well-known key holds the whole serialized record
    DRAFT_STORAGE_KEY: str = "edzy_enroll_draft_v1"
    DRAFT_SAVE_DEBOUNCE_MS: int = _DRAFT_SAVE_DEBOUNCE_MS
    DRAFT_DB_PATH: Path = Path(_DRAFT_DB_PATH) if _DRAFT_DB_PATH else DATA_DIR / "drafts.db"

    # Submission ("simulated" or "http")
    SUBMISSION_MODE: str = _SUBMISSION_MODE
    SUBMISSION_URL: str = _SUBMISSION_URL
    SUBMISSION_TIMEOUT: int = _SUBMISSION_TIMEOUT
    SUBMISSION_DELAY_MS: int = _SUBMISSION_DELAY_MS

    # Wizard defaults
    DEFAULT_CLASS_LEVEL: str = "10"
    MOBILE_DISPLAY_PREFIX: str = "+91"

    # Logging
    LOG_FILE: str = "enrollment.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    LOG_CONSOLE_LEVEL: str = _LOG_CONSOLE_LEVEL

    @classmethod
    def describe(cls) -> dict:
        """Settings summary written to the log at startup."""
        return {
            "app": f"{cls.APP_NAME} {cls.VERSION}",
            "draft_db": str(cls.DRAFT_DB_PATH),
            "draft_debounce_ms": cls.DRAFT_SAVE_DEBOUNCE_MS,
            "submission_mode": cls.SUBMISSION_MODE,
        }


def get_submission_url(override: Optional[str] = None) -> str:
    """Resolve the submission endpoint, preferring an explicit override."""
    return override or Config.SUBMISSION_URL
