# -*- coding: utf-8 -*-
"""
Shared pytest configuration and fixtures.

Environment overrides are applied before any project module is imported so
that Config picks them up (load_dotenv never overrides existing variables).
"""

import os
import sys
import tempfile
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

_TEST_DIR = Path(tempfile.mkdtemp(prefix="enrollment-tests-"))
os.environ["ENROLL_LOGS_DIR"] = str(_TEST_DIR / "logs")
os.environ["ENROLL_DRAFT_DB_PATH"] = str(_TEST_DIR / "drafts.db")
os.environ["ENROLL_SUBMISSION_MODE"] = "simulated"
os.environ["ENROLL_SUBMISSION_DELAY_MS"] = "10"

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest  # noqa: E402

from repositories.draft_repository import InMemoryDraftStorage  # noqa: E402
from services.draft_store import DraftStore  # noqa: E402


STEP1_VALUES = {
    "full_name": "Aarav Sharma",
    "email": "aarav.sharma@example.com",
    "mobile": "9876543210",
    "class_level": "10",
    "board": "CBSE",
    "preferred_language": "English",
}

STEP2_VALUES = {
    "subjects": ["Mathematics", "Science"],
    "exam_goal": "Board Excellence",
    "weekly_study_hours": 12,
    "scholarship": False,
}

STEP3_VALUES = {
    "pin_code": "110001",
    "state": "Delhi",
    "city": "New Delhi",
    "address_line": "12 Connaught Place, Block A",
    "guardian_name": "Rohit Sharma",
    "guardian_mobile": "9123456780",
    "payment_plan": "Annual",
    "payment_mode": "UPI",
}


@pytest.fixture
def step1_values():
    return dict(STEP1_VALUES)


@pytest.fixture
def step2_values():
    return {**STEP2_VALUES, "subjects": list(STEP2_VALUES["subjects"])}


@pytest.fixture
def step3_values():
    return dict(STEP3_VALUES)


@pytest.fixture
def valid_values(step1_values, step2_values, step3_values):
    """A complete, valid record as a plain dict."""
    return {**step1_values, **step2_values, **step3_values}


@pytest.fixture
def storage():
    return InMemoryDraftStorage()


@pytest.fixture
def draft_store(qapp, storage):
    """Draft store with a short debounce window."""
    store = DraftStore(storage, debounce_ms=20)
    yield store
    store.flush()


@pytest.fixture
def payload(valid_values):
    """Validated payload built from the valid record."""
    from models.enrollment import EnrollmentRecord
    from services.review_assembler import ReviewAssembler

    result = ReviewAssembler().finalize(EnrollmentRecord.from_dict(valid_values))
    assert result.is_valid, result.errors
    return result.payload
