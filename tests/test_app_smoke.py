# -*- coding: utf-8 -*-
"""
Smoke tests to ensure application doesn't break after changes.
These tests verify basic functionality works.
"""
import sys
import pytest
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def test_imports():
    """Test that all main modules can be imported."""
    try:
        from app.config import Config
        from models.enrollment import EnrollmentRecord
        from repositories.draft_repository import SQLiteDraftStorage
        from services.draft_store import DraftStore
        from controllers import SubmissionController
        from ui.wizards.enrollment import EnrollmentWizard
        assert True
    except ImportError as e:
        pytest.fail(f"Import failed: {e}")


def test_models_instantiation():
    """Test that models can be instantiated."""
    from models.enrollment import EnrollmentRecord

    record = EnrollmentRecord()
    assert record.is_empty()


def test_services_import():
    """Test that services can be imported."""
    try:
        from services.validation.validation_factory import ValidationFactory
        from services.review_assembler import ReviewAssembler
        from services.submission_service import create_submission_service
        assert True
    except ImportError as e:
        pytest.fail(f"Service import failed: {e}")


def test_lazy_service_exports():
    """Test that the services package exposes its main classes."""
    import services

    assert services.DraftStore.__name__ == "DraftStore"
    assert services.ReviewAssembler.__name__ == "ReviewAssembler"


def test_logger_setup(tmp_path):
    """Test logger writes to the configured log file."""
    from app.config import Config
    from utils.logger import get_logger, setup_logger

    logger = setup_logger()
    get_logger("smoke").info("smoke test")
    for handler in logger.handlers:
        handler.flush()

    assert Config.LOG_PATH.exists()


def test_build_wizard_over_sqlite(qapp, tmp_path):
    """Test the entry point wires a wizard over SQLite storage."""
    from main import build_wizard
    from repositories.draft_repository import SQLiteDraftStorage
    from services.wizard.steps import WizardStep

    storage = SQLiteDraftStorage(tmp_path / "drafts.db")
    wizard = build_wizard(storage)

    assert wizard.enter(WizardStep.REVIEW) is WizardStep.STEP_1
    assert wizard.progress_percentage() == 25.0
    storage.close()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
