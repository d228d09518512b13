#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Enrollment Wizard - headless entry point.

Restores the persisted enrollment draft, reports where the user would
resume and how far along they are, then flushes any pending save and exits.
"""

import sys

from PyQt5.QtCore import QCoreApplication

from app.config import Config
from repositories.draft_repository import SQLiteDraftStorage
from services.draft_store import DraftStore
from services.wizard.steps import WizardStep
from ui.wizards.enrollment import EnrollmentWizard
from utils.logger import setup_logger


def build_wizard(storage=None, parent=None) -> EnrollmentWizard:
    """Wizard over the given draft storage (SQLite at Config.DRAFT_DB_PATH by default)."""
    if storage is None:
        storage = SQLiteDraftStorage(Config.DRAFT_DB_PATH)
    store = DraftStore(storage, parent=parent)
    return EnrollmentWizard(store, parent=parent)


def main():
    """Main application entry point."""

    # Initialize logging
    logger = setup_logger()

    try:
        app = QCoreApplication.instance() or QCoreApplication(sys.argv)
        app.setApplicationName(Config.APP_NAME)
        app.setOrganizationName(Config.ORGANIZATION)

        logger.info("=" * 60)
        logger.info(f"Starting {Config.APP_NAME} {Config.VERSION}")
        logger.info(f"Settings: {Config.describe()}")
        logger.info("=" * 60)

        wizard = build_wizard()

        # Resume as far as the restored draft allows
        step = wizard.enter(WizardStep.REVIEW)
        logger.info(
            f">> Resume at '{wizard.current_title}' ({step.value}), "
            f"progress {wizard.progress_percentage():.0f}%"
        )

        if wizard.draft_store.flush():
            logger.info(">> Pending draft changes saved")
        wizard.draft_store.storage.close()

        logger.info(">> Done")
        sys.exit(0)

    except Exception as e:
        logger.exception(f"Fatal error during startup: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
