# -*- coding: utf-8 -*-
"""
Enrollment Context - state shared by the enrollment wizard steps.

Extends WizardContext with the draft store. Step components read the record
through the context and write only through draft_store.patch().
"""

from typing import Any, Dict

from models.enrollment import EnrollmentRecord
from services.draft_store import DraftStore
from ui.wizards.framework import WizardContext


class EnrollmentContext(WizardContext):
    """Context for the enrollment wizard."""

    def __init__(self, draft_store: DraftStore):
        super().__init__()
        self.draft_store = draft_store

        # Last submission response (set once the wizard is completed)
        self.submission_response: Dict[str, Any] = {}

    @property
    def record(self) -> EnrollmentRecord:
        """Snapshot of the current draft."""
        return self.draft_store.get()

    def _get_reference_prefix(self) -> str:
        return "ENR"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context to dictionary."""
        data = super().to_dict()
        data["record"] = self.record.to_dict()
        data["submission_response"] = self.submission_response
        return data

    def get_summary(self) -> Dict[str, Any]:
        record = self.record
        return {
            "reference_number": self.reference_number,
            "status": self.status,
            "full_name": record.full_name,
            "class_level": record.class_level,
            "subjects_count": len(record.subjects or []),
            "completed_steps": len(self.completed_steps),
        }
