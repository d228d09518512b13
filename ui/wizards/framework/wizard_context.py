# -*- coding: utf-8 -*-
"""
Wizard Context - Base class for wizard session state.

Provides unified interface for:
- Session identity and reference number
- Current step and completed steps
- Status tracking
- Serialization for logs and summaries

The context is an explicit object handed to every step component; there is
no module-level wizard state.
"""

from typing import Dict, Any, Optional, Set
from datetime import datetime
from abc import ABC, abstractmethod
import uuid


class WizardContext(ABC):
    """
    Base class for wizard context.

    All wizard contexts should inherit from this class and implement:
    - get_summary(): Short description of the collected data
    """

    STATUS_DRAFT = "draft"
    STATUS_IN_PROGRESS = "in_progress"
    STATUS_SUBMITTING = "submitting"
    STATUS_COMPLETED = "completed"

    def __init__(self):
        """Initialize base context properties."""
        self.wizard_id: str = str(uuid.uuid4())
        self.status: str = self.STATUS_DRAFT
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = datetime.now()
        self.current_step: Optional[str] = None
        self.reference_number: str = self._generate_reference_number()

        # Step completion tracking (step ids)
        self.completed_steps: Set[str] = set()

    def _generate_reference_number(self) -> str:
        """
        Generate a unique reference number for the wizard session.

        Format: {PREFIX}-{YYYYMMDDHHMMSS}-{SHORT_UUID}
        Example: ENR-20261019153045-A3F2
        """
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        short_id = self.wizard_id[:4].upper()
        prefix = self._get_reference_prefix()
        return f"{prefix}-{timestamp}-{short_id}"

    def _get_reference_prefix(self) -> str:
        """Get the prefix for reference number. Override in subclasses."""
        return "WIZ"

    def touch(self):
        self.updated_at = datetime.now()

    def set_current_step(self, step_id: str):
        self.current_step = step_id
        if self.status == self.STATUS_DRAFT:
            self.status = self.STATUS_IN_PROGRESS
        self.touch()

    def mark_step_completed(self, step_id: str):
        """Mark a step as completed."""
        self.completed_steps.add(step_id)
        self.touch()

    def is_step_completed(self, step_id: str) -> bool:
        """Check if a step is completed."""
        return step_id in self.completed_steps

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize context to dictionary.

        Subclasses should call super().to_dict() and add their own fields.
        """
        return {
            "wizard_id": self.wizard_id,
            "reference_number": self.reference_number,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_step": self.current_step,
            "completed_steps": sorted(self.completed_steps),
        }

    @abstractmethod
    def get_summary(self) -> Dict[str, Any]:
        """Short description of the collected data."""
        pass
