# -*- coding: utf-8 -*-
"""
Submission Controller
=====================
Tracks the final submission as an observable tri-state.

IDLE -> IN_FLIGHT -> SETTLED. A submission in flight cannot be cancelled or
restarted. A failed settlement is retryable; a successful one is final.
The in-memory record is never touched on failure.
"""

from enum import Enum
from typing import Optional

from PyQt5.QtCore import pyqtSignal

from controllers.base_controller import BaseController, OperationResult
from models.enrollment import EnrollmentPayload
from services.submission_service import SubmissionService
from utils.logger import get_logger

logger = get_logger(__name__)

OPERATION = "submit_enrollment"


class SubmissionState(Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SETTLED = "settled"


class SubmissionController(BaseController):
    """Owns the submission lifecycle for one wizard session."""

    state_changed = pyqtSignal(str)
    submission_succeeded = pyqtSignal(dict)
    submission_failed = pyqtSignal(str)

    def __init__(self, service: SubmissionService, parent=None):
        super().__init__(parent)
        self.service = service
        self.service.succeeded.connect(self._on_succeeded)
        self.service.failed.connect(self._on_failed)

        self._state = SubmissionState.IDLE

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def result(self) -> Optional[OperationResult]:
        """Outcome of the last settled submission."""
        return self.last_result

    @property
    def succeeded(self) -> bool:
        return self._state is SubmissionState.SETTLED and bool(self.result and self.result.success)

    def can_submit(self) -> bool:
        if self._state is SubmissionState.IN_FLIGHT:
            return False
        return not self.succeeded

    def submit(self, payload: EnrollmentPayload) -> bool:
        """
        Start submitting the payload.

        Returns:
            False if a submission is in flight or already succeeded
        """
        if not self.can_submit():
            logger.warning(f"Submission ignored in state {self._state.value}")
            return False

        self._begin(OPERATION)
        self._set_state(SubmissionState.IN_FLIGHT)
        self.service.submit(payload)
        return True

    def reset(self):
        """Back to IDLE; refused while in flight."""
        if self._discard_result():
            self._set_state(SubmissionState.IDLE)

    def _set_state(self, state: SubmissionState):
        if state is self._state:
            return
        self._state = state
        self.state_changed.emit(state.value)

    def _on_succeeded(self, response: dict):
        self._finish(OperationResult.ok(data=response, message="Enrollment submitted"))
        self._set_state(SubmissionState.SETTLED)
        self.submission_succeeded.emit(response)

    def _on_failed(self, message: str):
        result = OperationResult.fail(message=message or "Submission failed", retryable=True)
        self._finish(result)
        self._set_state(SubmissionState.SETTLED)
        self.submission_failed.emit(result.message)
