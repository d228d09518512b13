# -*- coding: utf-8 -*-
"""
Enrollment Wizard - controller for the four-step enrollment flow.

Coordinates:
- the draft store (single source of truth for the record)
- the step navigator (guards, validation blocking, progress)
- the review assembler (final validation and redirect)
- the submission controller (in flight / settled state)

Navigation guard violations are not errors: the user is silently sent to
the earliest incomplete step and the redirect is logged.
"""

from typing import Any, Dict, List, Mapping, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from app.config import Config
from controllers.submission_controller import SubmissionController, SubmissionState
from models.enrollment import EnrollmentRecord
from services.draft_store import DraftStore
from services.location_lookup import LocationLookupService
from services.review_assembler import FinalizeResult, ReviewAssembler, ReviewSection
from services.subject_catalog import SubjectCatalog
from services.submission_service import SubmissionService, create_submission_service
from services.validation.enrollment_validator import EnrollmentValidator, ErrorSet
from services.wizard.step_guard import StepGuard
from services.wizard.steps import STEP_FIELDS, STEP_ORDER, STEP_TITLES, WizardStep
from ui.wizards.framework import StepNavigator
from .enrollment_context import EnrollmentContext
from utils.logger import get_logger

logger = get_logger(__name__)


class EnrollmentWizard(QObject):
    """
    Enrollment wizard controller.

    Signals:
        step_changed(old, new): current step changed
        redirected(requested, shown): a guard or the review sent the user elsewhere
        validation_failed(errors): a step could not be left
        wizard_completed(response): submission settled successfully
        submission_failed(message): submission settled with an error (retryable)
    """

    step_changed = pyqtSignal(str, str)
    redirected = pyqtSignal(str, str)
    validation_failed = pyqtSignal(dict)
    wizard_completed = pyqtSignal(dict)
    submission_failed = pyqtSignal(str)

    def __init__(self, draft_store: DraftStore,
                 validator: Optional[EnrollmentValidator] = None,
                 submission_service: Optional[SubmissionService] = None,
                 location_service: Optional[LocationLookupService] = None,
                 subject_catalog: Optional[SubjectCatalog] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)

        self.context = EnrollmentContext(draft_store)
        self.validator = validator or EnrollmentValidator()
        self.assembler = ReviewAssembler(self.validator)
        self.location_service = location_service or LocationLookupService()
        self.subject_catalog = subject_catalog or SubjectCatalog()

        self.navigator = StepNavigator(
            self.context,
            STEP_ORDER,
            guard=self.can_enter,
            terminal_step=WizardStep.SUBMITTED,
        )
        self.navigator.step_changed.connect(self.step_changed)
        self.navigator.redirected.connect(self.redirected)
        self.navigator.validation_failed.connect(self.validation_failed)

        service = submission_service or create_submission_service(self)
        self.submission = SubmissionController(service, self)
        self.submission.submission_succeeded.connect(self._on_submission_succeeded)
        self.submission.submission_failed.connect(self._on_submission_failed)

        self.last_errors: ErrorSet = {}

        logger.info(f"Enrollment wizard started ({self.context.reference_number})")

    # =========================================================================
    # State
    # =========================================================================

    @property
    def draft_store(self) -> DraftStore:
        return self.context.draft_store

    @property
    def record(self) -> EnrollmentRecord:
        return self.context.record

    @property
    def current_step(self) -> WizardStep:
        return self.navigator.current_step

    @property
    def current_title(self) -> str:
        return STEP_TITLES[self.current_step]

    def progress_percentage(self) -> float:
        """Position among the four visible steps, counting the current one."""
        return self.navigator.get_progress_percentage()

    @property
    def is_submitting(self) -> bool:
        return self.submission.state is SubmissionState.IN_FLIGHT

    # =========================================================================
    # Navigation
    # =========================================================================

    def can_enter(self, step: WizardStep) -> WizardStep:
        """
        Step that is shown when `step` is requested.

        Returns `step` itself when every earlier step has its required
        fields, otherwise the earliest incomplete step.
        """
        return StepGuard.resolve(step, self.record)

    def enter(self, step: WizardStep) -> WizardStep:
        """Navigate to `step`, or to where its guard redirects."""
        if step is WizardStep.SUBMITTED:
            logger.info("Submitted step requested directly, treating as review")
            step = WizardStep.REVIEW
        if self.is_submitting:
            logger.warning(f"Navigation to {step.value} ignored while submitting")
            return self.current_step
        return self.navigator.enter(step)

    def advance(self, values: Optional[Mapping[str, Any]] = None) -> ErrorSet:
        """
        Leave the current step with the submitted form values.

        The candidate is the step's stored values overlaid with `values`;
        keys that belong to other steps are ignored.
        On success the candidate is patched into the draft and the wizard
        moves on; on the review step this submits.

        Returns:
            Errors for the current step; empty when the wizard moved on
        """
        step = self.current_step

        if self.is_submitting:
            logger.warning("Advance ignored while submitting")
            return {}

        if step is WizardStep.REVIEW:
            result = self.submit()
            return dict(result.errors) if result else {}

        if step not in STEP_FIELDS:
            return {}

        candidate = self._candidate_for(step, values or {})
        errors = self.validator.validate_step(step, candidate)
        self.last_errors = errors

        if errors:
            self.navigator.next_step(errors)
            return errors

        self.draft_store.patch(candidate)
        self.navigator.next_step()
        return {}

    def go_back(self) -> bool:
        """Move to the previous step; no-op on the first step or while submitting."""
        if self.is_submitting:
            logger.warning("Back ignored while submitting")
            return False
        return self.navigator.previous_step()

    def _candidate_for(self, step: WizardStep, values: Mapping[str, Any]) -> Dict[str, Any]:
        rule_set = self.validator.factory.get_rule_set(step)
        names = rule_set.field_names() if rule_set else list(STEP_FIELDS[step])

        record = self.record
        candidate = {name: getattr(record, name, None) for name in names}
        ignored = sorted(set(values) - set(names))
        if ignored:
            logger.warning(f"Ignoring fields not on {step.value}: {ignored}")
        candidate.update((name, value) for name, value in values.items() if name in names)
        return candidate

    # =========================================================================
    # Review and submission
    # =========================================================================

    def submit(self) -> Optional[FinalizeResult]:
        """
        Validate the whole record and hand the payload to submission.

        Only allowed on the review step. An invalid record redirects to the
        highest-priority step owning an invalid field.

        Returns:
            The finalize result, or None when submitting is not allowed
        """
        if self.current_step is not WizardStep.REVIEW:
            logger.warning(f"Submit ignored on {self.current_step.value}")
            return None

        if not self.submission.can_submit():
            logger.warning(f"Submit ignored, submission is {self.submission.state.value}")
            return None

        result = self.assembler.finalize(self.record)
        self.last_errors = result.errors

        if not result.is_valid:
            self.validation_failed.emit(dict(result.errors))
            self.redirected.emit(WizardStep.REVIEW.value, result.redirect.value)
            self.navigator.goto_step(result.redirect)
            return result

        self.context.status = self.context.STATUS_SUBMITTING
        self.submission.submit(result.payload)
        return result

    def review_summary(self) -> List[ReviewSection]:
        return self.assembler.summary(self.record)

    def _on_submission_succeeded(self, response: dict):
        self.context.submission_response = response
        self.context.status = self.context.STATUS_COMPLETED
        self.draft_store.clear()
        self.navigator.complete(force=True)

        logger.info(f"Enrollment {self.context.reference_number} submitted")
        self.wizard_completed.emit(response)

    def _on_submission_failed(self, message: str):
        # Record is kept as-is so the user can retry
        self.context.status = self.context.STATUS_IN_PROGRESS
        logger.error(f"Enrollment submission failed: {message}")
        self.submission_failed.emit(message)

    # =========================================================================
    # Draft and collaborators
    # =========================================================================

    def clear_draft(self):
        """Discard the draft and start over at the first step."""
        if self.is_submitting:
            logger.warning("Clear ignored while submitting")
            return
        self.draft_store.clear()
        self.submission.reset()
        self.context.completed_steps.clear()
        self.context.status = self.context.STATUS_IN_PROGRESS
        self.last_errors = {}
        self.navigator.reset()

    def subject_options(self) -> List[str]:
        """Subjects offered for the record's class level."""
        class_level = self.record.class_level or Config.DEFAULT_CLASS_LEVEL
        return self.subject_catalog.subjects_for(class_level)

    def location_prefill(self, pin_code: Optional[str] = None) -> Optional[Dict[str, str]]:
        """
        Suggested state and city for a PIN code.

        Returns:
            {"state": ..., "city": ...} or None for an unknown PIN
        """
        if pin_code is None:
            pin_code = self.record.pin_code
        location = self.location_service.lookup(pin_code)
        return location.to_dict() if location else None
