# -*- coding: utf-8 -*-
"""
Entry guards for the enrollment wizard.

Checks record data for each step without UI coupling. Entering a step only
needs the earlier steps' required fields to be present; full validation is
what the navigator asks for when leaving a step.
"""

from typing import Any, List, Optional

from models.enrollment import EnrollmentRecord
from services.validation.validation_strategy import is_blank
from .steps import ENTRY_REQUIREMENTS, WizardStep, earlier_steps


class StepGuard:
    """Decides whether a step may be entered given the current record."""

    @staticmethod
    def missing_fields(target: WizardStep, step: WizardStep,
                       record: EnrollmentRecord) -> List[str]:
        """Fields `step` must provide before `target` is entered that are absent."""
        required = ENTRY_REQUIREMENTS.get(target, {}).get(step, ())
        return [
            name for name in required
            if not StepGuard.is_present(getattr(record, name, None))
        ]

    @staticmethod
    def is_present(value: Any) -> bool:
        """Present and non-empty; False is a present boolean."""
        return not is_blank(value)

    @staticmethod
    def first_incomplete_before(target: WizardStep,
                                record: EnrollmentRecord) -> Optional[WizardStep]:
        """
        Earliest step before `target` whose requirements are not met.

        Steps are checked in priority order, so an incomplete step 1 wins
        over an incomplete step 2.

        Returns:
            The step to redirect to, or None when `target` may be entered
        """
        for step in earlier_steps(target):
            if StepGuard.missing_fields(target, step, record):
                return step
        return None

    @staticmethod
    def resolve(target: WizardStep, record: EnrollmentRecord) -> WizardStep:
        """
        The step actually shown when `target` is requested.

        SUBMITTED cannot be requested; it resolves like REVIEW.
        """
        if target is WizardStep.SUBMITTED:
            target = WizardStep.REVIEW
        return StepGuard.first_incomplete_before(target, record) or target
