# -*- coding: utf-8 -*-
"""
Review assembler for the final wizard step.

finalize() runs the full-record validation. A valid record becomes an
EnrollmentPayload; otherwise the invalid fields are mapped to the steps that
own them and the highest-priority step is returned as the redirect target.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from models.enrollment import EnrollmentPayload, EnrollmentRecord
from services.validation.enrollment_validator import EnrollmentValidator, ErrorSet
from services.wizard.steps import (
    STEP_TITLES, WizardStep, first_step_by_priority, owning_step,
)
from utils.logger import get_logger

logger = get_logger(__name__)

EMPTY_VALUE = "—"


@dataclass
class FinalizeResult:
    """Either a validated payload or the step to send the user back to."""
    payload: Optional[EnrollmentPayload] = None
    redirect: Optional[WizardStep] = None
    errors: ErrorSet = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.payload is not None

    def invalid_steps(self) -> List[WizardStep]:
        steps = []
        for name in self.errors:
            step = owning_step(name)
            if step not in steps:
                steps.append(step)
        return steps


@dataclass
class ReviewSection:
    """One block of the review screen, with an Edit target."""
    step: WizardStep
    title: str
    rows: List[Tuple[str, str]]


class ReviewAssembler:
    """Builds the final payload or the redirect for the review step."""

    def __init__(self, validator: EnrollmentValidator = None):
        self.validator = validator or EnrollmentValidator()

    def finalize(self, record: EnrollmentRecord) -> FinalizeResult:
        """
        Validate the whole record.

        Returns:
            FinalizeResult with payload set on success, or redirect + errors
        """
        cleaned, errors = self.validator.clean_full(record)

        if errors:
            redirect = first_step_by_priority(owning_step(name) for name in errors)
            logger.info(
                f"Review blocked: {len(errors)} invalid field(s) {sorted(errors)}, "
                f"redirecting to {redirect.value}"
            )
            return FinalizeResult(redirect=redirect, errors=errors)

        payload = EnrollmentPayload.from_cleaned(cleaned)
        logger.info("Review passed, payload assembled")
        return FinalizeResult(payload=payload)

    # =========================================================================
    # Review screen
    # =========================================================================

    def summary(self, record: EnrollmentRecord) -> List[ReviewSection]:
        """Display rows for the review screen, grouped by step."""
        from app.config import Config

        def show(value: Any) -> str:
            if value is None or value == "" or value == []:
                return EMPTY_VALUE
            return str(value)

        def show_mobile(value: Optional[str]) -> str:
            return f"{Config.MOBILE_DISPLAY_PREFIX} {value}" if value else EMPTY_VALUE

        def show_list(values: Any) -> str:
            if isinstance(values, (list, tuple)):
                return show(", ".join(str(v) for v in values))
            return show(values)

        student_rows = [
            ("Full Name", show(record.full_name)),
            ("Email", show(record.email)),
            ("Mobile", show_mobile(record.mobile)),
            ("Class", show(record.class_level)),
            ("Board", show(record.board)),
            ("Preferred Language", show(record.preferred_language)),
        ]

        academic_rows = [
            ("Subjects", show_list(record.subjects)),
            ("Exam Goal", show(record.exam_goal)),
            ("Weekly Study Hours", show(record.weekly_study_hours)),
            ("Scholarship", "Yes" if record.scholarship else "No"),
        ]
        if record.scholarship:
            academic_rows.append(("Last Exam %", show(record.last_exam_percentage)))
            academic_rows.append(("Achievements", show(record.achievements)))

        logistics_rows = [
            ("PIN Code", show(record.pin_code)),
            ("State", show(record.state)),
            ("City", show(record.city)),
            ("Address", show(record.address_line)),
            ("Guardian Name", show(record.guardian_name)),
            ("Guardian Mobile", show_mobile(record.guardian_mobile)),
            ("Payment Plan", show(record.payment_plan)),
            ("Payment Mode", show(record.payment_mode)),
        ]

        return [
            ReviewSection(WizardStep.STEP_1, STEP_TITLES[WizardStep.STEP_1], student_rows),
            ReviewSection(WizardStep.STEP_2, STEP_TITLES[WizardStep.STEP_2], academic_rows),
            ReviewSection(WizardStep.STEP_3, STEP_TITLES[WizardStep.STEP_3], logistics_rows),
        ]

    def summary_dict(self, record: EnrollmentRecord) -> Dict[str, Dict[str, str]]:
        """summary() flattened to {section title: {label: value}}."""
        return {section.title: dict(section.rows) for section in self.summary(record)}
