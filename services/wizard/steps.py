# -*- coding: utf-8 -*-
"""
Enrollment wizard steps and field ownership.

This is the one table both the entry guards and the review redirect read:
step order, step priority, which step owns which field, and which fields a
step must have filled in before any later step can be entered.
"""

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class WizardStep(Enum):
    """Wizard states in order; SUBMITTED is terminal."""
    STEP_1 = "step-1"
    STEP_2 = "step-2"
    STEP_3 = "step-3"
    REVIEW = "review"
    SUBMITTED = "submitted"


# Visible, navigable steps (SUBMITTED is reachable only by submitting)
STEP_ORDER: Tuple[WizardStep, ...] = (
    WizardStep.STEP_1,
    WizardStep.STEP_2,
    WizardStep.STEP_3,
    WizardStep.REVIEW,
)

# Data-owning steps, highest priority first
STEP_PRIORITY: Tuple[WizardStep, ...] = (
    WizardStep.STEP_1,
    WizardStep.STEP_2,
    WizardStep.STEP_3,
)

STEP_TITLES: Dict[WizardStep, str] = {
    WizardStep.STEP_1: "Student Details",
    WizardStep.STEP_2: "Academic Details",
    WizardStep.STEP_3: "Address & Guardian",
    WizardStep.REVIEW: "Review & Submit",
    WizardStep.SUBMITTED: "Enrollment Submitted",
}

STEP_FIELDS: Dict[WizardStep, Tuple[str, ...]] = {
    WizardStep.STEP_1: (
        "full_name", "email", "mobile", "class_level", "board", "preferred_language",
    ),
    WizardStep.STEP_2: (
        "subjects", "exam_goal", "weekly_study_hours", "scholarship",
        "last_exam_percentage", "achievements",
    ),
    WizardStep.STEP_3: (
        "pin_code", "state", "city", "address_line", "guardian_name",
        "guardian_mobile", "payment_plan", "payment_mode",
    ),
}

# Fields each earlier step must have present before the target step may be
# entered, keyed by target. Review only needs the subjects from step 2.
_IDENTITY_REQUIRED = ("full_name", "email", "mobile", "class_level")

ENTRY_REQUIREMENTS: Dict[WizardStep, Dict[WizardStep, Tuple[str, ...]]] = {
    WizardStep.STEP_1: {},
    WizardStep.STEP_2: {
        WizardStep.STEP_1: _IDENTITY_REQUIRED,
    },
    WizardStep.STEP_3: {
        WizardStep.STEP_1: _IDENTITY_REQUIRED,
        WizardStep.STEP_2: ("subjects", "exam_goal"),
    },
    WizardStep.REVIEW: {
        WizardStep.STEP_1: _IDENTITY_REQUIRED,
        WizardStep.STEP_2: ("subjects",),
        WizardStep.STEP_3: ("pin_code", "guardian_mobile"),
    },
}

# Anything not listed under step 1 or step 3 belongs to step 2
DEFAULT_OWNER = WizardStep.STEP_2


def owning_step(field_name: str) -> WizardStep:
    """Step whose form holds the given field."""
    for step in (WizardStep.STEP_1, WizardStep.STEP_3):
        if field_name in STEP_FIELDS[step]:
            return step
    return DEFAULT_OWNER


def first_step_by_priority(steps: Iterable[WizardStep]) -> Optional[WizardStep]:
    """Highest-priority step among the given ones, or None if empty."""
    candidates = set(steps)
    for step in STEP_PRIORITY:
        if step in candidates:
            return step
    return None


def step_index(step: WizardStep) -> int:
    """Position of a step in STEP_ORDER; SUBMITTED sits past the end."""
    if step is WizardStep.SUBMITTED:
        return len(STEP_ORDER)
    return STEP_ORDER.index(step)


def next_step(step: WizardStep) -> Optional[WizardStep]:
    if step is WizardStep.REVIEW:
        return WizardStep.SUBMITTED
    if step is WizardStep.SUBMITTED:
        return None
    return STEP_ORDER[step_index(step) + 1]


def previous_step(step: WizardStep) -> Optional[WizardStep]:
    if step is WizardStep.SUBMITTED:
        return None
    index = step_index(step)
    return STEP_ORDER[index - 1] if index > 0 else None


def earlier_steps(step: WizardStep) -> Tuple[WizardStep, ...]:
    """Data-owning steps that come before the given one."""
    index = step_index(step)
    return tuple(s for s in STEP_PRIORITY if step_index(s) < index)
