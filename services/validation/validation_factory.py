# -*- coding: utf-8 -*-
"""
Validation Factory - Registry of rule sets for the enrollment steps.

Each wizard step registers a StepRuleSet: a table of named field rules plus
an ordered list of cross-field refinements. The full-record validator is the
union of every registered rule set.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.enrollment import (
    Board, ClassLevel, ExamGoal, PaymentMode, PaymentPlan, PreferredLanguage,
)
from services.wizard.steps import WizardStep, STEP_PRIORITY
from .cross_field_rules import ACADEMIC_REFINEMENTS, Refinement
from .validation_strategy import (
    BooleanRule, ChoiceRule, ListRule, NumberRule, TextRule, ValidationStrategy,
)

MOBILE_PATTERN = r"^[6-9]\d{9}$"
PIN_CODE_PATTERN = r"^\d{6}$"
EMAIL_PATTERN = (
    r"^(?!\.)(?!.*\.\.)[A-Za-z0-9_'+\-.]*[A-Za-z0-9_+\-]"
    r"@(?:[A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
)
FULL_NAME_PATTERN = r"^[A-Za-z ]+$"


@dataclass
class StepRuleSet:
    """Field rules and refinements owned by one wizard step."""
    step: WizardStep
    fields: Dict[str, ValidationStrategy]
    refinements: List[Refinement] = field(default_factory=list)

    def field_names(self) -> List[str]:
        return list(self.fields.keys())


def _class_level_rule() -> ChoiceRule:
    return ChoiceRule("Class", ClassLevel, required_message="Select a class")


def build_student_rules() -> StepRuleSet:
    """Step 1 - identity."""
    return StepRuleSet(
        step=WizardStep.STEP_1,
        fields={
            "full_name": TextRule(
                "Full name",
                min_length=2,
                max_length=60,
                pattern=FULL_NAME_PATTERN,
                pattern_message="Only alphabets and spaces are allowed",
            ),
            "email": TextRule(
                "Email",
                pattern=EMAIL_PATTERN,
                pattern_message="Enter a valid email",
                strip=False,
            ),
            "mobile": TextRule(
                "Mobile",
                pattern=MOBILE_PATTERN,
                pattern_message="Enter a valid 10-digit Indian mobile number",
                strip=False,
            ),
            "class_level": _class_level_rule(),
            "board": ChoiceRule("Board", Board),
            "preferred_language": ChoiceRule("Preferred language", PreferredLanguage),
        },
    )


def build_academic_rules() -> StepRuleSet:
    """Step 2 - academic; class level is repeated here for the refinements."""
    return StepRuleSet(
        step=WizardStep.STEP_2,
        fields={
            "class_level": _class_level_rule(),
            "subjects": ListRule("Subjects", min_items=1, min_message="Pick at least 1 subject"),
            "exam_goal": ChoiceRule("Exam goal", ExamGoal),
            "weekly_study_hours": NumberRule(
                "Weekly study hours",
                minimum=1,
                maximum=40,
                integer=True,
                min_message="Min 1 hour",
                max_message="Max 40 hours",
            ),
            "scholarship": BooleanRule("Scholarship"),
            "last_exam_percentage": NumberRule(
                "Last exam percentage",
                minimum=0,
                maximum=100,
                required=False,
            ),
            "achievements": TextRule(
                "Achievements",
                max_length=300,
                max_message="Max 300 characters",
                strip=False,
                required=False,
            ),
        },
        refinements=list(ACADEMIC_REFINEMENTS),
    )


def build_logistics_rules() -> StepRuleSet:
    """Step 3 - address, guardian and payment."""
    return StepRuleSet(
        step=WizardStep.STEP_3,
        fields={
            "pin_code": TextRule(
                "PIN code",
                pattern=PIN_CODE_PATTERN,
                pattern_message="Enter a valid 6-digit PIN code",
                strip=False,
            ),
            "state": TextRule("State / UT", min_length=2, min_message="State / UT is required"),
            "city": TextRule("City", min_length=2, min_message="City is required"),
            "address_line": TextRule(
                "Address",
                min_length=10,
                max_length=120,
            ),
            "guardian_name": TextRule(
                "Guardian name", min_length=2, min_message="Guardian name is required"
            ),
            "guardian_mobile": TextRule(
                "Guardian mobile",
                pattern=MOBILE_PATTERN,
                pattern_message="Enter a valid 10-digit guardian mobile number",
                strip=False,
            ),
            "payment_plan": ChoiceRule("Payment plan", PaymentPlan),
            "payment_mode": ChoiceRule("Payment mode", PaymentMode),
        },
    )


class ValidationFactory:
    """
    Registry of step rule sets.

    Acts as the single place where rule sets are created and looked up, so
    the step validator and the full-record validator share the same rules.
    """

    def __init__(self):
        """Initialize the factory with the enrollment rule sets."""
        self._rule_sets: Dict[WizardStep, StepRuleSet] = {}
        self._register_default_rule_sets()

    def _register_default_rule_sets(self):
        self.register_rule_set(build_student_rules())
        self.register_rule_set(build_academic_rules())
        self.register_rule_set(build_logistics_rules())

    def register_rule_set(self, rule_set: StepRuleSet):
        """
        Register (or replace) the rule set of a step.

        Args:
            rule_set: StepRuleSet for rule_set.step
        """
        self._rule_sets[rule_set.step] = rule_set

    def get_rule_set(self, step: WizardStep) -> Optional[StepRuleSet]:
        return self._rule_sets.get(step)

    def all_rule_sets(self) -> List[StepRuleSet]:
        """Registered rule sets in step priority order."""
        return [self._rule_sets[step] for step in STEP_PRIORITY if step in self._rule_sets]

