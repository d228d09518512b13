# -*- coding: utf-8 -*-
"""
Enrollment validation engine.

Validates one step's candidate values or the whole merged record and
returns an ErrorSet: field name -> message, empty when valid. Pure and
synchronous; it never touches storage or the network.
"""

from typing import Any, Dict, Mapping, Tuple, Union

from models.enrollment import EnrollmentRecord
from services.exceptions import ValidationException
from services.wizard.steps import WizardStep
from .validation_factory import StepRuleSet, ValidationFactory

ErrorSet = Dict[str, str]

Candidate = Union[EnrollmentRecord, Mapping[str, Any]]


def _as_mapping(candidate: Candidate) -> Mapping[str, Any]:
    if candidate is None:
        return {}
    if isinstance(candidate, EnrollmentRecord):
        return candidate.to_dict()
    return candidate


class EnrollmentValidator:
    """Applies registered step rule sets to candidates and records."""

    def __init__(self, factory: ValidationFactory = None):
        self.factory = factory or ValidationFactory()

    # ------------------------------------------------------------------
    # Public contract
    # ------------------------------------------------------------------

    def validate_step(self, step: WizardStep, candidate: Candidate) -> ErrorSet:
        """
        Validate the values submitted for one step.

        REVIEW validates the whole record; SUBMITTED has no rules.
        """
        if step is WizardStep.REVIEW:
            return self.validate_full(candidate)

        rule_set = self.factory.get_rule_set(step)
        if rule_set is None:
            return {}

        _, errors = self._apply_rule_set(rule_set, _as_mapping(candidate))
        return errors

    def validate_full(self, record: Candidate) -> ErrorSet:
        """Validate the merged record against every step's rules at once."""
        _, errors = self.clean_full(record)
        return errors

    def clean_full(self, record: Candidate) -> Tuple[Dict[str, Any], ErrorSet]:
        """
        Clean the merged record with the union of all rule sets.

        Returns:
            (cleaned values, errors); cleaned values are only complete when
            errors is empty
        """
        values = _as_mapping(record)
        cleaned: Dict[str, Any] = {}
        errors: ErrorSet = {}

        for rule_set in self.factory.all_rule_sets():
            step_cleaned, step_errors = self._apply_rule_set(rule_set, values)
            for name, value in step_cleaned.items():
                cleaned.setdefault(name, value)
            for name, message in step_errors.items():
                errors.setdefault(name, message)

        return cleaned, errors

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_rule_set(self, rule_set: StepRuleSet,
                        values: Mapping[str, Any]) -> Tuple[Dict[str, Any], ErrorSet]:
        """Per-field pass, then refinements if every field passed."""
        cleaned: Dict[str, Any] = {}
        errors: ErrorSet = {}

        for name, rule in rule_set.fields.items():
            try:
                cleaned[name] = rule.clean(values.get(name), field=name)
            except ValidationException as e:
                errors[name] = e.message

        if errors:
            return cleaned, errors

        for refinement in rule_set.refinements:
            issue = refinement(cleaned)
            if issue:
                name, message = issue
                errors.setdefault(name, message)

        return cleaned, errors


# Default engine shared by the module-level helpers
_default_validator = EnrollmentValidator()


def validate_step(step: WizardStep, candidate: Candidate) -> ErrorSet:
    """Validate one step's values with the default rule sets."""
    return _default_validator.validate_step(step, candidate)


def validate_full(record: Candidate) -> ErrorSet:
    """Validate a full record with the default rule sets."""
    return _default_validator.validate_full(record)
