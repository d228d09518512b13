# -*- coding: utf-8 -*-
"""Validation services package."""

from .validation_strategy import ValidationStrategy, TextRule, ChoiceRule, NumberRule, ListRule, BooleanRule
from .validation_factory import ValidationFactory, StepRuleSet
from .enrollment_validator import EnrollmentValidator, ErrorSet, validate_step, validate_full

__all__ = [
    'ValidationStrategy', 'TextRule', 'ChoiceRule', 'NumberRule', 'ListRule', 'BooleanRule',
    'ValidationFactory', 'StepRuleSet',
    'EnrollmentValidator', 'ErrorSet', 'validate_step', 'validate_full',
]
