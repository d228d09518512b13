# -*- coding: utf-8 -*-
"""
Wizard Framework - state container and step navigation for multi-step wizards.

Provides the base context and navigator shared by wizard controllers, with
consistent guarding, validation blocking and progress reporting.
"""

from .wizard_context import WizardContext
from .step_navigator import StepNavigator

__all__ = [
    'WizardContext',
    'StepNavigator'
]
