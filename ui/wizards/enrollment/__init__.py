# -*- coding: utf-8 -*-
"""
Enrollment Wizard Package.

Four-step student enrollment flow: student details, academic details,
address & guardian, review & submit.

This package contains:
- EnrollmentContext: Wizard context holding the draft store
- EnrollmentWizard: Controller driving navigation, drafts and submission
"""

from .enrollment_context import EnrollmentContext
from .enrollment_wizard import EnrollmentWizard

__all__ = [
    'EnrollmentContext',
    'EnrollmentWizard'
]
