# -*- coding: utf-8 -*-
"""
Enrollment Data Models
"""

from .enrollment import (
    Board,
    ClassLevel,
    EnrollmentPayload,
    EnrollmentRecord,
    ExamGoal,
    PaymentMode,
    PaymentPlan,
    PreferredLanguage,
)

__all__ = [
    "Board",
    "ClassLevel",
    "EnrollmentPayload",
    "EnrollmentRecord",
    "ExamGoal",
    "PaymentMode",
    "PaymentPlan",
    "PreferredLanguage",
]
