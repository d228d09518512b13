# -*- coding: utf-8 -*-
"""
Cross-field refinements for the academic step.

A refinement receives the values already cleaned by the per-field rules and
returns (field, message) when the combination is invalid, else None. They
run in list order and only once every per-field rule of their rule set has
passed, so the cleaned values are guaranteed to be well-formed here.
"""

from typing import Any, Callable, List, Mapping, Optional, Tuple

from models.enrollment import ClassLevel, ExamGoal

Refinement = Callable[[Mapping[str, Any]], Optional[Tuple[str, str]]]

# Base minimum subject count per class level
MIN_SUBJECTS_BY_CLASS = {
    ClassLevel.CLASS_9: 2,
    ClassLevel.CLASS_10: 2,
    ClassLevel.CLASS_11: 3,
    ClassLevel.CLASS_12: 3,
}

COMPETITIVE_PREP_MIN_SUBJECTS = 3


def min_subjects_for(class_level: ClassLevel) -> int:
    return MIN_SUBJECTS_BY_CLASS[class_level]


def subject_count_by_class(values: Mapping[str, Any]) -> Optional[Tuple[str, str]]:
    """Classes 9-10 need 2 subjects, classes 11-12 need 3."""
    class_level = values["class_level"]
    minimum = min_subjects_for(class_level)
    if len(values["subjects"]) < minimum:
        return "subjects", f"Select at least {minimum} subjects for Class {class_level.value}"
    return None


def scholarship_requires_percentage(values: Mapping[str, Any]) -> Optional[Tuple[str, str]]:
    if values["scholarship"] and values.get("last_exam_percentage") is None:
        return "last_exam_percentage", "Last Exam Percentage is required for scholarship"
    return None


def competitive_prep_subject_count(values: Mapping[str, Any]) -> Optional[Tuple[str, str]]:
    """
    Class 12 aiming for Competitive Prep needs 3 subjects.

    Same threshold as the class 12 base minimum today, so it never fires on
    its own; it stays in case the base minimums change.
    """
    if (values["class_level"] is ClassLevel.CLASS_12
            and values["exam_goal"] is ExamGoal.COMPETITIVE_PREP
            and len(values["subjects"]) < COMPETITIVE_PREP_MIN_SUBJECTS):
        return "subjects", "Class 12 + Competitive Prep requires at least 3 subjects"
    return None


ACADEMIC_REFINEMENTS: List[Refinement] = [
    subject_count_by_class,
    scholarship_requires_percentage,
    competitive_prep_subject_count,
]
