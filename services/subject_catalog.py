# -*- coding: utf-8 -*-
"""Selectable subjects per class level."""

from typing import Dict, List, Mapping, Optional, Union

from models.enrollment import ClassLevel

SENIOR_SUBJECTS = [
    "Physics",
    "Chemistry",
    "Mathematics",
    "Biology",
    "English",
    "Computer Science",
]

SUBJECTS_BY_CLASS: Dict[ClassLevel, List[str]] = {
    ClassLevel.CLASS_9: ["English", "Mathematics", "Science", "Social Science", "Hindi"],
    ClassLevel.CLASS_10: ["English", "Mathematics", "Science", "Social Science", "Hindi/Sanskrit"],
    ClassLevel.CLASS_11: list(SENIOR_SUBJECTS),
    ClassLevel.CLASS_12: list(SENIOR_SUBJECTS),
}


class SubjectCatalog:
    """Ordered subject options for a class level."""

    def __init__(self, subjects_by_class: Optional[Mapping[ClassLevel, List[str]]] = None):
        self._subjects = dict(SUBJECTS_BY_CLASS if subjects_by_class is None else subjects_by_class)

    def subjects_for(self, class_level: Union[ClassLevel, str, None]) -> List[str]:
        """Options for the class, or an empty list for an unknown class."""
        if not isinstance(class_level, ClassLevel):
            try:
                class_level = ClassLevel(class_level)
            except ValueError:
                return []
        return list(self._subjects.get(class_level, []))
