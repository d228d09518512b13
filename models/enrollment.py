# -*- coding: utf-8 -*-
"""
Enrollment entity models.

EnrollmentRecord is the partial record filled step by step; every field is
optional so the record is valid mid-entry. EnrollmentPayload is the fully
validated, typed form handed to submission.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from utils.logger import get_logger

logger = get_logger(__name__)


class ClassLevel(Enum):
    """School class the student is enrolling for."""
    CLASS_9 = "9"
    CLASS_10 = "10"
    CLASS_11 = "11"
    CLASS_12 = "12"


class Board(Enum):
    CBSE = "CBSE"
    ICSE = "ICSE"
    STATE_BOARD = "State Board"


class PreferredLanguage(Enum):
    ENGLISH = "English"
    HINDI = "Hindi"
    HINGLISH = "Hinglish"


class ExamGoal(Enum):
    BOARD_EXCELLENCE = "Board Excellence"
    CONCEPT_MASTERY = "Concept Mastery"
    COMPETITIVE_PREP = "Competitive Prep"


class PaymentPlan(Enum):
    QUARTERLY = "Quarterly"
    HALF_YEARLY = "Half-Yearly"
    ANNUAL = "Annual"


class PaymentMode(Enum):
    UPI = "UPI"
    CARD = "Card"
    NET_BANKING = "NetBanking"


@dataclass
class EnrollmentRecord:
    """
    In-progress enrollment data, merged from the three wizard steps.

    Values are kept as entered (strings, numbers, lists); enum fields hold
    the enum value string. Completeness and format are checked per step by
    the validation engine, not here.
    """

    # Group A - identity (step 1)
    full_name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    class_level: Optional[str] = None
    board: Optional[str] = None
    preferred_language: Optional[str] = None

    # Group B - academic (step 2)
    subjects: Optional[List[str]] = None
    exam_goal: Optional[str] = None
    weekly_study_hours: Optional[Any] = None
    scholarship: Optional[bool] = None
    last_exam_percentage: Optional[Any] = None
    achievements: Optional[str] = None

    # Group C - logistics (step 3)
    pin_code: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    address_line: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_mobile: Optional[str] = None
    payment_plan: Optional[str] = None
    payment_mode: Optional[str] = None

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        """All record field names in declaration order."""
        return tuple(f.name for f in fields(cls))

    def merge(self, partial: Mapping[str, Any]) -> "EnrollmentRecord":
        """
        Shallow-merge a partial record into this one (in place).

        Every key present in partial overwrites, explicit None included.
        Unknown keys are ignored.

        Returns:
            self, for chaining
        """
        known = self.field_names()
        for key, value in partial.items():
            if key not in known:
                logger.warning(f"Ignoring unknown enrollment field in patch: {key}")
                continue
            if isinstance(value, Enum):
                value = value.value
            if isinstance(value, (list, tuple)):
                value = list(value)
            setattr(self, key, value)
        return self

    def copy(self) -> "EnrollmentRecord":
        """Independent copy; list values are copied too."""
        return EnrollmentRecord.from_dict(self.to_dict())

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in self.field_names())

    def present_fields(self) -> Dict[str, Any]:
        """Only the fields that have a value."""
        return {k: v for k, v in self.to_dict().items() if v is not None}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {}
        for name in self.field_names():
            value = getattr(self, name)
            if isinstance(value, list):
                value = list(value)
            data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EnrollmentRecord":
        """Create EnrollmentRecord from dictionary."""
        if not isinstance(data, Mapping):
            raise TypeError(f"Enrollment draft must be a mapping, got {type(data).__name__}")
        return cls().merge({k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class EnrollmentPayload:
    """Fully validated enrollment, ready for the submission service."""

    full_name: str
    email: str
    mobile: str
    class_level: ClassLevel
    board: Board
    preferred_language: PreferredLanguage

    subjects: List[str]
    exam_goal: ExamGoal
    weekly_study_hours: int
    scholarship: bool

    pin_code: str
    state: str
    city: str
    address_line: str
    guardian_name: str
    guardian_mobile: str
    payment_plan: PaymentPlan
    payment_mode: PaymentMode

    last_exam_percentage: Optional[float] = None
    achievements: Optional[str] = None

    @classmethod
    def from_cleaned(cls, cleaned: Mapping[str, Any]) -> "EnrollmentPayload":
        """Build a payload from values already cleaned by the validation rules."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in cleaned.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """JSON body for submission (enum members as their values)."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, list):
                value = list(value)
            data[f.name] = value
        return data
