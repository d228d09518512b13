# -*- coding: utf-8 -*-
"""
Validation Strategy Pattern - Declarative per-field rules.

Each rule cleans one raw value taken from a form or a draft and either
returns the cleaned value or raises ValidationException with the message
shown next to the field. Rules never look at other fields; rules that need
more than one field are cross-field refinements (see cross_field_rules).
"""

import math
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional, Pattern, Type, Union

from services.exceptions import ValidationException


def is_blank(value: Any) -> bool:
    """None, whitespace-only strings and empty lists count as absent."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple, set)) and len(value) == 0:
        return True
    return False


class ValidationStrategy(ABC):
    """
    Abstract base class for field rules.

    Subclasses implement clean_present(); the base class handles the
    required/optional decision so every rule treats absence the same way.
    """

    def __init__(self, label: str, required: bool = True,
                 required_message: Optional[str] = None):
        """
        Args:
            label: Human-readable field name used in default messages
            required: Whether an absent value is an error
            required_message: Message for a missing required value
        """
        self.label = label
        self.required = required
        self.required_message = required_message or f"{label} is required"

    def clean(self, value: Any, field: str = None) -> Any:
        """
        Validate and normalise a raw value.

        Returns:
            The cleaned value, or None for an absent optional value

        Raises:
            ValidationException: value breaks the rule
        """
        if self.treats_as_missing(value):
            if self.required:
                raise ValidationException(self.required_message, field=field)
            return None
        return self.clean_present(value, field)

    def treats_as_missing(self, value: Any) -> bool:
        return is_blank(value)

    @abstractmethod
    def clean_present(self, value: Any, field: str = None) -> Any:
        """Validate a value that is known to be present."""
        pass


class TextRule(ValidationStrategy):
    """Free text with optional trimming, length bounds and a pattern."""

    def __init__(self, label: str, min_length: int = None, max_length: int = None,
                 pattern: Union[str, Pattern] = None, pattern_message: str = None,
                 strip: bool = True, min_message: str = None, max_message: str = None,
                 **kwargs):
        super().__init__(label, **kwargs)
        self.min_length = min_length
        self.max_length = max_length
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.pattern_message = pattern_message or f"Enter a valid {label.lower()}"
        self.strip = strip
        self.min_message = min_message or f"{label} must be at least {min_length} characters"
        self.max_message = max_message or f"{label} must be at most {max_length} characters"

    def treats_as_missing(self, value: Any) -> bool:
        # Untrimmed text fields keep whitespace-only input and fail the pattern instead
        if not self.strip and isinstance(value, str):
            return value == ""
        return is_blank(value)

    def clean_present(self, value: Any, field: str = None) -> str:
        if not isinstance(value, str):
            raise ValidationException(f"{self.label} must be text", field=field)

        text = value.strip() if self.strip else value

        if self.min_length is not None and len(text) < self.min_length:
            raise ValidationException(self.min_message, field=field)
        if self.max_length is not None and len(text) > self.max_length:
            raise ValidationException(self.max_message, field=field)
        if self.pattern is not None and not self.pattern.match(text):
            raise ValidationException(self.pattern_message, field=field)
        return text


class ChoiceRule(ValidationStrategy):
    """One value out of an Enum; cleans to the enum member."""

    def __init__(self, label: str, choices: Type[Enum], message: str = None, **kwargs):
        super().__init__(label, **kwargs)
        self.choices = choices
        allowed = ", ".join(member.value for member in choices)
        self.message = message or f"Select a valid {label.lower()} ({allowed})"
        self.required_message = kwargs.get("required_message") or f"Select a {label.lower()}"

    def clean_present(self, value: Any, field: str = None) -> Enum:
        if isinstance(value, self.choices):
            return value
        try:
            return self.choices(value)
        except ValueError:
            raise ValidationException(self.message, field=field)


class NumberRule(ValidationStrategy):
    """
    Numeric value within bounds.

    Numeric strings are coerced ("12" -> 12); blank strings count as absent.
    Booleans are rejected even though Python treats them as ints.
    """

    def __init__(self, label: str, minimum: float = None, maximum: float = None,
                 integer: bool = False, min_message: str = None, max_message: str = None,
                 integer_message: str = None, **kwargs):
        super().__init__(label, **kwargs)
        self.minimum = minimum
        self.maximum = maximum
        self.integer = integer
        self.min_message = min_message or f"Min {minimum}"
        self.max_message = max_message or f"Max {maximum}"
        self.integer_message = integer_message or f"{label} must be a whole number"

    def clean_present(self, value: Any, field: str = None) -> Union[int, float]:
        if isinstance(value, bool):
            raise ValidationException(f"{self.label} must be a number", field=field)

        if isinstance(value, str):
            try:
                number = float(value.strip())
            except (ValueError, OverflowError):
                raise ValidationException(f"{self.label} must be a number", field=field)
        elif isinstance(value, (int, float)):
            try:
                number = float(value)
            except OverflowError:
                raise ValidationException(f"{self.label} must be a number", field=field)
        else:
            raise ValidationException(f"{self.label} must be a number", field=field)

        if math.isnan(number) or math.isinf(number):
            raise ValidationException(f"{self.label} must be a number", field=field)
        if self.integer and not number.is_integer():
            raise ValidationException(self.integer_message, field=field)
        if self.minimum is not None and number < self.minimum:
            raise ValidationException(self.min_message, field=field)
        if self.maximum is not None and number > self.maximum:
            raise ValidationException(self.max_message, field=field)

        return int(number) if self.integer else number


class ListRule(ValidationStrategy):
    """
    Ordered list of strings with a minimum size.

    Duplicates carry no meaning, so they are dropped (first occurrence kept)
    before counting. An empty list is reported with min_message rather than
    the generic required message.
    """

    def __init__(self, label: str, min_items: int = 1, min_message: str = None, **kwargs):
        super().__init__(label, **kwargs)
        self.min_items = min_items
        self.min_message = min_message or f"Pick at least {min_items} {label.lower()}"

    def treats_as_missing(self, value: Any) -> bool:
        return value is None

    def clean_present(self, value: Any, field: str = None) -> List[str]:
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ValidationException(f"{self.label} must be a list", field=field)

        items: List[str] = []
        for item in value:
            if not isinstance(item, str):
                raise ValidationException(f"{self.label} must be a list of names", field=field)
            if item not in items:
                items.append(item)

        if len(items) < self.min_items:
            raise ValidationException(self.min_message, field=field)
        return items


class BooleanRule(ValidationStrategy):
    """Strict yes/no flag."""

    def treats_as_missing(self, value: Any) -> bool:
        return value is None

    def clean_present(self, value: Any, field: str = None) -> bool:
        if not isinstance(value, bool):
            raise ValidationException(f"{self.label} must be yes or no", field=field)
        return value
