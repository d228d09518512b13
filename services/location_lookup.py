# -*- coding: utf-8 -*-
"""
PIN code to state/city lookup used to pre-fill the address step.

The result is a suggestion only: the wizard never overwrites what the user
typed afterwards, and an unknown PIN simply yields nothing.
"""

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

PIN_CODE_RE = re.compile(r"^\d{6}$")


@dataclass(frozen=True)
class Location:
    state: str
    city: str

    def to_dict(self) -> Dict[str, str]:
        return {"state": self.state, "city": self.city}


DEFAULT_PIN_TABLE: Dict[str, Location] = {
    "110001": Location("Delhi", "New Delhi"),
    "400001": Location("Maharashtra", "Mumbai"),
    "560001": Location("Karnataka", "Bengaluru"),
    "700001": Location("West Bengal", "Kolkata"),
    "600001": Location("Tamil Nadu", "Chennai"),
}


class LocationLookupService:
    """Resolves a 6-digit PIN code to a state/city pair."""

    def __init__(self, table: Optional[Mapping[str, Location]] = None):
        self._table = dict(DEFAULT_PIN_TABLE if table is None else table)

    def lookup(self, pin_code: Optional[str]) -> Optional[Location]:
        """Known location for a well-formed PIN code, else None."""
        if not pin_code or not PIN_CODE_RE.match(pin_code):
            return None
        return self._table.get(pin_code)
