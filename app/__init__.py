# -*- coding: utf-8 -*-
"""
Enrollment Wizard Application Core Module
"""

from .config import Config

__all__ = ["Config"]
