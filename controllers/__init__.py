# -*- coding: utf-8 -*-
"""
Enrollment Controllers
======================
Controller layer between the wizard and the services.

Controllers provide:
- Standardized results via OperationResult
- Qt signals for UI updates
- Observable state for long-running operations

Usage:
    from controllers import SubmissionController

    controller = SubmissionController(service)
    controller.submission_failed.connect(show_retry_banner)
    controller.submit(payload)
"""

# Base controller and result types
from controllers.base_controller import (
    BaseController,
    OperationResult,
)

from controllers.submission_controller import (
    SubmissionController,
    SubmissionState,
)

# All public exports
__all__ = [
    # Base
    "BaseController",
    "OperationResult",

    # Submission
    "SubmissionController",
    "SubmissionState",
]
