# -*- coding: utf-8 -*-
"""
Enrollment Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "DraftStore",
    "ReviewAssembler",
    "LocationLookupService",
    "SubjectCatalog",
    "SubmissionService",
    "EnrollmentValidator",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "DraftStore":
        from .draft_store import DraftStore
        return DraftStore
    elif name == "ReviewAssembler":
        from .review_assembler import ReviewAssembler
        return ReviewAssembler
    elif name == "LocationLookupService":
        from .location_lookup import LocationLookupService
        return LocationLookupService
    elif name == "SubjectCatalog":
        from .subject_catalog import SubjectCatalog
        return SubjectCatalog
    elif name == "SubmissionService":
        from .submission_service import SubmissionService
        return SubmissionService
    elif name == "EnrollmentValidator":
        from .validation.enrollment_validator import EnrollmentValidator
        return EnrollmentValidator
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
