# -*- coding: utf-8 -*-
"""
Base Controller
===============
Shared plumbing for controllers that run one operation at a time.

An operation is opened with _begin() and closed with _finish(result); the
controller keeps the last OperationResult and mirrors it through signals.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

from PyQt5.QtCore import QObject, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


@dataclass
class OperationResult(Generic[T]):
    """Outcome of a controller operation."""
    success: bool
    data: Optional[T] = None
    message: str = ""
    errors: List[str] = field(default_factory=list)
    retryable: bool = False

    @classmethod
    def ok(cls, data: T = None, message: str = "") -> 'OperationResult[T]':
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str, errors: List[str] = None,
             retryable: bool = False) -> 'OperationResult[T]':
        return cls(success=False, message=message, errors=list(errors or []), retryable=retryable)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "errors": list(self.errors),
            "retryable": self.retryable,
        }


class BaseController(QObject):
    """
    Base controller class.

    Signals:
        operation_started(name)
        operation_completed(name, success)
        operation_error(name, message): only for failed operations
        loading_changed(busy)
    """

    operation_started = pyqtSignal(str)
    operation_completed = pyqtSignal(str, bool)
    operation_error = pyqtSignal(str, str)
    loading_changed = pyqtSignal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._current_operation: Optional[str] = None
        self._last_result: Optional[OperationResult] = None

    @property
    def is_loading(self) -> bool:
        """True while an operation is open."""
        return self._current_operation is not None

    @property
    def last_result(self) -> Optional[OperationResult]:
        return self._last_result

    @property
    def last_error(self) -> str:
        """Message of the last failed operation, empty otherwise."""
        if self._last_result is None or self._last_result.success:
            return ""
        return self._last_result.message

    def _begin(self, operation: str):
        self._current_operation = operation
        self._last_result = None
        logger.debug(f"{self.__class__.__name__}: {operation} started")
        self.operation_started.emit(operation)
        self.loading_changed.emit(True)

    def _finish(self, result: OperationResult):
        operation = self._current_operation or ""
        self._current_operation = None
        self._last_result = result

        if not result.success:
            logger.error(f"{self.__class__.__name__}: {operation} failed: {result.message}")
            self.operation_error.emit(operation, result.message)

        self.operation_completed.emit(operation, result.success)
        self.loading_changed.emit(False)

    def _discard_result(self):
        """Forget the last outcome; refused while an operation is open."""
        if self.is_loading:
            return False
        self._last_result = None
        return True
