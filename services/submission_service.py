# -*- coding: utf-8 -*-
"""
Submission services - hand the validated payload to its destination.

Submission is asynchronous: submit() returns at once and the service later
emits exactly one of `succeeded` (response dict) or `failed` (message).

- SimulatedSubmissionService: settles after a fixed delay on the Qt event
  loop; can be told to fail to exercise the retry path.
- HttpSubmissionService: POSTs the payload as JSON on a background QThread.
"""

from abc import ABCMeta, abstractmethod
from functools import partial
from typing import Any, Dict, List, Optional

import requests
from PyQt5.QtCore import QObject, QThread, QTimer, pyqtSignal

from models.enrollment import EnrollmentPayload
from services.exceptions import NetworkException, SubmissionException
from utils.logger import get_logger

logger = get_logger(__name__)


# Combine PyQt5 metaclass with ABC metaclass
class ABCQObjectMeta(type(QObject), ABCMeta):
    """Metaclass that combines PyQt5's metaclass with ABC."""
    pass


class SubmissionService(QObject, metaclass=ABCQObjectMeta):
    """Asynchronous sink for validated enrollments."""

    succeeded = pyqtSignal(dict)
    failed = pyqtSignal(str)

    @abstractmethod
    def submit(self, payload: EnrollmentPayload):
        """Start submitting; the outcome arrives through a signal."""
        pass


class SimulatedSubmissionService(SubmissionService):
    """Always succeeds after a fixed delay unless told to fail."""

    def __init__(self, delay_ms: int = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        from app.config import Config
        self.delay_ms = Config.SUBMISSION_DELAY_MS if delay_ms is None else delay_ms
        self.fail_with: Optional[str] = None
        self.submitted: list = []

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._settle)
        self._pending: Optional[Dict[str, Any]] = None

    def submit(self, payload: EnrollmentPayload):
        self._pending = payload.to_dict()
        logger.info(f"Simulated submission started ({self.delay_ms}ms)")
        self._timer.start(self.delay_ms)

    def _settle(self):
        body, self._pending = self._pending, None
        if self.fail_with:
            logger.warning(f"Simulated submission failed: {self.fail_with}")
            self.failed.emit(self.fail_with)
            return
        self.submitted.append(body)
        self.succeeded.emit({"status": "received", "enrollment": body})


def post_enrollment(url: str, body: Dict[str, Any], timeout: int) -> Dict[str, Any]:
    """
    POST an enrollment and return the decoded response.

    Raises:
        NetworkException: connection problem or timeout
        SubmissionException: server answered with an error status
    """
    try:
        response = requests.post(url, json=body, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise NetworkException(f"Could not reach enrollment service: {e}", original_error=e) from e

    if response.status_code >= 400:
        try:
            data = response.json()
        except ValueError:
            data = {}
        message = data.get("message") or data.get("detail") or response.reason or "Submission rejected"
        raise SubmissionException(str(message), status_code=response.status_code, response_data=data)

    try:
        return response.json()
    except ValueError:
        return {}


class _SubmissionWorker(QThread):
    """
    Background worker that performs the HTTP request.

    The outcome is stored on the worker; the owning service reads it once
    the thread has finished.
    """

    def __init__(self, url: str, body: Dict[str, Any], timeout: int):
        super().__init__()
        self.url = url
        self.body = body
        self.timeout = timeout
        self.response: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None

    def run(self):
        try:
            result = post_enrollment(self.url, self.body, self.timeout)
        except (NetworkException, SubmissionException) as e:
            self.error = str(e)
            return
        self.response = result if isinstance(result, dict) else {"response": result}


class HttpSubmissionService(SubmissionService):
    """
    Posts enrollments to the configured HTTP endpoint.

    Every submit gets its own worker. The outcome is emitted from the
    worker's `finished` signal, so the thread has stopped before anyone can
    retry, and the worker is released with deleteLater().
    """

    def __init__(self, url: str = None, timeout: int = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        from app.config import Config, get_submission_url
        self.url = get_submission_url(url)
        self.timeout = Config.SUBMISSION_TIMEOUT if timeout is None else timeout
        self._workers: List[_SubmissionWorker] = []

    @property
    def active_workers(self) -> int:
        return len(self._workers)

    def submit(self, payload: EnrollmentPayload):
        logger.info(f"Submitting enrollment to {self.url}")
        worker = _SubmissionWorker(self.url, payload.to_dict(), self.timeout)
        worker.finished.connect(partial(self._on_worker_finished, worker))
        self._workers.append(worker)
        worker.start()

    def _on_worker_finished(self, worker: _SubmissionWorker):
        self._workers.remove(worker)
        worker.deleteLater()

        if worker.error is not None:
            logger.error(f"Enrollment submission failed: {worker.error}")
            self.failed.emit(worker.error)
            return

        logger.info("Enrollment accepted by server")
        self.succeeded.emit(worker.response or {})


def create_submission_service(parent: Optional[QObject] = None) -> SubmissionService:
    """Service selected by Config.SUBMISSION_MODE."""
    from app.config import Config
    if Config.SUBMISSION_MODE == "http":
        return HttpSubmissionService(parent=parent)
    return SimulatedSubmissionService(parent=parent)
