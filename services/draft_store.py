# -*- coding: utf-8 -*-
"""
Draft Store - in-memory enrollment record with debounced persistence.

Holds the authoritative EnrollmentRecord for the running session:
- patch() merges a partial record and schedules a save
- one single-shot QTimer per store; every mutation restarts it, so a burst
  of edits produces one write of the latest record
- the draft is reloaded from storage on construction
- storage failures (load, save, clear) are logged and swallowed; the
  in-memory record stays authoritative
"""

import json
from typing import Any, Dict, Mapping, Optional, Union

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from models.enrollment import EnrollmentRecord
from repositories.draft_repository import DraftStorage
from services.exceptions import DraftStorageException
from utils.logger import get_logger

logger = get_logger(__name__)


class DraftStore(QObject):
    """
    Explicit state container for the enrollment draft.

    Signals:
        record_changed: emitted after every patch/clear with the record dict
        draft_saved: emitted after a successful write to storage
        draft_cleared: emitted after clear()
    """

    record_changed = pyqtSignal(dict)
    draft_saved = pyqtSignal()
    draft_cleared = pyqtSignal()

    def __init__(self, storage: DraftStorage, storage_key: str = None,
                 debounce_ms: int = None, parent: Optional[QObject] = None):
        """
        Initialize the store and restore any persisted draft.

        Args:
            storage: Durable key-value backend
            storage_key: Key holding the draft; defaults to Config.DRAFT_STORAGE_KEY
            debounce_ms: Save delay after the last edit; defaults to Config.DRAFT_SAVE_DEBOUNCE_MS
            parent: Parent QObject
        """
        super().__init__(parent)

        from app.config import Config
        self.storage = storage
        self.storage_key = storage_key or Config.DRAFT_STORAGE_KEY
        self.debounce_ms = Config.DRAFT_SAVE_DEBOUNCE_MS if debounce_ms is None else debounce_ms

        self._record = EnrollmentRecord()

        self._save_timer = QTimer(self)
        self._save_timer.setSingleShot(True)
        self._save_timer.timeout.connect(self._save_now)

        self._stats = {
            'mutations': 0,
            'saves': 0,
            'failed_saves': 0,
        }

        self._record = self._load()

    # =========================================================================
    # Public API
    # =========================================================================

    def get(self) -> EnrollmentRecord:
        """Copy of the current record; mutate through patch()."""
        return self._record.copy()

    def patch(self, partial: Union[Mapping[str, Any], EnrollmentRecord]):
        """
        Shallow-merge a partial record; later keys overwrite.

        Args:
            partial: Field -> value mapping, or a record whose present fields are merged
        """
        if isinstance(partial, EnrollmentRecord):
            partial = partial.present_fields()

        self._record.merge(partial)
        self._stats['mutations'] += 1
        logger.debug(f"Draft patched: {sorted(partial.keys())}")

        self.record_changed.emit(self._record.to_dict())
        self._schedule_save()

    def clear(self):
        """Reset the record and delete the persisted draft."""
        self._save_timer.stop()
        self._record = EnrollmentRecord()

        try:
            self.storage.remove(self.storage_key)
            logger.info("Draft cleared")
        except DraftStorageException as e:
            logger.warning(f"Failed to remove persisted draft: {e}")

        self.record_changed.emit(self._record.to_dict())
        self.draft_cleared.emit()

    def flush(self) -> bool:
        """
        Write a pending save immediately.

        Returns:
            True if a pending save was written
        """
        if not self._save_timer.isActive():
            return False
        self._save_timer.stop()
        return self._save_now()

    @property
    def has_pending_save(self) -> bool:
        return self._save_timer.isActive()

    def get_stats(self) -> Dict[str, int]:
        """Mutation and write counters (writes coalesce mutations)."""
        return dict(self._stats)

    # =========================================================================
    # Persistence
    # =========================================================================

    def _schedule_save(self):
        # start() on an active single-shot timer restarts it, cancelling the pending save
        self._save_timer.start(self.debounce_ms)
        logger.debug(f"Draft save scheduled in {self.debounce_ms}ms")

    def _save_now(self) -> bool:
        try:
            payload = json.dumps(self._record.to_dict(), ensure_ascii=False)
            self.storage.write(self.storage_key, payload)
        except (DraftStorageException, TypeError, ValueError) as e:
            self._stats['failed_saves'] += 1
            logger.warning(f"Failed to save draft: {e}")
            return False

        self._stats['saves'] += 1
        logger.debug(f"Draft saved (#{self._stats['saves']})")
        self.draft_saved.emit()
        return True

    def _load(self) -> EnrollmentRecord:
        """Persisted draft, or an empty record if missing or unreadable."""
        try:
            raw = self.storage.read(self.storage_key)
        except DraftStorageException as e:
            logger.warning(f"Failed to read draft, starting empty: {e}")
            return EnrollmentRecord()

        if raw is None:
            return EnrollmentRecord()

        try:
            record = EnrollmentRecord.from_dict(json.loads(raw))
        except (TypeError, ValueError) as e:
            logger.warning(f"Discarding unreadable draft: {e}")
            return EnrollmentRecord()

        logger.info(f"Draft restored ({len(record.present_fields())} fields)")
        return record
