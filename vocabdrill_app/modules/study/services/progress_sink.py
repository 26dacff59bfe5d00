"""
Progress Sink - batches progress writes.

Every ``flush_every``-th record sends the whole buffer to the store; the
caller flushes explicitly at session end. A failed flush is logged and the
batch is dropped. The buffer is plain dicts so it can be stored with the
session between requests.
"""

import logging
from typing import Any, Dict, List, Optional

from .study_store import StudyStore

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_EVERY = 5


class ProgressSink:

    def __init__(
        self,
        store: StudyStore,
        user_id: int,
        flush_every: int = DEFAULT_FLUSH_EVERY,
        pending: Optional[List[Dict[str, Any]]] = None
    ):
        self.store = store
        self.user_id = user_id
        self.flush_every = max(1, int(flush_every))
        self.pending: List[Dict[str, Any]] = list(pending or [])

    def record(self, update: Dict[str, Any]) -> bool:
        """Buffer one update. Returns True when this record triggered a flush."""
        self.pending.append(dict(update))
        if len(self.pending) >= self.flush_every:
            self.flush()
            return True
        return False

    def flush(self) -> int:
        """Send everything buffered. Returns the number of updates sent."""
        if not self.pending:
            return 0
        batch, self.pending = self.pending, []
        if not self.store.save_progress(self.user_id, batch):
            logger.warning("Progress flush failed for user %s, %s updates dropped", self.user_id, len(batch))
        return len(batch)

    def __len__(self) -> int:
        return len(self.pending)
