from __future__ import annotations

import json
from typing import Iterator, Optional

from ..app_logger import get_logger
from ..attendance.model import CellKey, PendingChange
from ..core.constants import QUEUE_CACHE_KEY
from ..core.exceptions import ConfigurationError, RemoteError
from ..core.outcome import Outcome
from ..remote.repository import RemoteDataSource
from ..storage.local import LocalStorage

logger = get_logger(__name__)


class PendingChangeQueue:
    """Ordered attendance edits still to be pushed, at most one per cell.

    The queue is rewritten to local storage on every change and read back once
    at start-up, so edits made offline survive restarts until a flush succeeds.
    """

    def __init__(self, storage: LocalStorage, *, key: str = QUEUE_CACHE_KEY):
        self._storage = storage
        self._key = key
        self._items: list[PendingChange] = []

    def load(self) -> None:
        raw = self._storage.read(self._key)
        if not raw:
            return
        try:
            parsed = json.loads(raw)
            items = [PendingChange.from_dict(p) for p in parsed] if isinstance(parsed, list) else []
        except (ValueError, KeyError, TypeError):
            logger.exception("Error loading offline queue")
            return
        if items:
            self._items = items

    def _persist(self) -> None:
        self._storage.write(self._key, json.dumps([c.to_dict() for c in self._items], ensure_ascii=False))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PendingChange]:
        return iter(list(self._items))

    def items(self) -> list[PendingChange]:
        return list(self._items)

    def get(self, key: CellKey) -> Optional[PendingChange]:
        for change in self._items:
            if change.key == key:
                return change
        return None

    def is_pending(self, student_id: str, date: str, lesson_index: int) -> bool:
        return self.get((student_id, date, lesson_index)) is not None

    def enqueue(self, change: PendingChange) -> None:
        """Drop any entry for the same cell, then append: the latest edit wins."""
        self._items = [c for c in self._items if c.key != change.key]
        self._items.append(change)
        self._persist()

    def clear(self) -> None:
        self._items = []
        self._persist()

    def flush(self, remote: RemoteDataSource, *, online: bool) -> Outcome:
        if not self._items:
            return Outcome.ok("Nenhuma alteração pendente")
        if not online:
            return Outcome.queued_offline(
                "Você está OFFLINE. As alterações foram salvas no dispositivo e permanecem na fila."
            )

        batch = list(self._items)
        try:
            remote.save_attendance_batch(batch)
        except (RemoteError, ConfigurationError) as e:
            logger.error("Sync error: %s", e)
            return Outcome.failed("Erro ao sincronizar dados. Tente novamente.")

        # Edits that arrived while the batch was in flight stay queued.
        sent = set(batch)
        self._items = [c for c in self._items if c not in sent]
        self._persist()
        logger.info("Flushed %d attendance change(s)", len(batch))
        return Outcome.ok(f"{len(batch)} alteração(ões) sincronizada(s)")
