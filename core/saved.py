# core/saved.py
import json
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, FrozenSet, Iterable, List, Optional, Set, Union

from .config import SAVED_ITEMS_KEY
from .errors import StorageError
from .logger import get_logger

logger = get_logger(__name__)

ItemId = Union[str, int]


def _is_item_id(value: Any) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def _check_item_id(value: Any) -> None:
    # Only ids that survive a JSON round trip unchanged may be saved
    if not _is_item_id(value):
        raise TypeError(f"Saved item ids must be str or int, got {type(value).__name__}")


class SavedItemsStore:
    """
    The user's saved toys: a set of item ids mirrored into key-value storage.

    Mutations apply to memory immediately; each one then schedules a write of
    the whole set. Writes run one at a time in submission order, so the last
    mutation's snapshot is what ends up in storage. The returned Future
    resolves to True when the write landed and False when storage failed;
    storage failures are logged and never undo the in-memory change.

    `storage` needs `get(key)` and `set(key, value)`; StorageError and
    OSError from either are logged and swallowed.
    """

    def __init__(
        self,
        storage,
        key: str = SAVED_ITEMS_KEY,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.storage = storage
        self.key = key
        self._ids: Set[ItemId] = set()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="saved-items"
        )
        self._pending: List[Future] = []

    def __enter__(self) -> "SavedItemsStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __contains__(self, item_id: ItemId) -> bool:
        return self.is_saved(item_id)

    def __len__(self) -> int:
        return len(self._ids)

    def load(self) -> FrozenSet[ItemId]:
        """Replace the in-memory set with what storage holds; empty on any failure."""
        try:
            raw = self.storage.get(self.key)
        except (StorageError, OSError) as e:
            logger.error("Error loading saved items: %s", e)
            raw = None

        ids: Set[ItemId] = set()
        if raw is not None:
            try:
                data = json.loads(raw)
            except (TypeError, ValueError) as e:
                logger.error("Saved items under %r are not valid JSON: %s", self.key, e)
                data = []
            if isinstance(data, list):
                ids = {x for x in data if _is_item_id(x)}
                if len(ids) != len(data):
                    logger.warning(
                        "Dropped %d duplicate or invalid saved ids under %r",
                        len(data) - len(ids), self.key,
                    )
            else:
                logger.error("Saved items under %r must be a JSON array, got %s", self.key, type(data).__name__)

        self._ids = ids
        logger.info("Loaded %d saved items.", len(ids))
        return frozenset(ids)

    def is_saved(self, item_id: ItemId) -> bool:
        return item_id in self._ids

    def saved_ids(self) -> FrozenSet[ItemId]:
        return frozenset(self._ids)

    def toggle(self, item_id: ItemId) -> Future:
        _check_item_id(item_id)
        if item_id in self._ids:
            self._ids.discard(item_id)
            logger.debug("Unsaved %r", item_id)
        else:
            self._ids.add(item_id)
            logger.debug("Saved %r", item_id)
        return self._schedule_persist()

    def remove_many(self, item_ids: Iterable[ItemId]) -> Future:
        item_ids = list(item_ids)
        for iid in item_ids:
            _check_item_id(iid)
        removed = 0
        for iid in item_ids:
            if iid in self._ids:
                self._ids.discard(iid)
                removed += 1
        logger.debug("Removed %d saved items", removed)
        return self._schedule_persist()

    def clear(self) -> Future:
        self._ids.clear()
        return self._schedule_persist()

    def flush(self) -> None:
        """Block until every scheduled write has finished."""
        pending, self._pending = self._pending, []
        for fut in pending:
            fut.result()

    def close(self) -> None:
        self.flush()
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def _schedule_persist(self) -> Future:
        snapshot = sorted(self._ids, key=str)
        fut = self._executor.submit(self._persist, snapshot)
        self._pending = [f for f in self._pending if not f.done()]
        self._pending.append(fut)
        return fut

    def _persist(self, snapshot: List[Any]) -> bool:
        try:
            self.storage.set(self.key, json.dumps(snapshot))
        except (StorageError, OSError, TypeError, ValueError) as e:
            logger.error("Error saving items: %s", e)
            return False
        logger.debug("Persisted %d saved items under %r", len(snapshot), self.key)
        return True
