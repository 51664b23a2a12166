"""Per-collection mutual exclusion for writes, clears and undos."""
import threading
from contextlib import contextmanager

from app.models.record import Collection


class CollectionLocks:
    """Lazily creates one lock per collection; different collections never contend."""

    def __init__(self):
        self._locks: dict[Collection, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, collection: Collection) -> threading.Lock:
        collection = Collection(collection)
        with self._guard:
            if collection not in self._locks:
                self._locks[collection] = threading.Lock()
            return self._locks[collection]

    @contextmanager
    def hold(self, collection: Collection):
        with self.get(collection):
            yield
