"""Key-value record store with per-family id counters.

The store is the persistence collaborator of the entity services. It knows
nothing about owners or validation; it maps (table, key) to a record and
keeps one monotonically increasing counter per entity family.

Counters are only advanced by insert_with_next_id(), which allocates the id
and writes the record in the same critical section: an id is never handed
out without its record, and a failed build leaves the counter untouched.
"""
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, ContextManager, Dict, Hashable, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

RecordBuilder = Callable[[int], Tuple[Hashable, Any]]


class StoreError(Exception):
    """Record store misuse (unknown table, duplicate insert)."""
    pass


class RecordStore(ABC):
    """Abstract record store."""

    @abstractmethod
    def get(self, table: str, key: Hashable) -> Optional[Any]:
        pass

    @abstractmethod
    def put(self, table: str, key: Hashable, record: Any) -> None:
        pass

    @abstractmethod
    def exists(self, table: str, key: Hashable) -> bool:
        pass

    @abstractmethod
    def counter(self, family: str) -> int:
        """Current value of a family counter; 0 before the first creation."""
        pass

    @abstractmethod
    def insert_with_next_id(
        self,
        family: str,
        table: str,
        build: RecordBuilder,
    ) -> int:
        """Allocate the next id of ``family`` and insert the record built for it.

        Args:
            family: Counter name
            table: Destination table
            build: Called with the new id, returns (key, record)

        Returns:
            The allocated id
        """
        pass

    @abstractmethod
    def transaction(self) -> ContextManager[None]:
        """Scope one service operation.

        Usage:
            with store.transaction():
                record = store.get(table, key)
                store.put(table, key, replace(record, ...))

        No other operation touches the store while the scope is open, so a
        read followed by a write cannot lose a concurrent update.
        """
        pass


class InMemoryRecordStore(RecordStore):
    """Process-local store for development and tests.

    A single re-entrant lock guards every method. transaction() holds the
    same lock, so store calls made inside it by the owning thread nest, and
    every other thread waits until the scope exits.
    """

    def __init__(self):
        self._tables: Dict[str, Dict[Hashable, Any]] = {}
        self._counters: Dict[str, int] = {}
        self._lock = threading.RLock()

        logger.info("RECORD_STORE_INITIALIZED", extra={"backend": "memory"})

    def get(self, table: str, key: Hashable) -> Optional[Any]:
        with self._lock:
            return self._tables.get(table, {}).get(key)

    def put(self, table: str, key: Hashable, record: Any) -> None:
        with self._lock:
            self._tables.setdefault(table, {})[key] = record

    def exists(self, table: str, key: Hashable) -> bool:
        with self._lock:
            return key in self._tables.get(table, {})

    def counter(self, family: str) -> int:
        with self._lock:
            return self._counters.get(family, 0)

    def insert_with_next_id(
        self,
        family: str,
        table: str,
        build: RecordBuilder,
    ) -> int:
        with self._lock:
            new_id = self._counters.get(family, 0)
            key, record = build(new_id)

            rows = self._tables.setdefault(table, {})
            if key in rows:
                logger.error(
                    "RECORD_STORE_DUPLICATE_KEY",
                    extra={"table": table, "family": family, "id": new_id}
                )
                raise StoreError(f"Duplicate key in {table} for id {new_id}")

            rows[key] = record
            self._counters[family] = new_id + 1

        logger.debug(
            "RECORD_STORE_INSERTED",
            extra={"table": table, "family": family, "id": new_id}
        )
        return new_id

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield
