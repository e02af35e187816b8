"""Repository pattern over the record store.

BaseRepository binds one table (and optionally one id family) and provides
the raw operations. OwnedRepository adds the ownership guard so that every
per-user lookup in every service goes through the same read boundary.
"""
import logging
from typing import Any, Callable, ContextManager, Generic, Hashable, Optional, Tuple, TypeVar

from mindtrack.shared.models import NotFoundError
from mindtrack.shared.security import OwnershipGuard
from .record_store import RecordStore, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Typed access to one table of the record store."""

    def __init__(
        self,
        store: RecordStore,
        table_name: str,
        family: Optional[str] = None,
    ):
        """Initialize repository.

        Args:
            store: Backing record store
            table_name: Table holding this record type
            family: Id counter name, for tables with allocated ids
        """
        self.store = store
        self.table_name = table_name
        self.family = family

        logger.info(
            "REPOSITORY_INITIALIZED",
            extra={"table_name": table_name, "family": family}
        )

    def find(self, key: Hashable) -> Optional[T]:
        """Raw lookup with no ownership check."""
        return self.store.get(self.table_name, key)

    def exists(self, key: Hashable) -> bool:
        return self.store.exists(self.table_name, key)

    def transaction(self) -> ContextManager[None]:
        """Operation scope on the backing store, see RecordStore.transaction()."""
        return self.store.transaction()

    def save(self, key: Hashable, record: T) -> T:
        self.store.put(self.table_name, key, record)
        return record

    def create(self, build: Callable[[int], Tuple[Hashable, T]]) -> int:
        """Allocate the next family id and insert the record built for it.

        Raises:
            StoreError: If the repository has no id family
        """
        if self.family is None:
            raise StoreError(f"Table {self.table_name} has no id family")
        return self.store.insert_with_next_id(self.family, self.table_name, build)

    def counter(self) -> int:
        if self.family is None:
            return 0
        return self.store.counter(self.family)


class OwnedRepository(BaseRepository[T]):
    """Repository for per-user records. Reads hide other owners' records."""

    def __init__(
        self,
        store: RecordStore,
        guard: OwnershipGuard,
        table_name: str,
        family: Optional[str] = None,
    ):
        super().__init__(store, table_name, family)
        self.guard = guard

    def find_for(self, caller: str, key: Hashable) -> Optional[T]:
        """Lookup through the ownership guard: None if missing or not owned."""
        return self.guard.authorize_read(caller, self.find(key))

    def get_for(self, caller: str, key: Hashable) -> T:
        """Like find_for() but raises NotFoundError on absence."""
        record = self.find_for(caller, key)
        if record is None:
            raise NotFoundError(f"No {self.table_name} record for key {key!r}")
        return record

    def get_for_write(self, caller: str, key: Hashable) -> T:
        """Lookup for a mutation the caller addresses by a known id.

        Raises:
            NotFoundError: If no record exists at ``key``
            NotAuthorizedError: If the record belongs to another owner
        """
        record: Any = self.find(key)
        if record is None:
            raise NotFoundError(f"No {self.table_name} record for key {key!r}")
        self.guard.authorize_write(caller, record.owner)
        return record
