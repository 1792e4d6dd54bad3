"""
DirectoryStore module for the User Directory.

Responsibilities:
    - Own the authoritative, ordered, in-memory collection of users
    - Expose list/get/create/update/delete as the only way to touch it
    - Enforce ownership (`created_by`) on update and delete
    - Write the full collection through to the storage backend on every mutation

Design notes:
    - One `threading.Lock` guards the collection. FastAPI runs sync endpoints
      in a thread pool, so every operation (reads included) takes the lock;
      readers see the state before or after a mutation, never a partial one.
    - Bounds and ownership checks run in the same critical section as the
      change they guard.
    - Persistence is synchronous and happens while the lock is held, so the
      file on disk always reflects a prefix of the mutation history.
    - Rollback on persistence failure: a mutation is applied to a working
      copy, the copy is saved, and only a successful save publishes it. A
      failed save leaves memory exactly as it was and raises
      PersistenceFailure. Create, update and delete share this path.
    - Session resolution happens before the store is called; the store
      never calls back into the session authority.

LLM Prompt Example:
    "Explain how a copy-then-publish pattern under a single lock keeps an
    in-memory list and its JSON mirror consistent when the write can fail."
"""

import logging
import threading
from typing import Callable, List, Optional, Sequence

from ..errors import Forbidden
from ..models import User, UserFields, UserUpdate
from ..storage.base import BaseStorage
from .addressing import BaseAddressing, PositionalAddressing

log = logging.getLogger("userdir.store")


class DirectoryStore:
    """Thread-safe, write-through user collection."""

    def __init__(
        self,
        storage: BaseStorage,
        users: Optional[Sequence[User]] = None,
        addressing: Optional[BaseAddressing] = None,
    ):
        """
        Args:
            storage (BaseStorage): Backend receiving the full collection after each mutation.
            users (Optional[Sequence[User]]): Initial collection (normally from storage.load()).
            addressing (Optional[BaseAddressing]): Address resolution scheme; positional by default.
        """
        self.storage = storage
        self.addressing = addressing or PositionalAddressing()
        self._users: List[User] = [u.model_copy() for u in users or []]
        self._lock = threading.Lock()

    @classmethod
    def from_storage(cls, storage: BaseStorage, **kwargs) -> "DirectoryStore":
        """Build a store from whatever the backend currently holds."""
        users = storage.load()
        log.info("Directory initialized with %d users", len(users))
        return cls(storage, users=users, **kwargs)

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    def _commit(self, mutate: Callable[[List[User]], None]) -> None:
        """
        Apply `mutate` to a copy of the collection, persist it, then publish it.

        Must be called with `self._lock` held. If `storage.save` raises, the
        live collection is untouched and the exception propagates.
        """
        working = list(self._users)
        mutate(working)
        self.storage.save(working)
        self._users = working

    def _owned(self, identity: str, index: int) -> int:
        """Locate `index` and check it belongs to `identity`. Lock must be held."""
        pos = self.addressing.locate(self._users, index)
        if self._users[pos].created_by != identity:
            log.info("Identity %r may not modify user at index %d", identity, index)
            raise Forbidden()
        return pos

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def list_users(self) -> List[User]:
        """Snapshot of the collection in insertion order."""
        with self._lock:
            return [u.model_copy() for u in self._users]

    def get_user(self, index: int) -> User:
        """
        Return a copy of the user at `index`.

        Raises:
            NotFound: If `index` is out of range.
        """
        with self._lock:
            pos = self.addressing.locate(self._users, index)
            return self._users[pos].model_copy()

    def create_user(self, identity: str, fields: UserFields) -> User:
        """
        Append a user owned by `identity` and persist the collection.

        Duplicate usernames are accepted.

        Raises:
            PersistenceFailure: If the backend write fails (nothing is appended).
        """
        user = User(created_by=identity, **fields.model_dump())
        with self._lock:
            self._commit(lambda users: users.append(user))
            log.info("User %r created by %r at index %d", user.username, identity, len(self._users) - 1)
        return user.model_copy()

    def update_user(self, identity: str, index: int, changes: UserUpdate) -> User:
        """
        Apply the non-null fields of `changes` to the user at `index`.

        Raises:
            NotFound: If `index` is out of range.
            Forbidden: If the record was created by another identity.
            PersistenceFailure: If the backend write fails (record unchanged).
        """
        with self._lock:
            pos = self._owned(identity, index)
            updated = self._users[pos].model_copy(update=changes.model_dump(exclude_none=True))

            def _replace(users: List[User]) -> None:
                users[pos] = updated

            self._commit(_replace)
            log.info("User at index %d updated by %r", index, identity)
            return updated.model_copy()

    def delete_user(self, identity: str, index: int) -> None:
        """
        Remove the user at `index`; later users shift down by one.

        Raises:
            NotFound: If `index` is out of range.
            Forbidden: If the record was created by another identity.
            PersistenceFailure: If the backend write fails (record kept).
        """
        with self._lock:
            pos = self._owned(identity, index)
            self._commit(lambda users: users.pop(pos))
            log.info("User at index %d deleted by %r", index, identity)
