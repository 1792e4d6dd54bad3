"""
Storage module for the User Directory (in-memory implementation).

Design:
    - Reference implementation of the BaseStorage contract that never touches disk.
    - Keeps the last saved snapshot so tests can simulate a process restart by
      building a fresh DirectoryStore from the same Storage.
    - `fail_saves` lets tests drive the persistence-failure path without mocks.
"""

from typing import Iterable, List, Optional, Sequence

from ..errors import PersistenceFailure
from ..models import User
from .base import BaseStorage


class Storage(BaseStorage):
    def __init__(self, users: Optional[Iterable[User]] = None):
        """
        Initialize storage, optionally seeded with records.

        Internal schema:
            self.users = [User, ...]   # last saved snapshot, insertion order
            self.save_count = int      # successful saves so far
        """
        self.users: List[User] = [u.model_copy() for u in users or []]
        self.save_count = 0
        self.fail_saves = False

    def load(self) -> List[User]:
        return [u.model_copy() for u in self.users]

    def save(self, users: Sequence[User]) -> None:
        if self.fail_saves:
            raise PersistenceFailure("In-memory storage is configured to fail")
        self.users = [u.model_copy() for u in users]
        self.save_count += 1
