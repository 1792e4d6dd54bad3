"""
Base storage interface for the User Directory.

Purpose:
    Define the persistence contract every backend (in-memory, JSON file,
    Postgres) implements. The contract is deliberately whole-collection:
    `load` reads everything once at startup and `save` rewrites everything
    after each successful mutation. There are no partial or append updates.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.

LLM Prompt Example:
    "Show how a narrow, whole-collection storage interface lets a service swap
    a JSON file for a database without touching its locking or API code."
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models import User


class BaseStorage(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod  # pragma: no cover
    def load(self) -> List[User]:
        """
        Read the full user collection from the backing store.

        Returns:
            List[User]: Stored records in insertion order. An absent or
            unreadable backing store yields an empty list; this method
            never raises.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def save(self, users: Sequence[User]) -> None:
        """
        Overwrite the backing store with the full collection.

        Raises:
            PersistenceFailure: If the write could not be completed.
        """
        raise NotImplementedError
