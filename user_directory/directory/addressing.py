"""
Addressing schemes for directory records.

A client names a record by an *address*; the addressing scheme turns that
address into a position in the current collection. Today the only scheme is
positional: the address is the record's index at the moment of the request,
so deleting record i shifts every later record down by one. The store only
talks to `BaseAddressing`, so a stable-id scheme can be dropped in later
without touching the store's callers.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..errors import NotFound
from ..models import User


class BaseAddressing(ABC):
    @abstractmethod  # pragma: no cover
    def locate(self, users: Sequence[User], address: int) -> int:
        """Return the list position for `address` or raise NotFound."""
        raise NotImplementedError


class PositionalAddressing(BaseAddressing):
    """Address == current list index. Negative indices are out of range."""

    def locate(self, users: Sequence[User], address: int) -> int:
        if 0 <= address < len(users):
            return address
        raise NotFound()
