"""Persistence backends for the user collection."""

from .base import BaseStorage
from .json_storage import JSONFileStorage
from .storage import Storage
from .storage_factory import get_storage

__all__ = ["BaseStorage", "JSONFileStorage", "Storage", "get_storage"]
