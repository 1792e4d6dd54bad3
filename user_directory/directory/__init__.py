from .addressing import BaseAddressing, PositionalAddressing
from .store import DirectoryStore

__all__ = ["BaseAddressing", "PositionalAddressing", "DirectoryStore"]
