"""
user_directory package initializer.
"""

from . import directory
from . import sessions
from . import storage

__all__ = ["directory", "sessions", "storage"]
