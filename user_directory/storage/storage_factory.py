"""
Storage factory: switch storage backend from config (lazy env version)
=====================================================================

Centralizes selection of the persistence backend so the rest of the app
stays ignorant of where users live.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- USERDIR_STORAGE_BACKEND: "json" (default), "memory" or "postgres"
- USERDIR_DATA_FILE:       JSON file path if backend == "json"
- USERDIR_DB_DSN:          DSN string if backend == "postgres"
"""

import logging
import os
from typing import Optional

from user_directory.storage.base import BaseStorage
from user_directory.storage.json_storage import JSONFileStorage
from user_directory.storage.storage import Storage

log = logging.getLogger("userdir.storage")


def get_storage(backend: Optional[str] = None, **kwargs) -> BaseStorage:
    """
    Return a storage backend based on configuration.

    Parameters
    ----------
    backend : str, optional
        "json", "memory" or "postgres". If omitted, reads USERDIR_STORAGE_BACKEND.
    kwargs : dict
        Extra args for the backend: path="..." for json, dsn="..." for postgres.

    Returns
    -------
    BaseStorage-compatible instance
    """
    be = (backend or os.getenv("USERDIR_STORAGE_BACKEND", "json")).strip().lower()
    log.info("Selected storage backend: %r", be)

    if be == "memory":
        return Storage()

    if be == "json":
        path = kwargs.get("path") or os.getenv("USERDIR_DATA_FILE", "users.json")
        return JSONFileStorage(path)

    if be == "postgres":
        dsn = kwargs.get("dsn") or os.getenv("USERDIR_DB_DSN", "")
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env USERDIR_DB_DSN)")
        # Local import to avoid hard dependency when not using postgres
        from user_directory.storage.db_storage import DBStorage
        return DBStorage(dsn=dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")
