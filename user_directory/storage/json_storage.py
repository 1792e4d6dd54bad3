"""
JSONFileStorage: file-backed storage for the User Directory
==========================================================

The whole collection lives in one JSON document: a list of objects with the
fields `username`, `real_name`, `email` and `created_by`, in insertion order.

Key Design Points
-----------------
- **Tolerant load**: a missing file, invalid JSON, or any record that fails
  validation makes the file count as "no data yet". Startup never fails
  because of the backing file.
- **Atomic save**: the document is written to a sibling temp file and moved
  over the target with `os.replace`, so a crash mid-write leaves either the
  old or the new document, never a truncated one.
- **No locking here**: callers (DirectoryStore) serialize saves under their
  own lock.

Example
-------
>>> storage = JSONFileStorage("users.json")
>>> storage.save([User(username="bob", real_name="Bob B", email="bob@x.com", created_by="alice")])
>>> storage.load()[0].created_by
'alice'
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import TypeAdapter, ValidationError

from ..errors import PersistenceFailure
from ..models import User
from .base import BaseStorage

log = logging.getLogger("userdir.storage")

_USER_LIST = TypeAdapter(List[User])


class JSONFileStorage(BaseStorage):
    """JSON file implementation of the storage contract.

    Parameters
    ----------
    path : str or Path
        Location of the backing file. Parent directories are created on save.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> List[User]:
        """Return stored users, or an empty list if the file is absent or unparseable."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.info("No user file at %s; starting with an empty directory", self.path)
            return []
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Could not read %s (%s); starting with an empty directory", self.path, exc)
            return []

        try:
            users = _USER_LIST.validate_json(raw)
        except ValidationError as exc:
            log.warning(
                "User file %s is not a valid user list (%d errors); starting with an empty directory",
                self.path,
                exc.error_count(),
            )
            return []

        log.info("Loaded %d users from %s", len(users), self.path)
        return users

    def save(self, users: Sequence[User]) -> None:
        """Serialize the full collection and atomically replace the backing file."""
        payload = json.dumps([u.model_dump() for u in users], indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            log.error("Failed to write %d users to %s: %s", len(users), self.path, exc)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceFailure() from exc
