"""
Session authority for the User Directory.

Responsibilities:
    - Mint opaque session tokens bound to a claimed username
    - Resolve a presented token back to that username on every authorized call

Design:
    - No credential check: any username (even empty) gets a fresh token.
    - The session table is append-only; entries never expire and are never
      revoked. Each entry records when it was minted so expiry can be added
      later without changing `resolve`.
    - Tokens are 128 bits from `secrets`, hex encoded. Two logins for the same
      username produce two independent tokens.
    - The table has its own lock, independent of the directory lock, so
      resolving a token never waits on a directory write.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional

from ..errors import Unauthenticated
from .tokens import generate_token, mask_token

log = logging.getLogger("userdir.sessions")


@dataclass(frozen=True)
class SessionEntry:
    identity: str
    created_at: float


class SessionAuthority:
    def __init__(self):
        self._sessions: Dict[str, SessionEntry] = {}
        self._lock = threading.Lock()

    def mint(self, identity: str) -> str:
        """Bind a new token to `identity` and return it."""
        token = generate_token()
        entry = SessionEntry(identity=identity, created_at=time.time())
        with self._lock:
            self._sessions[token] = entry
        log.info("Session %s minted for %r", mask_token(token), identity)
        return token

    def resolve(self, token: Optional[str]) -> str:
        """
        Return the identity bound to `token`.

        Raises:
            Unauthenticated: If the token is missing, empty or unknown.
        """
        if not token:
            raise Unauthenticated("Missing session token")
        with self._lock:
            entry = self._sessions.get(token)
        if entry is None:
            log.info("Rejected unknown session token %s", mask_token(token))
            raise Unauthenticated("Invalid session token")
        return entry.identity

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
