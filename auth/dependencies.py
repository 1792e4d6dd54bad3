"""
FastAPI dependency functions for authentication.

These can be used in routes with Depends() to protect endpoints. The store
and the authority live on `app.state` (one per app built by `create_app`),
so dependencies reach them through the request rather than module globals.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from user_directory.directory.store import DirectoryStore
from user_directory.sessions.authority import SessionAuthority

from .config import TOKEN_HEADER
from .service import authenticate_token

# Token header scheme; missing headers are reported by the authority, not FastAPI
token_header = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


def get_store(request: Request) -> DirectoryStore:
    return request.app.state.store


def get_authority(request: Request) -> SessionAuthority:
    return request.app.state.authority


def get_current_identity(
    token: Optional[str] = Depends(token_header),
    authority: SessionAuthority = Depends(get_authority),
) -> str:
    """
    Dependency that resolves the session token header to an identity.

    Returns:
        str: The username the token was minted for.

    Raises:
        Unauthenticated: Missing or unknown token (401 via the app's error handler).
    """
    return authenticate_token(authority, token)
