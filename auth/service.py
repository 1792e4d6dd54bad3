"""
Core authentication logic.

Thin wrappers over SessionAuthority that speak in API schemas. There is no
credential check: logging in only binds a new token to the claimed username.
"""

from typing import Optional

from user_directory.sessions.authority import SessionAuthority

from .schemas import LoginResponse


def login(authority: SessionAuthority, username: str) -> LoginResponse:
    """
    Mint a session for `username`.

    Args:
        authority (SessionAuthority): The app's session authority.
        username (str): Claimed identity, accepted as-is.

    Returns:
        LoginResponse: The username and its new token.
    """
    return LoginResponse(username=username, token=authority.mint(username))


def authenticate_token(authority: SessionAuthority, token: Optional[str]) -> str:
    """
    Resolve a presented token to the identity it was minted for.

    Raises:
        Unauthenticated: If the token is missing or unknown (mapped to 401).
    """
    return authority.resolve(token)
