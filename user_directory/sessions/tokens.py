"""
Token helpers for the session authority.
"""

import secrets

TOKEN_BYTES = 16  # 128 bits


def generate_token() -> str:
    """Return a random 32-character hex token."""
    return secrets.token_hex(TOKEN_BYTES)


def mask_token(token: str) -> str:
    """Shorten a token for log output so full tokens never reach the logs."""
    return f"{token[:6]}..." if len(token) > 6 else "***"
