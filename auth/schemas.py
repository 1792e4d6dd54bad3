"""
Pydantic schemas for request/response models in the auth module.
"""

from pydantic import BaseModel

from user_directory.models import Text


class LoginRequest(BaseModel):
    """Schema for login request payload. No password: the username is taken as claimed."""
    username: Text


class LoginResponse(BaseModel):
    """Schema for a freshly minted session."""
    username: str
    token: str
