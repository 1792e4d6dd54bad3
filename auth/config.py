"""
Configuration for the auth module.

The session token travels in a dedicated request header. Its name comes from
the application settings so deployments behind proxies can rename it.
"""

from user_directory.config import settings

TOKEN_HEADER: str = settings.TOKEN_HEADER
