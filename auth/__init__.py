"""
Auth package for the User Directory API.

Provides session-token authentication as FastAPI dependencies: a login
service that mints tokens, and a dependency that resolves the token header
to the caller's identity before any directory operation runs.
"""
