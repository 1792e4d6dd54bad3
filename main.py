"""
Main API module for the User Directory.

Responsibilities:
    - Expose REST endpoints to list, read, create, update and delete users
    - Mint session tokens on login and require them for every mutation
    - Map directory failures to JSON error bodies with the right status

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - One DirectoryStore and one SessionAuthority per app, kept on `app.state`
      and handed to routes through dependencies.
    - Storage backend (JSON file by default) chosen by the storage factory.

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and a clean separation between API and business logic."
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from auth.dependencies import get_authority, get_current_identity, get_store
from auth.schemas import LoginRequest, LoginResponse
from auth.service import login as login_service
from user_directory.config import settings
from user_directory.directory.store import DirectoryStore
from user_directory.errors import DirectoryError, Internal
from user_directory.models import User, UserFields, UserUpdate
from user_directory.sessions.authority import SessionAuthority
from user_directory.storage.base import BaseStorage
from user_directory.storage.storage_factory import get_storage


def create_app(
    storage: Optional[BaseStorage] = None,
    authority: Optional[SessionAuthority] = None,
) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        storage (Optional[BaseStorage]): Persistence backend; chosen from
            configuration when omitted.
        authority (Optional[SessionAuthority]): Session table; a fresh one
            when omitted.

    Returns:
        FastAPI: A fully configured application with its own store and
                 session authority.

    Notes:
        The backing store is read exactly once, here, before any request
        is served.
    """
    app = FastAPI(
        title="User Directory",
        description="Persisted user directory with session tokens and ownership checks",
        docs_url="/docs",
    )
    log = logging.getLogger("userdir")

    # basic console logging (optional)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=settings.LOG_LEVEL,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    storage = storage if storage is not None else get_storage()
    app.state.store = DirectoryStore.from_storage(storage)
    app.state.authority = authority if authority is not None else SessionAuthority()
    log.info("User directory storage backend: %s", type(storage).__name__)

    # ----------------------------------------------------------------
    # Error mapping
    # ----------------------------------------------------------------
    @app.exception_handler(DirectoryError)
    def directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Echoed inputs may hold text that cannot be encoded (lone surrogates)
        errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

    @app.exception_handler(Exception)
    def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        err = Internal()
        return JSONResponse(status_code=err.status_code, content={"error": err.message})

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/")
    def root() -> Dict[str, str]:
        return {"message": "Hello from the user directory!"}

    @app.get("/greet", response_class=PlainTextResponse)
    def greet(name: str = Query(..., description="Name to greet.")) -> str:
        return f"Hello {name}"

    # Health check
    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/login", response_model=LoginResponse)
    def login(
        req: LoginRequest,
        authority: SessionAuthority = Depends(get_authority),
    ) -> LoginResponse:
        """
        Mint a session token for the claimed username.

        Returns:
            LoginResponse: username and token. Send the token back in the
            session header on create/update/delete.
        """
        return login_service(authority, req.username)

    @app.get("/users", response_model=List[User])
    def list_users(store: DirectoryStore = Depends(get_store)) -> List[User]:
        """All users in insertion order. A user's position is its address."""
        return store.list_users()

    @app.post("/users")
    def create_user(
        req: UserFields,
        identity: str = Depends(get_current_identity),
        store: DirectoryStore = Depends(get_store),
    ) -> Dict[str, Any]:
        """
        Create a user owned by the caller's session identity.

        Returns:
            dict: Confirmation message and the stored record.

        Raises:
            Unauthenticated: 401 on missing/unknown token.
            PersistenceFailure: 500 if the collection could not be saved.
        """
        user = store.create_user(identity, req)
        return {
            "message": f"User '{user.username}' with email '{user.email}' created!",
            "user": user.model_dump(),
        }

    @app.get("/users/{index}", response_model=User)
    def get_user(index: int, store: DirectoryStore = Depends(get_store)) -> User:
        return store.get_user(index)

    @app.put("/users/{index}", response_model=User)
    def update_user(
        index: int,
        req: UserUpdate,
        identity: str = Depends(get_current_identity),
        store: DirectoryStore = Depends(get_store),
    ) -> User:
        """
        Update username, real_name and/or email of a user the caller created.

        Raises:
            NotFound (404), Forbidden (403), Unauthenticated (401),
            PersistenceFailure (500).
        """
        return store.update_user(identity, index, req)

    @app.delete("/users/{index}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_user(
        index: int,
        identity: str = Depends(get_current_identity),
        store: DirectoryStore = Depends(get_store),
    ) -> Response:
        """
        Delete a user the caller created. Later users shift down by one.

        Raises:
            NotFound (404), Forbidden (403), Unauthenticated (401),
            PersistenceFailure (500).
        """
        store.delete_user(identity, index)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()
