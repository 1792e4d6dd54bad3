"""
Pydantic models shared by the store, the storage backends and the API.

User:
    A directory record. `created_by` is the identity of the session that
    created it; it is set once at creation and only used for authorization.

UserFields:
    Payload accepted when creating a user.

UserUpdate:
    Partial payload accepted when updating a user. Omitted fields are left
    untouched; `created_by` can never be changed.

Every text field is a `Text`: a str that must encode as UTF-8. JSON allows
escaped lone surrogates such as "\\ud800"; they are rejected at the request
boundary (422) so nothing unwritable reaches the store or the backing file.
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel


def _require_utf8(value: str) -> str:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError("Text must be valid UTF-8 (lone surrogates are not allowed)") from None
    return value


Text = Annotated[str, AfterValidator(_require_utf8)]


class UserFields(BaseModel):
    """Request payload for creating a new user."""
    username: Text
    real_name: Text
    email: Text


class User(UserFields):
    """A stored user record."""
    created_by: Text


class UserUpdate(BaseModel):
    """Request payload for updating an existing user."""
    username: Optional[Text] = None
    real_name: Optional[Text] = None
    email: Optional[Text] = None
