import pytest

from auth.config import TOKEN_HEADER

BOB = {"username": "bob", "real_name": "Bob B", "email": "bob@x.com"}


@pytest.mark.parametrize(
    "method,path,body",
    [
        ("post", "/users", BOB),
        ("put", "/users/0", {"email": "x@x.com"}),
        ("delete", "/users/0", None),
    ],
)
def test_mutations_without_token_are_unauthenticated(client, method, path, body):
    kwargs = {"json": body} if body is not None else {}
    resp = getattr(client, method)(path, **kwargs)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Missing session token"}


def test_unknown_token_is_unauthenticated(client):
    resp = client.post("/users", json=BOB, headers={TOKEN_HEADER: "not-a-real-token"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid session token"}
    assert client.get("/users").json() == []


def test_auth_is_checked_before_bounds(client):
    resp = client.delete("/users/99", headers={TOKEN_HEADER: "bogus"})
    assert resp.status_code == 401


def test_token_from_another_app_is_rejected(client):
    from main import create_app
    from fastapi.testclient import TestClient
    from user_directory.storage.storage import Storage

    other = TestClient(create_app(storage=Storage()))
    token = other.post("/login", json={"username": "alice"}).json()["token"]

    resp = client.post("/users", json=BOB, headers={TOKEN_HEADER: token})
    assert resp.status_code == 401


def test_create_missing_fields_is_422(client, login):
    resp = client.post("/users", json={"username": "bob"}, headers=login("alice"))
    assert resp.status_code == 422


def test_login_missing_username_is_422(client):
    assert client.post("/login", json={}).status_code == 422


def test_non_integer_index_is_422(client, login):
    assert client.get("/users/abc").status_code == 422
    assert client.delete("/users/abc", headers=login("alice")).status_code == 422


def test_negative_index_is_not_found(client, login):
    headers = login("alice")
    client.post("/users", json=BOB, headers=headers)
    assert client.get("/users/-1").status_code == 404
    assert client.delete("/users/-1", headers=headers).status_code == 404


def test_greet_requires_name(client):
    assert client.get("/greet").status_code == 422


def test_duplicate_usernames_are_accepted(client, login):
    headers = login("alice")
    assert client.post("/users", json=BOB, headers=headers).status_code == 200
    assert client.post("/users", json=BOB, headers=headers).status_code == 200
    assert [u["username"] for u in client.get("/users").json()] == ["bob", "bob"]


# Raw bodies: a JSON "\ud800" escape decodes to a str that cannot be UTF-8 encoded
SURROGATE_USER = b'{"username": "\\ud800", "real_name": "Bad", "email": "bad@x.com"}'
JSON_CONTENT = {"Content-Type": "application/json"}


def test_lone_surrogate_create_is_rejected_and_nothing_changes(tmp_path):
    from main import create_app
    from fastapi.testclient import TestClient
    from user_directory.storage.json_storage import JSONFileStorage

    path = tmp_path / "users.json"
    client = TestClient(create_app(storage=JSONFileStorage(path)))
    headers = {TOKEN_HEADER: client.post("/login", json={"username": "alice"}).json()["token"]}
    assert client.post("/users", json=BOB, headers=headers).status_code == 200
    before_file = path.read_bytes()
    before_list = client.get("/users").json()

    resp = client.post("/users", content=SURROGATE_USER, headers={**headers, **JSON_CONTENT})
    assert resp.status_code == 422

    resp = client.put(
        "/users/0", content=b'{"email": "\\ud800"}', headers={**headers, **JSON_CONTENT}
    )
    assert resp.status_code == 422

    listed = client.get("/users")
    assert listed.status_code == 200
    assert listed.json() == before_list
    assert path.read_bytes() == before_file

    # A restart still sees the record
    restarted = TestClient(create_app(storage=JSONFileStorage(path)))
    assert restarted.get("/users").json() == before_list


def test_lone_surrogate_login_is_rejected(client):
    resp = client.post("/login", content=b'{"username": "\\ud800"}', headers=JSON_CONTENT)
    assert resp.status_code == 422
    assert resp.json()["detail"][0]["loc"] == ["body", "username"]


def test_token_header_follows_settings(client, login):
    from auth.dependencies import token_header
    from user_directory.config import settings

    assert TOKEN_HEADER == settings.TOKEN_HEADER
    assert token_header.model.name == settings.TOKEN_HEADER
    assert client.post("/users", json=BOB, headers=login("alice")).status_code == 200
