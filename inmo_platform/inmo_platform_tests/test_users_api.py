from inmo_platform.inmo_platform.inmo_service.dependencies import get_account_service
from inmo_platform.inmo_platform.inmo_service.errors import PersistenceError
from inmo_platform.inmo_platform.inmo_service.services import AccountService

API = "/api/v1"


def register(client, username="alice", email="a@x.com", password="secret123"):
    return client.post(f"{API}/users", json={"username": username, "email": email, "password": password})


def test_register_and_login(client):
    response = register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["data"]["username"] == "alice"
    assert body["data"]["email"] == "a@x.com"
    assert "password" not in body["data"]

    bad_login = client.post(f"{API}/users/login", json={"email": "a@x.com", "password": "wrong"})
    assert bad_login.status_code == 401
    assert bad_login.json()["message"] == "Invalid email or password"

    login = client.post(f"{API}/users/login", json={"email": "a@x.com", "password": "secret123"})
    assert login.status_code == 200
    assert login.json() == {"message": "Login successful"}


def test_login_unknown_email_looks_like_wrong_password(client):
    register(client)
    unknown = client.post(f"{API}/users/login", json={"email": "nobody@x.com", "password": "secret123"})
    wrong = client.post(f"{API}/users/login", json={"email": "a@x.com", "password": "secret999"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


def test_login_with_malformed_body(client):
    response = client.post(f"{API}/users/login", json={"email": "a@x.com"})
    assert response.status_code == 400


def test_register_validation_errors(client):
    assert client.post(f"{API}/users", json={"username": "alice"}).status_code == 400
    assert register(client, password="").status_code == 400
    assert register(client, password="short").status_code == 400
    assert register(client, username="").status_code == 400


def test_register_duplicate_returns_conflict(client):
    assert register(client).status_code == 201
    duplicate = register(client, username="alice", email="other@x.com")
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "Conflict"


def test_list_and_get_users(client):
    alice = register(client).json()["data"]
    register(client, username="bob", email="b@x.com")

    listing = client.get(f"{API}/users")
    assert listing.status_code == 200
    assert listing.json()["count"] == 2
    assert all("password" not in u for u in listing.json()["data"])

    single = client.get(f"{API}/users/{alice['id']}")
    assert single.status_code == 200
    assert single.json()["data"]["username"] == "alice"


def test_get_user_errors(client):
    assert client.get(f"{API}/users/999").status_code == 404
    assert client.get(f"{API}/users/abc").status_code == 400


def test_update_user(client):
    alice = register(client).json()["data"]

    response = client.put(f"{API}/users/{alice['id']}", json={"username": "alicia", "email": "alicia@x.com"})
    assert response.status_code == 200
    assert response.json()["data"]["username"] == "alicia"

    # profile edit leaves the password alone
    login = client.post(f"{API}/users/login", json={"email": "alicia@x.com", "password": "secret123"})
    assert login.status_code == 200


def test_update_user_errors(client):
    alice = register(client).json()["data"]
    register(client, username="bob", email="b@x.com")

    assert client.put(f"{API}/users/999", json={"username": "x", "email": "x@x.com"}).status_code == 404
    assert client.put(f"{API}/users/{alice['id']}", json={"username": "x"}).status_code == 400
    assert client.put(f"{API}/users/{alice['id']}", json={"username": "bob", "email": "a@x.com"}).status_code == 409


def test_delete_user_then_get_returns_not_found(client):
    alice = register(client).json()["data"]

    response = client.delete(f"{API}/users/{alice['id']}")
    assert response.status_code == 204
    assert response.content == b""

    assert client.get(f"{API}/users/{alice['id']}").status_code == 404
    assert client.get(f"{API}/users").json()["count"] == 0
    assert client.delete(f"{API}/users/{alice['id']}").status_code == 404

    login = client.post(f"{API}/users/login", json={"email": "a@x.com", "password": "secret123"})
    assert login.status_code == 401


def test_delete_user_bad_id(client):
    assert client.delete(f"{API}/users/abc").status_code == 400


class BrokenUserRepository:
    def list_all(self):
        raise PersistenceError("(sqlite3.OperationalError) no such table: users")


def test_persistence_failure_is_reported_generically(app, client, hasher):
    app.dependency_overrides[get_account_service] = lambda: AccountService(BrokenUserRepository(), hasher)
    try:
        response = client.get(f"{API}/users")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "An unexpected error occurred"
    assert "sqlite3" not in response.text


def test_register_rejects_blank_username_or_email(client):
    assert register(client, username="   ").status_code == 400
    assert register(client, email="  ").status_code == 400
    assert client.get(f"{API}/users").json()["count"] == 0


def test_out_of_range_user_id_is_rejected(client):
    huge = 2 ** 70
    assert client.get(f"{API}/users/{huge}").status_code == 400
    assert client.put(f"{API}/users/{huge}", json={"username": "x", "email": "x@x.com"}).status_code == 400
    assert client.delete(f"{API}/users/{huge}").status_code == 400
    assert client.get(f"{API}/users/{2 ** 63 - 1}").status_code == 404
