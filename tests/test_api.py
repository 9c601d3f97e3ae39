"""
HTTP tests for the auth, user administration and storage routers.
"""

from datetime import timedelta

from userhub.core.security import create_access_token
from tests.helpers import login, register


# -------------------------------
# Auth
# -------------------------------

class TestAuth:

    def test_register_hides_password(self, client):
        body = register(client, "ana", "x", name="Ana", email="ana@example.com")

        assert body["username"] == "ana"
        assert body["name"] == "Ana"
        assert body["role"] == "USER"
        assert "password" not in body

    def test_register_duplicate_is_400(self, client):
        register(client, "ana", "x")
        response = client.post("/users/register", json={"username": "ana", "password": "y"})
        assert response.status_code == 400

    def test_login_and_me(self, client):
        created = register(client, "ana", "x")
        headers = login(client, "ana", "x")

        response = client.get("/users/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_login_wrong_password_is_401(self, client):
        register(client, "ana", "x")
        response = client.post("/token", data={"username": "ana", "password": "nope"})
        assert response.status_code == 401

    def test_login_unknown_user_is_401(self, client):
        response = client.post("/token", data={"username": "ghost", "password": "x"})
        assert response.status_code == 401

    def test_me_without_token_is_401(self, client):
        assert client.get("/users/me").status_code == 401

    def test_me_with_bad_token_is_401(self, client):
        response = client.get("/users/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_expired_token_is_401(self, client, settings):
        created = register(client, "ana", "x")
        token = create_access_token(
            {"sub": created["id"]},
            settings.jwt_secret_key,
            expires_delta=timedelta(minutes=-5),
        )
        response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_update_me_keeps_password(self, client):
        register(client, "ana", "x")
        headers = login(client, "ana", "x")

        response = client.put("/users/me", json={"username": "anna", "name": "Anna"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["username"] == "anna"
        assert response.json()["name"] == "Anna"
        login(client, "anna", "x")

    def test_update_me_to_taken_username_is_400(self, client):
        register(client, "ana", "x")
        register(client, "bob", "x")
        headers = login(client, "ana", "x")

        response = client.put("/users/me", json={"username": "bob"}, headers=headers)

        assert response.status_code == 400


# -------------------------------
# User administration
# -------------------------------

class TestUserAdmin:

    def test_admin_is_seeded(self, client):
        headers = login(client, "admin", "admin-pass")
        response = client.get("/users/me", headers=headers)
        assert response.json()["role"] == "ADMIN"

    def test_list_requires_admin(self, client):
        register(client, "ana", "x")
        headers = login(client, "ana", "x")
        assert client.get("/users/list", headers=headers).status_code == 403

    def test_get_and_delete_require_admin(self, client):
        created = register(client, "ana", "x")
        register(client, "bob", "x")
        headers = login(client, "bob", "x")

        assert client.get(f"/users/{created['id']}", headers=headers).status_code == 403
        assert client.delete(f"/users/{created['id']}", headers=headers).status_code == 403

        admin = login(client, "admin", "admin-pass")
        assert client.get(f"/users/{created['id']}", headers=admin).status_code == 200

    def test_list_users(self, client):
        register(client, "ana", "x")
        headers = login(client, "admin", "admin-pass")

        response = client.get("/users/list", headers=headers)

        assert response.status_code == 200
        assert sorted(u["username"] for u in response.json()) == ["admin", "ana"]

    def test_get_user_by_id(self, client):
        created = register(client, "ana", "x")
        headers = login(client, "admin", "admin-pass")

        assert client.get(f"/users/{created['id']}", headers=headers).json() == created
        assert client.get("/users/unknown", headers=headers).status_code == 404

    def test_delete_user(self, client):
        created = register(client, "ana", "x")
        headers = login(client, "admin", "admin-pass")

        response = client.delete(f"/users/{created['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json()["username"] == "ana"

        again = client.delete(f"/users/{created['id']}", headers=headers)
        assert again.status_code == 204
        assert client.get(f"/users/{created['id']}", headers=headers).status_code == 404


# -------------------------------
# Storage
# -------------------------------

class TestStorage:

    def test_upload_get_delete(self, client):
        register(client, "ana", "x")
        headers = login(client, "ana", "x")

        response = client.post(
            "/storage",
            files={"file": ("hello.txt", b"hello world", "text/plain")},
            headers=headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["file_name"] == "hello.txt"
        assert data["size"] == 11

        downloaded = client.get("/storage/hello.txt")
        assert downloaded.status_code == 200
        assert downloaded.content == b"hello world"

        assert client.delete("/storage/hello.txt", headers=headers).status_code == 204
        assert client.get("/storage/hello.txt").status_code == 404

    def test_upload_requires_login(self, client):
        response = client.post("/storage", files={"file": ("a.txt", b"a", "text/plain")})
        assert response.status_code == 401

    def test_upload_too_large_is_400(self, client):
        register(client, "ana", "x")
        headers = login(client, "ana", "x")

        response = client.post(
            "/storage",
            files={"file": ("big.bin", b"x" * 2048, "application/octet-stream")},
            headers=headers,
        )
        assert response.status_code == 400

    def test_get_missing_file_is_404(self, client):
        assert client.get("/storage/missing.txt").status_code == 404
