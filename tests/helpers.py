from fastapi.testclient import TestClient


def login(client: TestClient, username: str, password: str) -> dict:
    """Log in and return the Authorization header."""
    response = client.post("/token", data={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def register(client: TestClient, username: str, password: str, **profile) -> dict:
    response = client.post("/users/register", json={"username": username, "password": password, **profile})
    assert response.status_code == 201, response.text
    return response.json()
