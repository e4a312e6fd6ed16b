import uuid
from typing import Dict, Optional, Tuple

from fastapi.testclient import TestClient

DEFAULT_PASSWORD = "Passw0rd!"


def unique_username(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def signup(
    client: TestClient,
    username: Optional[str] = None,
    name: str = "Test User",
    email: Optional[str] = None,
    password: str = DEFAULT_PASSWORD,
):
    if username is None:
        username = unique_username()
    if email is None:
        email = f"{username}@example.com"
    payload = {
        "name": name,
        "username": username,
        "email": email,
        "password": password,
    }
    return client.post("/api/auth/signup", json=payload)


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def create_user(client: TestClient, username: Optional[str] = None, name: str = "Test User") -> Tuple[dict, Dict[str, str]]:
    """Sign up a user and return (user, auth headers)."""
    r = signup(client, username=username, name=name)
    assert r.status_code == 201, r.text
    data = r.json()
    return data["user"], auth_headers(data["token"])


def befriend(client: TestClient, requester_headers: Dict[str, str], recipient: dict, recipient_headers: Dict[str, str]) -> str:
    """Send a request and have the recipient accept it. Returns the edge id."""
    r = client.post(f"/api/friends/request/{recipient['id']}", headers=requester_headers)
    assert r.status_code == 201, r.text
    request_id = r.json()["request"]["id"]

    r = client.post(f"/api/friends/accept/{request_id}", headers=recipient_headers)
    assert r.status_code == 200, r.text
    return request_id


def create_item(client: TestClient, headers: Dict[str, str], title: str = "Kindle", **fields) -> dict:
    payload = {"title": title, "description": "Paperwhite", "category": "everyday"}
    payload.update(fields)
    r = client.post("/api/wishlist/items", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["item"]
