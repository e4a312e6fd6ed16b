from tests.helpers import create_user, create_item, befriend


def test_get_creates_default_wishlist(client):
    user, headers = create_user(client)

    r = client.get("/api/wishlist", headers=headers)
    assert r.status_code == 200
    wishlist = r.json()["wishlist"]
    assert wishlist["title"] == "My Wishlist"
    assert wishlist["description"] == ""
    assert wishlist["user_id"] == user["id"]

    # Same wishlist on every read
    assert client.get("/api/wishlist", headers=headers).json()["wishlist"]["id"] == wishlist["id"]


def test_update_wishlist(client):
    _, headers = create_user(client)

    # Upserts when absent
    r = client.patch("/api/wishlist", json={"title": "  Birthday  "}, headers=headers)
    assert r.status_code == 200
    assert r.json()["wishlist"]["title"] == "Birthday"

    # Absent fields are untouched
    r = client.patch("/api/wishlist", json={"description": "June 5"}, headers=headers)
    assert r.json()["wishlist"]["title"] == "Birthday"
    assert r.json()["wishlist"]["description"] == "June 5"


def test_update_wishlist_validation(client):
    _, headers = create_user(client)

    r = client.patch("/api/wishlist", json={"title": "   "}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_input"

    r = client.patch("/api/wishlist", json={"title": "x" * 101}, headers=headers)
    assert r.status_code == 400

    r = client.patch("/api/wishlist", json={"description": "x" * 501}, headers=headers)
    assert r.status_code == 400

    # Nothing was changed by the failed updates
    assert client.get("/api/wishlist", headers=headers).json()["wishlist"]["title"] == "My Wishlist"


def test_delete_wishlist_cascades_to_items(client):
    _, headers = create_user(client)
    create_item(client, headers, title="Kindle")
    create_item(client, headers, title="Lego")

    r = client.delete("/api/wishlist", headers=headers)
    assert r.status_code == 200

    r = client.delete("/api/wishlist", headers=headers)
    assert r.status_code == 404

    # Listing does not resurrect anything
    assert client.get("/api/wishlist/items", headers=headers).json()["items"] == []

    # A fresh default wishlist is created lazily afterwards
    assert client.get("/api/wishlist", headers=headers).json()["wishlist"]["title"] == "My Wishlist"


def test_meta_visible_to_friends_only(client):
    owner, headers_o = create_user(client)
    friend, headers_f = create_user(client)
    stranger, headers_s = create_user(client)
    client.patch("/api/wishlist", json={"title": "Tom's list", "description": "Books"}, headers=headers_o)
    befriend(client, headers_f, owner, headers_o)

    r = client.get(f"/api/wishlist/users/{owner['id']}/meta", headers=headers_f)
    assert r.status_code == 200
    meta = r.json()["wishlist"]
    assert meta["title"] == "Tom's list"
    assert meta["description"] == "Books"
    assert "user_id" not in meta

    r = client.get(f"/api/wishlist/users/{owner['id']}/meta", headers=headers_s)
    assert r.status_code == 403
    assert r.json()["detail"] == "Not allowed (not friends)"


def test_meta_for_friend_without_wishlist(client):
    owner, headers_o = create_user(client)
    friend, headers_f = create_user(client)
    befriend(client, headers_f, owner, headers_o)

    r = client.get(f"/api/wishlist/users/{owner['id']}/meta", headers=headers_f)
    assert r.status_code == 404


def test_pending_request_does_not_grant_visibility(client):
    owner, headers_o = create_user(client)
    friend, headers_f = create_user(client)
    client.get("/api/wishlist", headers=headers_o)
    client.post(f"/api/friends/request/{owner['id']}", headers=headers_f)

    r = client.get(f"/api/wishlist/users/{owner['id']}/items", headers=headers_f)
    assert r.status_code == 403
