from tests.helpers import create_user, befriend


def test_friend_request_flow(client):
    alice, headers_a = create_user(client, username="alice")
    bob, headers_b = create_user(client, username="bob")

    # Alice sends a request
    r = client.post(f"/api/friends/request/{bob['id']}", headers=headers_a)
    assert r.status_code == 201
    request = r.json()["request"]
    assert request["status"] == "pending"
    assert request["requester_id"] == alice["id"]
    assert sorted(request["participants"]) == sorted([alice["id"], bob["id"]])

    # Bob sees it as incoming, Alice as outgoing
    rb = client.get("/api/friends/requests", headers=headers_b).json()
    assert [e["id"] for e in rb["incoming"]] == [request["id"]]
    assert rb["incoming"][0]["other_user"]["username"] == "alice"
    assert rb["outgoing"] == []
    ra = client.get("/api/friends/requests", headers=headers_a).json()
    assert [e["id"] for e in ra["outgoing"]] == [request["id"]]

    # Bob accepts
    r = client.post(f"/api/friends/accept/{request['id']}", headers=headers_b)
    assert r.status_code == 200
    assert r.json()["friendship"]["status"] == "accepted"

    friends_a = client.get("/api/friends/list", headers=headers_a).json()["friends"]
    friends_b = client.get("/api/friends/list", headers=headers_b).json()["friends"]
    assert [f["id"] for f in friends_a] == [bob["id"]]
    assert [f["id"] for f in friends_b] == [alice["id"]]
    assert client.get("/api/friends/requests", headers=headers_b).json()["incoming"] == []


def test_cannot_friend_self_or_unknown(client):
    alice, headers_a = create_user(client)

    r = client.post(f"/api/friends/request/{alice['id']}", headers=headers_a)
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_input"

    r = client.post("/api/friends/request/no-such-user", headers=headers_a)
    assert r.status_code == 404


def test_duplicate_requests_in_either_direction(client):
    alice, headers_a = create_user(client)
    bob, headers_b = create_user(client)

    assert client.post(f"/api/friends/request/{bob['id']}", headers=headers_a).status_code == 201

    # Same direction and reverse direction both conflict
    r = client.post(f"/api/friends/request/{bob['id']}", headers=headers_a)
    assert r.status_code == 409
    assert r.json()["detail"] == "Request already pending"
    r = client.post(f"/api/friends/request/{alice['id']}", headers=headers_b)
    assert r.status_code == 409

    # Still exactly one edge
    assert len(client.get("/api/friends/requests", headers=headers_b).json()["incoming"]) == 1


def test_request_after_accept_conflicts(client):
    alice, headers_a = create_user(client)
    bob, headers_b = create_user(client)
    befriend(client, headers_a, bob, headers_b)

    r = client.post(f"/api/friends/request/{alice['id']}", headers=headers_b)
    assert r.status_code == 409
    assert r.json()["detail"] == "You are already friends"


def test_only_recipient_answers(client):
    alice, headers_a = create_user(client)
    bob, headers_b = create_user(client)
    carol, headers_c = create_user(client)

    request_id = client.post(f"/api/friends/request/{bob['id']}", headers=headers_a).json()["request"]["id"]

    # Requester cannot accept their own request
    r = client.post(f"/api/friends/accept/{request_id}", headers=headers_a)
    assert r.status_code == 403

    # Nobody but the recipient may answer
    r = client.post(f"/api/friends/reject/{request_id}", headers=headers_c)
    assert r.status_code == 403
    assert r.json()["error"] == "forbidden"
    r = client.post(f"/api/friends/accept/{request_id}", headers=headers_c)
    assert r.status_code == 403

    r = client.post("/api/friends/accept/unknown-id", headers=headers_b)
    assert r.status_code == 404


def test_answering_twice_conflicts(client):
    alice, headers_a = create_user(client)
    bob, headers_b = create_user(client)
    request_id = befriend(client, headers_a, bob, headers_b)

    r = client.post(f"/api/friends/reject/{request_id}", headers=headers_b)
    assert r.status_code == 409
    assert r.json()["detail"] == "Request is not pending"


def test_rerequest_after_reject_reuses_edge(client):
    alice, headers_a = create_user(client)
    bob, headers_b = create_user(client)

    first = client.post(f"/api/friends/request/{bob['id']}", headers=headers_a).json()["request"]
    r = client.post(f"/api/friends/reject/{first['id']}", headers=headers_b)
    assert r.status_code == 200
    assert r.json()["friendship"]["status"] == "rejected"

    # Bob now asks Alice: same edge, back to pending, Bob is the requester
    r = client.post(f"/api/friends/request/{alice['id']}", headers=headers_b)
    assert r.status_code == 200
    revived = r.json()["request"]
    assert revived["id"] == first["id"]
    assert revived["status"] == "pending"
    assert revived["requester_id"] == bob["id"]

    # Now only Alice may answer
    assert client.post(f"/api/friends/accept/{first['id']}", headers=headers_b).status_code == 403
    assert client.post(f"/api/friends/accept/{first['id']}", headers=headers_a).status_code == 200


def test_remove_relationship(client):
    alice, headers_a = create_user(client)
    bob, headers_b = create_user(client)
    befriend(client, headers_a, bob, headers_b)

    # Either side may remove
    r = client.delete(f"/api/friends/remove/{alice['id']}", headers=headers_b)
    assert r.status_code == 200
    assert client.get("/api/friends/list", headers=headers_a).json()["friends"] == []

    r = client.delete(f"/api/friends/remove/{alice['id']}", headers=headers_b)
    assert r.status_code == 404
    assert r.json()["detail"] == "No relationship found"

    # Removing a pending request works too, and a fresh request is then possible
    assert client.post(f"/api/friends/request/{bob['id']}", headers=headers_a).status_code == 201
    assert client.delete(f"/api/friends/remove/{bob['id']}", headers=headers_a).status_code == 200
    assert client.post(f"/api/friends/request/{bob['id']}", headers=headers_a).status_code == 201
