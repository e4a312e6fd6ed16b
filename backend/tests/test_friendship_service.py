import pytest
from sqlalchemy import update

from wishnest.models import User, Friendship, FriendPair, FriendshipStatus
from wishnest.services.exceptions import (
    InvalidTargetError,
    UnknownTargetError,
    RequestAlreadyPendingError,
    NotRecipientError,
    NotPendingError,
    RequestNotFoundError,
    RelationshipNotFoundError,
    NotFriendsError,
)
from wishnest.services.friendship_service import FriendshipService, friendship_service
from wishnest.services.visibility import are_friends, can_view, ensure_can_view


async def _users(session, *names):
    users = [User(name=n, username=n, email=f"{n}@example.com", password_hash="x") for n in names]
    session.add_all(users)
    await session.commit()
    return users


def test_friend_pair_is_canonical():
    assert FriendPair.of("b", "a") == FriendPair.of("a", "b")
    pair = FriendPair.of("b", "a")
    assert (pair.low, pair.high) == ("a", "b")
    assert pair.other("a") == "b"
    assert "b" in pair and "c" not in pair
    with pytest.raises(ValueError):
        FriendPair.of("a", "a")


async def test_single_edge_per_pair(db_session):
    alice, bob = await _users(db_session, "alice", "bob")

    edge, created = await friendship_service.send_request(db_session, bob.id, alice.id)
    assert created
    assert edge.requester_id == bob.id
    assert edge.recipient_id == alice.id
    assert edge.user_low_id < edge.user_high_id

    with pytest.raises(RequestAlreadyPendingError):
        await friendship_service.send_request(db_session, alice.id, bob.id)

    assert await friendship_service.get_edge(db_session, alice.id, bob.id) is not None
    assert (await friendship_service.get_edge(db_session, bob.id, alice.id)).id == edge.id


async def test_invalid_targets(db_session):
    (alice,) = await _users(db_session, "alice")

    with pytest.raises(InvalidTargetError):
        await friendship_service.send_request(db_session, alice.id, alice.id)
    with pytest.raises(UnknownTargetError):
        await friendship_service.send_request(db_session, alice.id, "missing")


async def test_answer_rules(db_session):
    alice, bob, carol = await _users(db_session, "alice", "bob", "carol")
    edge, _ = await friendship_service.send_request(db_session, alice.id, bob.id)

    with pytest.raises(NotRecipientError):
        await friendship_service.accept_request(db_session, alice.id, edge.id)
    with pytest.raises(NotRecipientError):
        await friendship_service.accept_request(db_session, carol.id, edge.id)
    with pytest.raises(RequestNotFoundError):
        await friendship_service.accept_request(db_session, bob.id, "missing")

    accepted = await friendship_service.accept_request(db_session, bob.id, edge.id)
    assert accepted.status == FriendshipStatus.ACCEPTED
    assert await are_friends(db_session, alice.id, bob.id)
    assert await are_friends(db_session, bob.id, alice.id)


async def test_visibility_rule(db_session):
    alice, bob, carol = await _users(db_session, "alice", "bob", "carol")

    assert await can_view(db_session, alice.id, alice.id)
    assert not await can_view(db_session, bob.id, alice.id)

    edge, _ = await friendship_service.send_request(db_session, bob.id, alice.id)
    assert not await can_view(db_session, bob.id, alice.id)

    await friendship_service.reject_request(db_session, alice.id, edge.id)
    with pytest.raises(NotFriendsError):
        await ensure_can_view(db_session, bob.id, alice.id)

    edge, created = await friendship_service.send_request(db_session, alice.id, bob.id)
    assert not created
    await friendship_service.accept_request(db_session, bob.id, edge.id)
    assert await can_view(db_session, bob.id, alice.id)
    assert not await can_view(db_session, carol.id, alice.id)

    await friendship_service.remove(db_session, alice.id, bob.id)
    assert not await can_view(db_session, bob.id, alice.id)
    with pytest.raises(RelationshipNotFoundError):
        await friendship_service.remove(db_session, bob.id, alice.id)


async def test_listings(db_session):
    alice, bob, carol, dan = await _users(db_session, "alice", "bob", "carol", "dan")

    to_carol, _ = await friendship_service.send_request(db_session, alice.id, carol.id)
    from_bob, _ = await friendship_service.send_request(db_session, bob.id, alice.id)
    from_dan, _ = await friendship_service.send_request(db_session, dan.id, alice.id)
    await friendship_service.accept_request(db_session, alice.id, from_dan.id)

    friends = await friendship_service.list_friends(db_session, alice.id)
    assert [u.username for u in friends] == ["dan"]

    requests = await friendship_service.list_requests(db_session, alice.id)
    assert [(e.id, u.username) for e, u in requests["incoming"]] == [(from_bob.id, "bob")]
    assert [(e.id, u.username) for e, u in requests["outgoing"]] == [(to_carol.id, "carol")]

    assert isinstance(to_carol, Friendship)


async def test_answer_loses_race_between_read_and_write(db_session, session_factory, monkeypatch):
    alice, bob = await _users(db_session, "alice", "bob")
    edge, _ = await friendship_service.send_request(db_session, alice.id, bob.id)
    real_get_by_id = FriendshipService.get_by_id

    async def get_then_rival_rejects(db, request_id):
        # Read the pending edge, then let a concurrent reject commit first
        found = await real_get_by_id(db, request_id)
        async with session_factory() as rival:
            await rival.execute(
                update(Friendship)
                .where(Friendship.id == request_id)
                .values(status=FriendshipStatus.REJECTED)
            )
            await rival.commit()
        return found

    monkeypatch.setattr(FriendshipService, "get_by_id", staticmethod(get_then_rival_rejects))

    with pytest.raises(NotPendingError):
        await friendship_service.accept_request(db_session, bob.id, edge.id)

    monkeypatch.undo()
    current = await friendship_service.get_by_id(db_session, edge.id)
    assert current.status == FriendshipStatus.REJECTED
