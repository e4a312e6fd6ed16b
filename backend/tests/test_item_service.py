import pytest

from wishnest.models import User
from wishnest.services.exceptions import InvalidInputError, InvalidPayloadError, NotFriendsError
from wishnest.services.item_service import item_service, validate_new_item, validate_item_changes
from wishnest.services.wishlist_service import wishlist_service

KINDLE = {"title": "Kindle", "description": "Paperwhite", "category": "everyday"}


def test_validate_new_item_trims_and_defaults():
    values = validate_new_item({**KINDLE, "title": "  Kindle ", "url": "   ", "price": 0})
    assert values["title"] == "Kindle"
    assert values["url"] is None
    assert values["price"] == 0.0
    assert "alternate" not in values


@pytest.mark.parametrize("price", [-0.01, True, "12", float("nan"), float("inf"), float("-inf")])
def test_validate_rejects_bad_price(price):
    with pytest.raises(InvalidInputError):
        validate_new_item({**KINDLE, "price": price})


def test_validate_item_changes_only_touches_present_keys():
    assert validate_item_changes({}) == {}
    assert validate_item_changes({"price": None}) == {"price": None}

    changes = validate_item_changes({"alternate": None})
    assert changes == {
        "alternate_title": None,
        "alternate_url": None,
        "alternate_note": None,
        "alternate_price": None,
    }

    with pytest.raises(InvalidPayloadError):
        validate_item_changes({"alternate": ["Kobo"]})
    with pytest.raises(InvalidInputError):
        validate_item_changes({"description": None})


async def test_item_lifecycle(db_session):
    owner = User(name="Owner", username="owner", email="owner@example.com", password_hash="x")
    viewer = User(name="Viewer", username="viewer", email="viewer@example.com", password_hash="x")
    db_session.add_all([owner, viewer])
    await db_session.commit()

    assert await item_service.list_items(db_session, owner.id) == []
    assert await wishlist_service.get(db_session, owner.id) is None

    item = await item_service.create_item(db_session, owner.id, {**KINDLE, "alternate": {"title": "Kobo"}})
    assert item.alternate.title == "Kobo"
    assert (await wishlist_service.get(db_session, owner.id)).title == "My Wishlist"

    updated = await item_service.update_item(db_session, owner.id, item.id, {"category": "dream"})
    assert updated.category == "dream"
    assert updated.alternate.title == "Kobo"

    with pytest.raises(NotFriendsError):
        await item_service.list_items_for_viewer(db_session, viewer.id, owner.id)

    await wishlist_service.delete(db_session, owner.id)
    assert await item_service.list_items(db_session, owner.id) == []
