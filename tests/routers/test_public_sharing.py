from sqlalchemy import func, select

from wishshare.config import settings
from wishshare.models.collaborator import Collaborator
from wishshare.models.wishlist import Wishlist


def test_get_by_public_id_anonymous(client, public_wishlist, owner_user):
    response = client.get(f"/wishlists/public/{public_wishlist.public_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == public_wishlist.id
    assert data["owner"]["id"] == owner_user.id
    assert data["access_level"] is None


def test_get_by_unknown_public_id(client):
    response = client.get("/wishlists/public/does-not-exist")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND_OR_FORBIDDEN"


def test_get_by_public_id_after_made_private(client, db, public_wishlist):
    public_wishlist.is_public = False
    db.flush()

    response = client.get(f"/wishlists/public/{public_wishlist.public_id}")
    assert response.status_code == 403
    assert response.json()["error"] == {
        "code": "NOT_FOUND_OR_FORBIDDEN",
        "message": "This wishlist is private",
        "details": None,
    }


def test_private_public_id_hidden_when_not_revealed(
    client, db, public_wishlist, monkeypatch
):
    monkeypatch.setattr(settings, "reveal_private_public_lookups", False)
    public_wishlist.is_public = False
    db.flush()

    private = client.get(f"/wishlists/public/{public_wishlist.public_id}")
    unknown = client.get("/wishlists/public/does-not-exist")
    assert private.status_code == unknown.status_code == 404
    assert private.json() == unknown.json()


def test_adopt_public_wishlist(client, other_user, other_headers, public_wishlist):
    response = client.post(
        "/wishlists/add-by-public-id",
        headers=other_headers,
        json={"public_id": public_wishlist.public_id},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["id"] == public_wishlist.id
    assert data["access_level"] == "viewer"
    grants = {c["user_id"]: c["can_edit"] for c in data["collaborators"]}
    assert grants == {other_user.id: False}

    listed = client.get("/wishlists?filter=shared", headers=other_headers)
    assert [w["id"] for w in listed.json()] == [public_wishlist.id]


def test_adopted_wishlist_stays_visible_when_private(
    client, db, other_headers, public_wishlist
):
    client.post(
        "/wishlists/add-by-public-id",
        headers=other_headers,
        json={"public_id": public_wishlist.public_id},
    )
    public_wishlist.is_public = False
    db.flush()

    response = client.get(f"/wishlists/{public_wishlist.id}", headers=other_headers)
    assert response.status_code == 200
    assert response.json()["access_level"] == "viewer"


def test_adopt_gives_no_edit_rights(client, other_headers, public_wishlist):
    client.post(
        "/wishlists/add-by-public-id",
        headers=other_headers,
        json={"public_id": public_wishlist.public_id},
    )
    response = client.post(
        f"/wishlists/{public_wishlist.id}/items",
        headers=other_headers,
        json={"name": "Sneaky"},
    )
    assert response.status_code == 404


def test_adopt_own_wishlist(client, owner_headers, public_wishlist):
    response = client.post(
        "/wishlists/add-by-public-id",
        headers=owner_headers,
        json={"public_id": public_wishlist.public_id},
    )
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "You already own this wishlist"


def test_adopt_twice(client, other_headers, public_wishlist):
    payload = {"public_id": public_wishlist.public_id}
    first = client.post("/wishlists/add-by-public-id", headers=other_headers, json=payload)
    second = client.post("/wishlists/add-by-public-id", headers=other_headers, json=payload)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["message"] == (
        "You are already a collaborator on this wishlist"
    )


def test_adopt_keeps_existing_edit_grant(
    client, db, other_headers, public_wishlist, other_user, create_grant
):
    create_grant(public_wishlist, other_user, can_edit=True)

    response = client.post(
        "/wishlists/add-by-public-id",
        headers=other_headers,
        json={"public_id": public_wishlist.public_id},
    )
    assert response.status_code == 409
    assert public_wishlist.grant_for(other_user.id).can_edit is True


def test_adopt_unknown_public_id(client, other_headers):
    response = client.post(
        "/wishlists/add-by-public-id",
        headers=other_headers,
        json={"public_id": "does-not-exist"},
    )
    assert response.status_code == 404


def test_adopt_private_wishlist(client, db, other_headers, public_wishlist):
    public_wishlist.is_public = False
    db.flush()

    response = client.post(
        "/wishlists/add-by-public-id",
        headers=other_headers,
        json={"public_id": public_wishlist.public_id},
    )
    assert response.status_code == 403


def test_adopt_unauthenticated(client, public_wishlist):
    response = client.post(
        "/wishlists/add-by-public-id",
        json={"public_id": public_wishlist.public_id},
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"


def test_adopt_missing_public_id(client, other_headers):
    response = client.post("/wishlists/add-by-public-id", headers=other_headers, json={})
    assert response.status_code == 422


def test_adopt_after_concurrent_grant(
    client, db, second_db, other_user, other_headers, public_wishlist
):
    assert public_wishlist.collaborators == []
    concurrent = second_db.get(Wishlist, public_wishlist.id)
    concurrent.collaborators.append(Collaborator(user_id=other_user.id, can_edit=False))
    second_db.flush()

    response = client.post(
        "/wishlists/add-by-public-id",
        headers=other_headers,
        json={"public_id": public_wishlist.public_id},
    )

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "CONFLICT"
    assert error["message"] == "You are already a collaborator on this wishlist"
    assert db.execute(
        select(func.count())
        .select_from(Collaborator)
        .where(Collaborator.wishlist_id == public_wishlist.id)
    ).scalar_one() == 1
