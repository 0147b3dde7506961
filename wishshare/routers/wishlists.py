import logging

from fastapi import APIRouter, Query, status
from sqlalchemy import delete, or_, select

from wishshare.access import AccessLevel, resolve_access
from wishshare.dependencies import (
    CurrentUser,
    DbSession,
    EditableWishlist,
    OwnedWishlist,
    ViewableWishlist,
)
from wishshare.errors import not_found_or_forbidden
from wishshare.models.collaborator import Collaborator
from wishshare.models.item import Item
from wishshare.models.wishlist import Wishlist
from wishshare.schemas.wishlist import (
    AdoptRequest,
    WishlistCreate,
    WishlistDetail,
    WishlistRead,
    WishlistUpdate,
)
from wishshare.sharing import adopt_wishlist, resolve_public_wishlist

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wishlists", tags=["wishlists"])


def to_detail(wishlist: Wishlist, access_level: AccessLevel | None) -> WishlistDetail:
    detail = WishlistDetail.model_validate(wishlist)
    return detail.model_copy(update={"access_level": access_level})


@router.post("", response_model=WishlistRead, status_code=status.HTTP_201_CREATED)
def create_wishlist(request: WishlistCreate, user: CurrentUser, db: DbSession):
    wishlist = Wishlist(
        name=request.name,
        description=request.description,
        is_public=False,
        owner=user,
        created_by=user,
        updated_by=user,
    )
    if request.is_public:
        wishlist.publish()
    db.add(wishlist)
    db.flush()

    logger.info(
        "User %s created wishlist %s (public=%s)",
        user.id,
        wishlist.id,
        wishlist.is_public,
    )
    return wishlist


@router.get("", response_model=list[WishlistRead])
def list_wishlists(
    user: CurrentUser,
    db: DbSession,
    filter: str | None = Query(default=None, pattern="^(owned|shared)$"),
):
    shared_ids = select(Collaborator.wishlist_id).where(
        Collaborator.user_id == user.id
    )
    if filter == "owned":
        query = select(Wishlist).where(Wishlist.user_id == user.id)
    elif filter == "shared":
        query = select(Wishlist).where(Wishlist.id.in_(shared_ids))
    else:
        query = select(Wishlist).where(
            or_(
                Wishlist.user_id == user.id,
                Wishlist.id.in_(shared_ids),
            )
        )
    return db.execute(query.order_by(Wishlist.id)).scalars().all()


@router.get("/all/public", response_model=list[WishlistRead])
def list_public_wishlists(db: DbSession):
    return db.execute(
        select(Wishlist).where(Wishlist.is_public.is_(True)).order_by(Wishlist.id)
    ).scalars().all()


@router.get("/public/{public_id}", response_model=WishlistDetail)
def get_public_wishlist(public_id: str, db: DbSession):
    return to_detail(resolve_public_wishlist(db, public_id), None)


@router.post(
    "/add-by-public-id",
    response_model=WishlistDetail,
    status_code=status.HTTP_201_CREATED,
)
def add_by_public_id(request: AdoptRequest, user: CurrentUser, db: DbSession):
    wishlist = adopt_wishlist(db, user, request.public_id)
    return to_detail(wishlist, AccessLevel.VIEWER)


@router.get("/{wishlist_id}", response_model=WishlistDetail)
def get_wishlist(wishlist: ViewableWishlist, user: CurrentUser):
    return to_detail(wishlist, resolve_access(wishlist, user.id))


@router.patch("/{wishlist_id}", response_model=WishlistDetail)
def update_wishlist(
    updates: WishlistUpdate,
    wishlist: EditableWishlist,
    user: CurrentUser,
    db: DbSession,
):
    fields = updates.model_dump(exclude_unset=True)
    if fields.get("name") is not None:
        wishlist.name = fields["name"]
    if "description" in fields:
        wishlist.description = fields["description"]
    if fields.get("is_public") is True and not wishlist.is_public:
        issued = wishlist.publish()
        logger.info(
            "Wishlist %s made public by user %s (new public id: %s)",
            wishlist.id,
            user.id,
            issued,
        )
    elif fields.get("is_public") is False and wishlist.is_public:
        wishlist.is_public = False
        logger.info("Wishlist %s made private by user %s", wishlist.id, user.id)

    wishlist.updated_by = user
    db.flush()
    return to_detail(wishlist, resolve_access(wishlist, user.id))


@router.delete("/{wishlist_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_wishlist(wishlist: OwnedWishlist, user: CurrentUser, db: DbSession):
    wishlist_id = wishlist.id
    db.execute(delete(Item).where(Item.wishlist_id == wishlist_id))
    db.execute(delete(Collaborator).where(Collaborator.wishlist_id == wishlist_id))
    result = db.execute(delete(Wishlist).where(Wishlist.id == wishlist_id))
    # Another request removed the row after this one loaded it.
    if result.rowcount == 0:
        raise not_found_or_forbidden()
    logger.info("User %s deleted wishlist %s", user.id, wishlist_id)
