from fastapi import APIRouter, status

from wishshare.dependencies import CurrentUser, DbSession, EditableWishlist
from wishshare.errors import not_found_or_forbidden
from wishshare.models.item import Item
from wishshare.models.wishlist import Wishlist
from wishshare.schemas.item import ItemCreate, ItemRead, ItemUpdate

router = APIRouter(prefix="/wishlists/{wishlist_id}/items", tags=["items"])


def get_item(wishlist: Wishlist, item_id: int) -> Item:
    for item in wishlist.items:
        if item.id == item_id:
            return item
    raise not_found_or_forbidden("Item not found")


@router.post("", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
def create_item(
    request: ItemCreate, wishlist: EditableWishlist, user: CurrentUser, db: DbSession
):
    item = Item(
        name=request.name,
        description=request.description,
        price=request.price,
        url=request.url,
        image_url=request.image_url,
        created_by=user,
        updated_by=user,
    )
    wishlist.items.append(item)
    db.flush()
    return item


@router.patch("/{item_id}", response_model=ItemRead)
def update_item(
    item_id: int,
    updates: ItemUpdate,
    wishlist: EditableWishlist,
    user: CurrentUser,
    db: DbSession,
):
    item = get_item(wishlist, item_id)
    for field, value in updates.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(item, field, value)
    item.updated_by = user
    db.flush()
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int, wishlist: EditableWishlist, db: DbSession):
    item = get_item(wishlist, item_id)
    wishlist.items.remove(item)
    db.flush()
