from fastapi import APIRouter, Response, status
from sqlalchemy import select

from wishshare.dependencies import DbSession, OwnedWishlist, ViewableWishlist
from wishshare.errors import not_found_or_forbidden
from wishshare.models.user import User
from wishshare.schemas.collaborator import (
    CollaboratorCreate,
    CollaboratorRead,
    CollaboratorUpdate,
)
from wishshare.sharing import grant_collaborator, revoke_collaborator

router = APIRouter(
    prefix="/wishlists/{wishlist_id}/collaborators", tags=["collaborators"]
)


@router.get("", response_model=list[CollaboratorRead])
def list_collaborators(wishlist: ViewableWishlist):
    return wishlist.collaborators


@router.post("", response_model=CollaboratorRead, status_code=status.HTTP_201_CREATED)
def add_collaborator(
    request: CollaboratorCreate,
    wishlist: OwnedWishlist,
    response: Response,
    db: DbSession,
):
    """Add a collaborator, or update the permission of an existing one.

    Parameters:
        request: Target user (by ID or email) and edit permission.
        wishlist: The wishlist (verified owner).
        response: Used to downgrade the status to 200 on update.
        db: Database session.

    Returns:
        The collaborator grant.
    """
    if request.user_id is not None:
        target = db.get(User, request.user_id)
    else:
        target = db.execute(
            select(User).where(User.email == request.email)
        ).scalar_one_or_none()
    if target is None:
        raise not_found_or_forbidden("User not found")

    grant, created = grant_collaborator(db, wishlist, target, request.can_edit)
    if not created:
        response.status_code = status.HTTP_200_OK
    return grant


@router.patch("/{user_id}", response_model=CollaboratorRead)
def update_collaborator(
    user_id: int,
    request: CollaboratorUpdate,
    wishlist: OwnedWishlist,
    db: DbSession,
):
    grant = wishlist.grant_for(user_id)
    if grant is None:
        raise not_found_or_forbidden("Collaborator not found")
    grant, _ = grant_collaborator(db, wishlist, grant.user, request.can_edit)
    return grant


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_collaborator(user_id: int, wishlist: OwnedWishlist, db: DbSession):
    revoke_collaborator(db, wishlist, user_id)
