"""Public links, adoption and collaborator grants."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wishshare.config import settings
from wishshare.errors import (
    conflict,
    not_found_or_forbidden,
    private_wishlist,
    validation_error,
)
from wishshare.models.collaborator import Collaborator
from wishshare.models.user import User
from wishshare.models.wishlist import Wishlist

logger = logging.getLogger(__name__)


def resolve_public_wishlist(db: Session, public_id: str) -> Wishlist:
    """Find a wishlist by its public ID.

    Parameters:
        db: Database session.
        public_id: The wishlist's public identifier.

    Returns:
        The wishlist, which is public.

    Raises:
        ApiError: NOT_FOUND_OR_FORBIDDEN if nothing matches or the wishlist
            is no longer public. The private case answers 403 unless
            ``reveal_private_public_lookups`` is off, in which case it is
            reported exactly like an unknown ID.
    """
    wishlist = db.execute(
        select(Wishlist).where(Wishlist.public_id == public_id)
    ).scalar_one_or_none()
    if wishlist is None:
        raise not_found_or_forbidden()
    if not wishlist.is_public:
        if settings.reveal_private_public_lookups:
            raise private_wishlist()
        raise not_found_or_forbidden()
    return wishlist


def _insert_grant(
    db: Session, wishlist: Wishlist, user: User, can_edit: bool
) -> Collaborator:
    grant = Collaborator(user=user, can_edit=can_edit)
    with db.begin_nested():
        wishlist.collaborators.append(grant)
    return grant


def adopt_wishlist(db: Session, user: User, public_id: str) -> Wishlist:
    """Attach a public wishlist to the user's dashboard as a viewer.

    Raises:
        ApiError: NOT_FOUND_OR_FORBIDDEN as for ``resolve_public_wishlist``;
            CONFLICT if the user owns the wishlist or already holds a grant.
    """
    wishlist = resolve_public_wishlist(db, public_id)
    if wishlist.user_id == user.id:
        raise conflict("You already own this wishlist")
    if wishlist.grant_for(user.id) is not None:
        raise conflict("You are already a collaborator on this wishlist")

    try:
        _insert_grant(db, wishlist, user, can_edit=False)
    except IntegrityError:
        # A concurrent request inserted the same grant first.
        db.refresh(wishlist)
        raise conflict("You are already a collaborator on this wishlist")

    logger.info("User %s adopted wishlist %s", user.id, wishlist.id)
    return wishlist


def grant_collaborator(
    db: Session, wishlist: Wishlist, user: User, can_edit: bool
) -> tuple[Collaborator, bool]:
    """Insert or update the grant for ``user`` on ``wishlist``.

    Adding an existing collaborator again updates their permission rather
    than failing.

    Returns:
        The grant and whether it was newly created.

    Raises:
        ApiError: VALIDATION_ERROR if ``user`` owns the wishlist.
    """
    if wishlist.user_id == user.id:
        raise validation_error("The owner cannot be added as a collaborator")

    grant = wishlist.grant_for(user.id)
    if grant is None:
        try:
            grant = _insert_grant(db, wishlist, user, can_edit)
        except IntegrityError:
            db.refresh(wishlist)
            grant = wishlist.grant_for(user.id)
            if grant is None:
                raise
            grant.can_edit = can_edit
            db.flush()
            logger.info(
                "Collaborator %s on wishlist %s updated after concurrent insert",
                user.id,
                wishlist.id,
            )
            return grant, False
        logger.info(
            "Collaborator %s added to wishlist %s (can_edit=%s)",
            user.id,
            wishlist.id,
            can_edit,
        )
        return grant, True

    grant.can_edit = can_edit
    db.flush()
    logger.info(
        "Collaborator %s on wishlist %s set to can_edit=%s",
        user.id,
        wishlist.id,
        can_edit,
    )
    return grant, False


def revoke_collaborator(db: Session, wishlist: Wishlist, user_id: int) -> None:
    grant = wishlist.grant_for(user_id)
    if grant is None:
        raise not_found_or_forbidden("Collaborator not found")
    wishlist.collaborators.remove(grant)
    db.flush()
    logger.info("Collaborator %s removed from wishlist %s", user_id, wishlist.id)
