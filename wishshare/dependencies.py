import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated, Callable

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from wishshare.access import AccessLevel, resolve_access
from wishshare.config import settings
from wishshare.database import SessionLocal
from wishshare.errors import authentication_failed, not_found_or_forbidden
from wishshare.models.user import User
from wishshare.models.wishlist import Wishlist

logger = logging.getLogger(__name__)


def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


DbSession = Annotated[Session, Depends(get_db)]

security = HTTPBearer(auto_error=False)


def create_access_token(user: User) -> str:
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "exp": datetime.now(timezone.utc)
        + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: DbSession,
) -> User:
    if credentials is None:
        raise authentication_failed()

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
        user_id = int(payload["sub"])
    except (jwt.InvalidTokenError, ValueError) as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise authentication_failed("Invalid access token")

    user = db.get(User, user_id)
    if user is None:
        raise authentication_failed("Invalid access token")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def load_wishlist(
    db: Session,
    wishlist_id: int,
    user: User,
    allowed: Callable[[AccessLevel], bool],
) -> Wishlist:
    """Load a wishlist the user is allowed to act on.

    Parameters:
        db: Database session.
        wishlist_id: Internal wishlist ID.
        user: The authenticated user.
        allowed: Predicate over the user's access level.

    Raises:
        ApiError: NOT_FOUND_OR_FORBIDDEN if the wishlist does not exist or
            the user's access level is insufficient. Both cases are
            indistinguishable to the caller.
    """
    wishlist = db.get(Wishlist, wishlist_id)
    if wishlist is None:
        raise not_found_or_forbidden()
    if not allowed(resolve_access(wishlist, user.id)):
        raise not_found_or_forbidden()
    return wishlist


def get_wishlist_for_viewer(
    wishlist_id: int, user: CurrentUser, db: DbSession
) -> Wishlist:
    return load_wishlist(db, wishlist_id, user, lambda level: level.can_read)


def get_wishlist_for_editor(
    wishlist_id: int, user: CurrentUser, db: DbSession
) -> Wishlist:
    return load_wishlist(db, wishlist_id, user, lambda level: level.can_edit)


def get_wishlist_for_owner(
    wishlist_id: int, user: CurrentUser, db: DbSession
) -> Wishlist:
    return load_wishlist(db, wishlist_id, user, lambda level: level.can_manage)


ViewableWishlist = Annotated[Wishlist, Depends(get_wishlist_for_viewer)]
EditableWishlist = Annotated[Wishlist, Depends(get_wishlist_for_editor)]
OwnedWishlist = Annotated[Wishlist, Depends(get_wishlist_for_owner)]
