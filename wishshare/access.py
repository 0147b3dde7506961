from enum import Enum

from wishshare.models.wishlist import Wishlist


class AccessLevel(str, Enum):
    """What a requester may do with a wishlist and its items."""

    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"
    NONE = "none"

    @property
    def can_read(self) -> bool:
        return self is not AccessLevel.NONE

    @property
    def can_edit(self) -> bool:
        return self in (AccessLevel.OWNER, AccessLevel.EDITOR)

    @property
    def can_manage(self) -> bool:
        return self is AccessLevel.OWNER


def resolve_access(wishlist: Wishlist, user_id: int | None) -> AccessLevel:
    """Decide the access level of ``user_id`` on ``wishlist``.

    Ownership wins, then an explicit collaborator grant, then the public
    flag. A grant is honoured whatever the visibility, so making a
    wishlist public never downgrades an editor and making it private never
    locks a collaborator out.

    Parameters:
        wishlist: The wishlist, with its collaborators loaded.
        user_id: The requesting user's ID, or None for anonymous requests.

    Returns:
        The requester's access level.
    """
    if user_id is not None:
        if wishlist.user_id == user_id:
            return AccessLevel.OWNER
        grant = wishlist.grant_for(user_id)
        if grant is not None:
            return AccessLevel.EDITOR if grant.can_edit else AccessLevel.VIEWER
    if wishlist.is_public:
        return AccessLevel.VIEWER
    return AccessLevel.NONE
