import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wishshare.database import Base


def generate_public_id() -> str:
    return str(uuid.uuid4())


class Wishlist(Base):
    __tablename__ = "wishlists"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(String(500), default=None)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    # Once issued, a public id stays with the wishlist for good.
    public_id: Mapped[str | None] = mapped_column(
        String(36), unique=True, index=True, default=None
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    created_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), default=None
    )
    updated_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), default=None
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now()
    )

    owner: Mapped["User"] = relationship(
        "User", lazy="selectin", foreign_keys=[user_id]
    )
    created_by: Mapped[Optional["User"]] = relationship(
        "User", lazy="selectin", foreign_keys=[created_by_id]
    )
    updated_by: Mapped[Optional["User"]] = relationship(
        "User", lazy="selectin", foreign_keys=[updated_by_id]
    )

    items: Mapped[list["Item"]] = relationship(
        "Item",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Item.id",
    )
    collaborators: Mapped[list["Collaborator"]] = relationship(
        "Collaborator",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Collaborator.created_at",
    )

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def shared_public_id(self) -> str | None:
        """The public ID, hidden while the wishlist is private."""
        return self.public_id if self.is_public else None

    def publish(self) -> bool:
        """Mark the wishlist public, issuing a public id on first publication.

        Returns True when a new public id was issued.
        """
        self.is_public = True
        if self.public_id is None:
            self.public_id = generate_public_id()
            return True
        return False

    def grant_for(self, user_id: int) -> Optional["Collaborator"]:
        for grant in self.collaborators:
            if grant.user_id == user_id:
                return grant
        return None
