from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from wishshare.access import AccessLevel
from wishshare.schemas.collaborator import CollaboratorRead
from wishshare.schemas.item import ItemRead
from wishshare.schemas.user import UserSummary


class WishlistCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    is_public: bool = False


class WishlistUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    is_public: bool | None = None


class AdoptRequest(BaseModel):
    public_id: str = Field(min_length=1, max_length=36)


class WishlistRead(BaseModel):
    id: int
    name: str
    description: str | None
    is_public: bool
    public_id: str | None = Field(
        validation_alias=AliasChoices("shared_public_id", "public_id")
    )
    user_id: int
    owner: UserSummary
    item_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WishlistDetail(BaseModel):
    id: int
    name: str
    description: str | None
    is_public: bool
    public_id: str | None = Field(
        validation_alias=AliasChoices("shared_public_id", "public_id")
    )
    user_id: int
    owner: UserSummary
    created_by: UserSummary | None
    updated_by: UserSummary | None
    items: list[ItemRead]
    collaborators: list[CollaboratorRead]
    access_level: AccessLevel | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
