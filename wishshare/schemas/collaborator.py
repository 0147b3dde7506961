from datetime import datetime

from pydantic import BaseModel, EmailStr, model_validator

from wishshare.schemas.user import UserSummary


class CollaboratorCreate(BaseModel):
    user_id: int | None = None
    email: EmailStr | None = None
    can_edit: bool = False

    @model_validator(mode="after")
    def require_user_id_or_email(self) -> "CollaboratorCreate":
        if self.user_id is None and self.email is None:
            raise ValueError("Either user_id or email is required.")
        return self


class CollaboratorUpdate(BaseModel):
    can_edit: bool


class CollaboratorRead(BaseModel):
    wishlist_id: int
    user_id: int
    can_edit: bool
    user: UserSummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
