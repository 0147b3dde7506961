from datetime import datetime

from pydantic import BaseModel


class UserSummary(BaseModel):
    id: int
    full_name: str
    email: str

    model_config = {"from_attributes": True}


class UserRead(BaseModel):
    id: int
    email: str
    full_name: str
    created_at: datetime

    model_config = {"from_attributes": True}
