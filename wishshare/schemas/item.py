from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, Field, TypeAdapter

from wishshare.schemas.user import UserSummary

_http_url = TypeAdapter(AnyHttpUrl)


def _check_http_url(value: str) -> str:
    _http_url.validate_python(value)
    return value


HttpUrlStr = Annotated[str, Field(max_length=2048), AfterValidator(_check_http_url)]
Price = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class ItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: Price | None = None
    url: HttpUrlStr | None = None
    image_url: HttpUrlStr | None = None


class ItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: Price | None = None
    url: HttpUrlStr | None = None
    image_url: HttpUrlStr | None = None


class ItemRead(BaseModel):
    id: int
    wishlist_id: int
    name: str
    description: str | None
    price: Decimal | None
    url: str | None
    image_url: str | None
    created_by: UserSummary | None
    updated_by: UserSummary | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
