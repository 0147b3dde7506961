from pydantic import BaseModel, EmailStr, Field

from wishshare.schemas.user import UserRead


class SignupRequest(BaseModel):
    full_name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=255)


class SigninRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=255)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
