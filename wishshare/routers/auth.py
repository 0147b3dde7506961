import logging

from fastapi import APIRouter, status
from sqlalchemy import select

from wishshare.dependencies import CurrentUser, DbSession, create_access_token
from wishshare.errors import authentication_failed, conflict
from wishshare.models.user import User
from wishshare.schemas.auth import SigninRequest, SignupRequest, TokenResponse
from wishshare.schemas.user import UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED
)
def signup(request: SignupRequest, db: DbSession):
    existing = db.execute(
        select(User).where(User.email == request.email)
    ).scalar_one_or_none()
    if existing is not None:
        raise conflict("User already exists")

    user = User(email=request.email, full_name=request.full_name, password_hash="")
    user.set_password(request.password)
    db.add(user)
    db.flush()

    logger.info("Registered user %s", user.id)
    return TokenResponse(
        access_token=create_access_token(user),
        user=UserRead.model_validate(user),
    )


@router.post("/signin", response_model=TokenResponse)
def signin(request: SigninRequest, db: DbSession):
    user = db.execute(
        select(User).where(User.email == request.email)
    ).scalar_one_or_none()

    if user is None or not user.check_password(request.password):
        raise authentication_failed("Invalid email or password")

    return TokenResponse(
        access_token=create_access_token(user),
        user=UserRead.model_validate(user),
    )


@router.get("/me", response_model=UserRead)
def me(user: CurrentUser):
    return user
