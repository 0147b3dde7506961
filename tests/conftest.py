import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from wishshare.config import settings
from wishshare.database import Base
from wishshare.dependencies import get_db, create_access_token
from wishshare.main import app
from wishshare.models.collaborator import Collaborator
from wishshare.models.user import User
from wishshare.models.wishlist import Wishlist

if settings.test_database_url.startswith("sqlite"):
    test_engine = create_engine(
        settings.test_database_url,
        connect_args={"check_same_thread": False},
    )

    # Let SQLAlchemy drive BEGIN/SAVEPOINT instead of pysqlite.
    @event.listens_for(test_engine, "connect")
    def _sqlite_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(test_engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")

else:
    test_engine = create_engine(settings.test_database_url)

TestSession = sessionmaker(bind=test_engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    connection = test_engine.connect()
    transaction = connection.begin()
    session = TestSession(bind=connection)
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def second_db(db):
    """A second session on the same connection, standing in for a concurrent request."""
    session = TestSession(bind=db.get_bind())
    yield session
    session.close()


def _make_user(db, email, full_name, password="password123"):
    user = User(email=email, full_name=full_name, password_hash="x")
    user.set_password(password)
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def owner_user(db):
    return _make_user(db, "alice@example.com", "Alice Owner", "alicepass123")


@pytest.fixture
def other_user(db):
    return _make_user(db, "bob@example.com", "Bob Other", "bobpass123")


@pytest.fixture
def third_user(db):
    return _make_user(db, "carol@example.com", "Carol Third", "carolpass123")


@pytest.fixture
def owner_headers(owner_user):
    return {"Authorization": f"Bearer {create_access_token(owner_user)}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(other_user)}"}


@pytest.fixture
def third_headers(third_user):
    return {"Authorization": f"Bearer {create_access_token(third_user)}"}


@pytest.fixture
def private_wishlist(db, owner_user):
    wishlist = Wishlist(
        name="Birthday",
        is_public=False,
        owner=owner_user,
        created_by=owner_user,
        updated_by=owner_user,
    )
    db.add(wishlist)
    db.flush()
    return wishlist


@pytest.fixture
def public_wishlist(db, owner_user):
    wishlist = Wishlist(
        name="Christmas",
        description="Open to everyone",
        is_public=False,
        owner=owner_user,
        created_by=owner_user,
        updated_by=owner_user,
    )
    wishlist.publish()
    db.add(wishlist)
    db.flush()
    return wishlist


def _add_grant(db, wishlist, user, can_edit):
    grant = Collaborator(user=user, can_edit=can_edit)
    wishlist.collaborators.append(grant)
    db.flush()
    return grant


@pytest.fixture
def viewer_grant(db, private_wishlist, other_user):
    return _add_grant(db, private_wishlist, other_user, can_edit=False)


@pytest.fixture
def editor_grant(db, private_wishlist, other_user):
    return _add_grant(db, private_wishlist, other_user, can_edit=True)


@pytest.fixture
def create_user(db):
    def factory(email, full_name, password="password123"):
        return _make_user(db, email, full_name, password)

    return factory


@pytest.fixture
def create_grant(db):
    def factory(wishlist, user, can_edit=False):
        return _add_grant(db, wishlist, user, can_edit)

    return factory
