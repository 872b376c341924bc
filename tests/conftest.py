"""Test configuration and fixtures.

Every test gets its own in-memory SQLite database, a FastAPI app wired to
it and a bearer header signed with the test secret.
"""
from typing import Callable, Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from user_api.adapters.db.sqlalchemy import (
    Base,
    SQLAlchemyUnitOfWork,
    create_db_engine,
    create_session_factory,
)
from user_api.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from user_api.adapters.security.jwt_tokens import JWTTokenIssuer
from user_api.application.http.fastapi import create_app
from user_api.config import Settings
from user_api.domain.user import User

TEST_SECRET = "test-secret-with-enough-length-for-hs256"


@pytest.fixture(scope="session")
def fake() -> Faker:
    return Faker()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite:///:memory:",
        token_secret=TEST_SECRET,
        token_expiration_in_hours=1,
        bcrypt_rounds=4,
    )


@pytest.fixture
def hasher(settings: Settings) -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


@pytest.fixture
def session_factory(settings: Settings) -> Generator[sessionmaker, None, None]:
    """Fresh schema in a private in-memory database."""
    engine = create_db_engine(settings.database_url)
    Base.metadata.create_all(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def client(
    settings: Settings, session_factory: sessionmaker, hasher: BcryptPasswordHasher
) -> Generator[TestClient, None, None]:
    app = create_app(settings, session_factory=session_factory, hasher=hasher)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_header(settings: Settings) -> dict:
    token, _ = JWTTokenIssuer(settings.token_secret, settings.token_expiration_in_hours).issue("tests")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def random_user(fake: Faker, hasher: BcryptPasswordHasher) -> Callable[[], User]:
    def build() -> User:
        return User(
            name=fake.name(),
            email=fake.unique.safe_email(),
            password_hash=hasher.hash(fake.password()),
        )
    return build


@pytest.fixture
def save_users(session_factory: sessionmaker) -> Callable[..., list[User]]:
    """Insert users straight through the repository, bypassing HTTP."""
    def save(*users: User) -> list[User]:
        with SQLAlchemyUnitOfWork(session_factory) as uow:
            uow.users.add_all(list(users))
            uow.commit()
        return list(users)
    return save


@pytest.fixture
def file_client(
    settings: Settings, hasher: BcryptPasswordHasher, tmp_path
) -> Generator[TestClient, None, None]:
    """Client on a file-backed SQLite database, one connection per thread."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'users.db'}")
    Base.metadata.create_all(engine)
    app = create_app(settings, session_factory=create_session_factory(engine), hasher=hasher)
    with TestClient(app) as test_client:
        yield test_client
    engine.dispose()
