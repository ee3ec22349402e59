"""Pytest fixtures: SQLite users 테이블 + mongomock bookmarks."""
from collections.abc import Callable, Generator

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.database import Database
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookmark_api.core.security import create_access_token
from bookmark_api.core.settings import Settings, get_settings
from bookmark_api.db.mongodb import get_mongo_db
from bookmark_api.db.postgres import Base, get_db
from bookmark_api.models.user import User


@pytest.fixture
def test_settings() -> Settings:
    return Settings(SECRET_KEY="test-secret", JWT_ALGORITHM="HS256")


@pytest.fixture
def db_session() -> Generator[Session]:
    """In-memory SQLite. TestClient가 다른 스레드에서 쓰므로 StaticPool 사용."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def mongo_db() -> Generator[Database]:
    client = mongomock.MongoClient()
    yield client["test_bookmarks"]
    client.close()


def _add_user(db: Session, username: str) -> User:
    user = User(username=username, is_active=True, token_version=0)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def alice(db_session: Session) -> User:
    return _add_user(db_session, "alice")


@pytest.fixture
def bob(db_session: Session) -> User:
    return _add_user(db_session, "bob")


@pytest.fixture
def make_token(test_settings: Settings) -> Callable[..., str]:
    def _make(username: str, **claims) -> str:
        return create_access_token({"sub": username, **claims}, test_settings)
    return _make


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> Callable[[str], dict]:
    def _headers(username: str) -> dict:
        return {"Authorization": f"Bearer {make_token(username)}"}
    return _headers


@pytest.fixture
def client(
    db_session: Session,
    mongo_db: Database,
    test_settings: Settings,
) -> Generator[TestClient]:
    """lifespan을 돌리지 않도록 with 블록 없이 TestClient 생성."""
    from bookmark_api.main import app

    def override_get_db() -> Generator[Session]:
        yield db_session

    def override_get_mongo_db() -> Generator[Database]:
        yield mongo_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mongo_db] = override_get_mongo_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    yield TestClient(app)

    app.dependency_overrides.clear()
