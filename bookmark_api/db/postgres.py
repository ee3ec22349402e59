"""
users 테이블 조회용 PostgreSQL 연결.

북마크는 MongoDB에 저장하고, 이 엔진은 owner(User) 조회에만 사용합니다.
"""
from __future__ import annotations
import logging
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, URL
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from bookmark_api.core.settings import Settings, get_settings

Base = declarative_base()

_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None

logger = logging.getLogger(__name__)


def postgres_url(settings: Settings) -> URL:
    # URL.create가 사용자/비밀번호 특수문자를 처리
    return URL.create(
        "postgresql+psycopg2",
        username=settings.db_user or None,
        password=settings.db_password or None,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
    )


def get_engine(settings: Settings | None = None) -> Engine:
    global _engine
    if _engine is None:
        settings = settings or get_settings()
        logger.info(
            f"Initializing Postgres engine host={settings.db_host} port={settings.db_port} "
            f"user={settings.db_user} db={settings.db_name}"
        )
        _engine = create_engine(postgres_url(settings), pool_pre_ping=True)
    return _engine


def _get_sessionmaker() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False)
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """요청 단위 세션. 조회 전용이므로 commit하지 않음."""
    db = _get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()


def init_db(settings: Settings | None = None) -> None:
    # users 테이블이 없을 때만 생성 (로컬/dev)
    from bookmark_api.models import user  # noqa: F401  모델 등록
    Base.metadata.create_all(bind=get_engine(settings))
