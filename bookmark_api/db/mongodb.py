import logging
from typing import Generator
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError
from bookmark_api.core.exceptions import MongoDBException
from bookmark_api.core.settings import settings

logger = logging.getLogger(__name__)

# 글로벌 MongoDB 클라이언트 인스턴스
_mongo_client: MongoClient | None = None
_mongo_db: Database | None = None


def _mongo_uri() -> str:
    host = settings.mongo_host
    port = settings.mongo_port
    user = settings.mongo_user
    password = settings.mongo_password
    auth_source = settings.mongo_auth_source

    if user and password:
        return f"mongodb://{user}:{password}@{host}:{port}/?authSource={auth_source}"
    return f"mongodb://{host}:{port}/"


def ensure_indexes(db: Database) -> None:
    """
    bookmarks 컬렉션 인덱스 생성. 이미 있으면 no-op.
    모든 조회가 owner로 범위를 제한하므로 owner 인덱스가 필요합니다.
    """
    db[settings.mongo_bookmark_collection].create_index(
        [("owner", ASCENDING)], name="owner_idx"
    )


def init_mongo() -> None:
    """
    애플리케이션 시작 시 MongoDB 클라이언트 초기화.
    FastAPI lifespan에서 호출됨.
    """
    global _mongo_client, _mongo_db

    if not settings.mongo_host:
        logger.error("MONGO_HOST is not set. MongoDB will not be initialized.")
        return

    try:
        _mongo_client = MongoClient(
            _mongo_uri(),
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            maxPoolSize=100,
        )
        # 연결 테스트
        _mongo_client.admin.command("ping")
        _mongo_db = _mongo_client[settings.mongo_db]
        ensure_indexes(_mongo_db)
        logger.info(
            f"MongoDB initialized: host={settings.mongo_host}:{settings.mongo_port} "
            f"db={settings.mongo_db} user={settings.mongo_user or 'none'}"
        )
    except PyMongoError as e:
        logger.error(f"MongoDB initialization failed: {e}")
        _mongo_client = None
        _mongo_db = None


def close_mongo() -> None:
    """
    애플리케이션 종료 시 MongoDB 클라이언트 종료.
    FastAPI lifespan에서 호출됨.
    """
    global _mongo_client, _mongo_db

    if _mongo_client:
        try:
            _mongo_client.close()
            logger.info("MongoDB connection closed")
        except PyMongoError as e:
            logger.error(f"Error closing MongoDB connection: {e}")
        finally:
            _mongo_client = None
            _mongo_db = None


def get_mongo_db() -> Generator[Database, None, None]:
    """
    FastAPI Dependency Injection용 MongoDB 데이터베이스 제공.

    Usage:
        @router.get("/endpoint")
        def endpoint(db: Database = Depends(get_mongo_db)):
            collection = db["collection_name"]
            ...
    """
    if _mongo_db is None:
        logger.error("MongoDB is not initialized. Call init_mongo() first.")
        raise MongoDBException()

    # PyMongo는 자체적으로 연결 풀을 관리하므로 db 인스턴스만 yield
    yield _mongo_db
