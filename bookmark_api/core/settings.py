from __future__ import annotations
from functools import lru_cache
from pathlib import Path
import os
from typing import Sequence
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

def _base_dir() -> Path:
    return Path(__file__).resolve().parents[2]

def _env_files() -> Sequence[Path]:
    base = _base_dir()
    app_env = os.getenv("APP_ENV", "local")
    candidates = [
        base / ".env",
        base / f".env.{app_env}",
        base / ".env.local",
        base / f".env.{app_env}.local",
        base / "env" / app_env / ".env",
    ]
    seen = []
    for p in candidates:
        if p.is_file() and p not in seen:
            seen.append(p)
    return seen

class Settings(BaseSettings):
    app_env: str = Field(default="local", validation_alias="APP_ENV")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # PostgreSQL: users 테이블 조회 전용
    db_host: str = Field(default="localhost", validation_alias="POSTGRES_HOST")
    db_port: int = Field(default=5432, validation_alias="POSTGRES_PORT")
    db_user: str = Field(default="postgres", validation_alias="POSTGRES_USER")
    db_password: str = Field(default="", validation_alias="POSTGRES_PASSWORD")
    db_name: str = Field(default="app", validation_alias="POSTGRES_DB")

    # Mongo
    mongo_host: str = Field(default="localhost", validation_alias="MONGO_HOST")
    mongo_port: int = Field(default=27017, validation_alias="MONGO_PORT")
    mongo_user: str | None = Field(default=None, validation_alias="MONGO_USER")
    mongo_password: str | None = Field(default=None, validation_alias="MONGO_PASSWORD")
    mongo_auth_source: str = Field(default="admin", validation_alias="MONGO_AUTH_SOURCE")
    mongo_db: str = Field(default="bookmarks", validation_alias="MONGO_DB")
    mongo_bookmark_collection: str = Field(default="bookmarks", validation_alias="MONGO_BOOKMARK_COLLECTION")
    mongo_timeout_ms: int = Field(default=5000, validation_alias="MONGO_TIMEOUT_MS")

    # Auth/JWT
    secret_key: str = Field(default="change-me-in-prod", validation_alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # 북마크 title 허용 문자 (정규식, 전체 일치)
    allowed_chars: str = Field(default=r"^[a-z0-9]+$", validation_alias="ALLOWED_CHARS")

    # 쉼표로 구분된 origin 목록
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:3001", validation_alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=_env_files(),
        env_file_encoding="utf-8",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    캐시된 Settings 인스턴스.
    라우터에서는 Depends(get_settings)로 주입받고, 테스트에서는 override 합니다.
    """
    return Settings()


settings = get_settings()
