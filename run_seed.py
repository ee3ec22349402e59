"""
Dev 환경용 Mock 데이터 생성 CLI 스크립트.

PostgreSQL users 테이블과 MongoDB bookmarks 컬렉션에 mock 데이터를 삽입합니다.
- dev 환경에서만 실행됩니다.
- PostgreSQL: Users
- MongoDB: Bookmarks

사용 예시:
    python run_seed.py
    python run_seed.py --only=users
    python run_seed.py --only=bookmarks
    python run_seed.py --print-tokens  # 사용자별 Bearer 토큰 출력
    python run_seed.py --force  # dev 환경 체크 무시
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
BACKEND_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(BACKEND_ROOT))

from bookmark_api.core.logging_config import setup_logging
from bookmark_api.core.security import create_access_token
from bookmark_api.core.settings import settings
from bookmark_api.db.postgres import get_db, init_db
from bookmark_api.db.mongodb import get_mongo_db, init_mongo, close_mongo
from bookmark_api.models.user import User
from bookmark_api.seed.users_seed import seed_users
from bookmark_api.seed.bookmarks_seed import seed_bookmarks

logger = logging.getLogger(__name__)


def check_environment(force: bool = False) -> None:
    """
    dev 환경인지 확인합니다.
    """
    app_env = settings.app_env.lower()

    if app_env != "dev" and not force:
        logger.error(
            f"❌ Current environment is '{app_env}'. "
            "Mock data seeding is only allowed in 'dev' environment."
        )
        logger.info("If you want to run anyway, use --force flag.")
        sys.exit(1)

    if force and app_env != "dev":
        logger.warning(f"⚠️ Force mode enabled. Seeding in '{app_env}' environment...")
    else:
        logger.info(f"✅ Environment check passed: {app_env}")


def seed_users_only() -> None:
    logger.info("Seeding Users only...")
    init_db(settings)
    db = next(get_db())
    try:
        seed_users(db)
        logger.info("✅ Users seeding completed!")
    except Exception as e:
        logger.error(f"❌ Error during PostgreSQL seeding: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def seed_bookmarks_only() -> None:
    logger.info("Seeding Bookmarks only...")
    db = next(get_db())
    try:
        owner_ids = [uid for (uid,) in db.query(User.id).all()]
    finally:
        db.close()

    init_mongo()
    try:
        seed_bookmarks(next(get_mongo_db()), owner_ids)
        logger.info("✅ Bookmarks seeding completed!")
    finally:
        close_mongo()


def print_tokens() -> None:
    """seed된 사용자마다 API 호출용 Bearer 토큰을 로그로 출력."""
    db = next(get_db())
    try:
        for user in db.query(User).order_by(User.id).all():
            token = create_access_token(
                {"sub": user.username, "ver": user.token_version or 0}, settings
            )
            logger.info(f"{user.username}: Bearer {token}")
    finally:
        db.close()


def seed_all() -> None:
    logger.info("=" * 60)
    logger.info("Starting FULL mock data seeding...")
    logger.info("=" * 60)

    seed_users_only()
    seed_bookmarks_only()

    logger.info("✅ All mock data seeding completed successfully!")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Dev 환경용 Mock 데이터 생성 CLI"
    )
    parser.add_argument(
        "--only",
        choices=["users", "bookmarks", "all"],
        default="all",
        help="특정 테이블/컬렉션만 시딩 (기본값: all)",
    )
    parser.add_argument(
        "--print-tokens",
        action="store_true",
        help="시딩 후 사용자별 Bearer 토큰 출력",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="dev 환경 체크 무시 (위험: 주의해서 사용)",
    )

    args = parser.parse_args(argv)

    setup_logging()

    # 환경 체크
    check_environment(force=args.force)

    # 시딩 실행
    if args.only == "users":
        seed_users_only()
    elif args.only == "bookmarks":
        seed_bookmarks_only()
    else:
        seed_all()

    if args.print_tokens:
        print_tokens()


if __name__ == "__main__":
    main()
