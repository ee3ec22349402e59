"""
Dev 환경용 Mock bookmarks 데이터 생성 스크립트.
"""
from __future__ import annotations
import logging
import random
from datetime import datetime, timedelta, timezone
from pymongo.database import Database
from faker import Faker

from bookmark_api.core.settings import settings

logger = logging.getLogger(__name__)

fake = Faker()
BOOKMARKS_PER_USER = 5


def seed_bookmarks(db: Database, owner_ids: list[int], per_user: int = BOOKMARKS_PER_USER) -> int:
    """
    사용자마다 mock bookmarks를 생성합니다.

    - title: 소문자 영숫자 (ALLOWED_CHARS 기본값 통과)
    - url: Faker URL
    - created_at: 최근 6개월 이내 랜덤

    Returns:
        생성된 bookmarks 개수
    """
    if not owner_ids:
        logger.error("❌ No users found. Please seed users first.")
        return 0

    bookmarks_coll = db[settings.mongo_bookmark_collection]
    logger.info(f"Existing bookmarks: {bookmarks_coll.count_documents({})}")

    now = datetime.now(timezone.utc)
    bookmarks = []
    for owner_id in owner_ids:
        for _ in range(per_user):
            created_at = now - timedelta(days=random.randint(0, 180))
            title = f"{fake.word()}{random.randint(1, 99)}".lower()
            bookmarks.append({
                "title": title,
                "url": fake.url(),
                "owner": owner_id,
                "created_at": created_at,
                "updated_at": created_at,
            })

    result = bookmarks_coll.insert_many(bookmarks)
    logger.info(f"✅ Inserted {len(result.inserted_ids)} bookmarks")
    return len(result.inserted_ids)
