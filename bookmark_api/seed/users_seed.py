"""
Dev 환경용 Mock 사용자 데이터 생성 스크립트.

users 테이블은 다른 서비스 소유이지만, 로컬/dev에서는
북마크 API를 호출해 볼 사용자가 필요하므로 여기서 채웁니다.
"""
from __future__ import annotations
import logging
from sqlalchemy.orm import Session

from bookmark_api.models.user import User

logger = logging.getLogger(__name__)

NUM_USERS = 20


def seed_users(db: Session, num_users: int = NUM_USERS) -> list[User]:
    """
    user_0001 ... 형식의 사용자를 생성합니다.
    - 이미 존재하는 username은 스킵
    """
    existing_usernames = {u.username for u in db.query(User.username).all()}
    created_users = []

    logger.info(f"Generating {num_users} mock users...")

    for i in range(num_users):
        username = f"user_{i+1:04d}"
        if username in existing_usernames:
            logger.debug(f"User '{username}' already exists, skipping...")
            continue
        created_users.append(User(username=username, is_active=True, token_version=0))

    if created_users:
        db.add_all(created_users)
        db.commit()
        logger.info(f"✅ Total {len(created_users)} users created successfully!")
    else:
        logger.info("No new users to create.")

    return created_users
