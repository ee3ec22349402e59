"""
북마크 CRUD 서비스.

모든 작업은 호출자(owner) 범위로 제한됩니다.
수정/삭제는 {_id, owner} 조건의 단일 find_one_and_* 호출로
소유권 확인과 변경을 원자적으로 수행합니다.
"""
from __future__ import annotations
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from bookmark_api.core.exceptions import (
    MongoDBException,
    ValidationException,
    bookmark_not_found,
)
from bookmark_api.core.settings import Settings
from bookmark_api.models.user import User
from bookmark_api.schemas.bookmark import BookmarkCreate, BookmarkUpdate
from bookmark_api.utils.mongodb import parse_object_id, serialize_bookmark

logger = logging.getLogger(__name__)


def _summary(doc: Dict[str, Any]) -> Dict[str, str]:
    return {"title": doc["title"], "url": doc["url"]}


class BookmarkService:
    def __init__(self, db: Database, settings: Settings):
        self.settings = settings
        self.collection: Collection = db[settings.mongo_bookmark_collection]
        self._allowed_chars = re.compile(settings.allowed_chars)

    def check_title(self, title: str) -> None:
        """생성 시 title이 허용 문자 패턴과 전체 일치하는지 검사."""
        if not self._allowed_chars.fullmatch(title):
            raise ValidationException(
                fields=[{"field": "title", "message": "Must only contain lowercase alpha numeric"}]
            )

    def list_bookmarks(self, owner: User) -> List[Dict[str, Any]]:
        try:
            docs = list(self.collection.find({"owner": owner.id}))
        except PyMongoError as e:
            logger.error(f"Failed to list bookmarks for user {owner.id}: {e}", exc_info=True)
            raise MongoDBException()
        return [serialize_bookmark(doc) for doc in docs]

    def create_bookmark(self, owner: User, payload: BookmarkCreate) -> Dict[str, str]:
        """title 허용 문자 검사(check_title)는 라우터에서 owner 조회 전에 수행됨."""
        now = datetime.now(timezone.utc)
        doc = {
            "title": payload.title,
            "url": payload.url,
            "owner": owner.id,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Failed to create bookmark for user {owner.id}: {e}", exc_info=True)
            raise MongoDBException()

        logger.info(f"Bookmark {result.inserted_id} created by user {owner.id}")
        return _summary(doc)

    def update_bookmark(
        self, owner: User, bookmark_id: Optional[str], payload: BookmarkUpdate
    ) -> Dict[str, str]:
        obj_id = parse_object_id(bookmark_id)
        if obj_id is None:
            raise bookmark_not_found(bookmark_id)

        # 본인 북마크만 수정 가능
        try:
            doc = self.collection.find_one_and_update(
                {"_id": obj_id, "owner": owner.id},
                {"$set": {
                    "title": payload.title,
                    "url": payload.url,
                    "updated_at": datetime.now(timezone.utc),
                }},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update bookmark {bookmark_id}: {e}", exc_info=True)
            raise MongoDBException()

        if doc is None:
            raise bookmark_not_found(bookmark_id)

        logger.info(f"Bookmark {bookmark_id} updated by user {owner.id}")
        return _summary(doc)

    def delete_bookmark(self, owner: User, bookmark_id: Optional[str]) -> Dict[str, str]:
        obj_id = parse_object_id(bookmark_id)
        if obj_id is None:
            raise bookmark_not_found(bookmark_id)

        try:
            doc = self.collection.find_one_and_delete({"_id": obj_id, "owner": owner.id})
        except PyMongoError as e:
            logger.error(f"Failed to delete bookmark {bookmark_id}: {e}", exc_info=True)
            raise MongoDBException()

        if doc is None:
            raise bookmark_not_found(bookmark_id)

        logger.info(f"Bookmark {bookmark_id} deleted by user {owner.id}")
        return _summary(doc)
