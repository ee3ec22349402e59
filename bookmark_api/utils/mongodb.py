"""
MongoDB 관련 유틸리티 함수.

ObjectId 변환, 문서 직렬화 등 MongoDB 작업에 필요한 공통 함수를 제공합니다.
"""

from bson import ObjectId
from bson.errors import InvalidId
from typing import Any, Dict, Optional


def parse_object_id(id_str: Optional[str]) -> Optional[ObjectId]:
    """
    문자열을 ObjectId로 변환.

    값이 없거나 형식이 잘못된 경우 None을 반환합니다.
    잘못된 형식의 ID는 어떤 문서와도 일치할 수 없으므로
    호출 측에서 "찾을 수 없음"으로 처리합니다.

    Example:
        >>> parse_object_id("507f1f77bcf86cd799439011")
        ObjectId('507f1f77bcf86cd799439011')
        >>> parse_object_id("not-an-id") is None
        True
    """
    if not id_str:
        return None
    try:
        return ObjectId(id_str)
    except (InvalidId, TypeError):
        return None


def serialize_object_id(doc: Dict[str, Any], *fields: str) -> Dict[str, Any]:
    """
    MongoDB 문서의 ObjectId 필드를 문자열로 변환.

    지정된 필드들의 ObjectId를 문자열로 변환합니다.
    필드가 지정되지 않으면 "_id"만 변환합니다.
    원본 문서를 수정하며, 체이닝을 위해 문서를 반환합니다.
    """
    if not fields:
        fields = ("_id",)

    for field in fields:
        if field in doc and doc[field] is not None:
            doc[field] = str(doc[field])

    return doc


def serialize_bookmark(doc: Dict[str, Any]) -> Dict[str, Any]:
    """
    bookmarks 문서를 API 응답용으로 직렬화.

    - "_id"를 문자열로 바꿔 "id"로 이동
    - 나머지 필드는 그대로 유지

    Example:
        >>> serialize_bookmark({"_id": ObjectId(...), "title": "abc", "owner": 1})
        {"title": "abc", "owner": 1, "id": "507f..."}
    """
    out = dict(doc)
    serialize_object_id(out, "_id")
    if "_id" in out:
        out["id"] = out.pop("_id")
    return out
