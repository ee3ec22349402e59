"""
북마크(Bookmark) 관련 Pydantic 스키마.

MongoDB bookmarks 컬렉션의 문서를 표현하고,
API 요청/응답 모델을 정의합니다.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, ValidationError, field_validator

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)
_ALPHA = re.compile(r"^[A-Za-z]+$")


def _check_url(value: str) -> str:
    # 형식만 검증하고 입력 문자열은 그대로 저장 (정규화된 URL로 바꾸지 않음)
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise ValueError("Must be a valid URL")
    return value


class BookmarkCreate(BaseModel):
    """
    북마크 생성 요청 모델.
    title의 허용 문자 검사는 설정값(ALLOWED_CHARS)을 쓰므로 서비스에서 수행합니다.
    """
    title: str = Field(..., min_length=1, description="북마크 제목")
    url: str = Field(..., min_length=1, description="북마크 URL")

    @field_validator("url")
    @classmethod
    def url_must_be_valid(cls, v: str) -> str:
        return _check_url(v)


class BookmarkUpdate(BaseModel):
    """
    북마크 수정 요청 모델.
    """
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)

    @field_validator("title")
    @classmethod
    def title_must_be_alpha(cls, v: str) -> str:
        if not _ALPHA.fullmatch(v):
            raise ValueError("Must only contain letters")
        return v

    @field_validator("url")
    @classmethod
    def url_must_be_valid(cls, v: str) -> str:
        return _check_url(v)


class BookmarkSummary(BaseModel):
    """
    생성/수정/삭제 응답 모델. id와 owner는 포함하지 않습니다.
    """
    title: str
    url: str


class BookmarkOut(BaseModel):
    """
    목록 조회 응답 모델.
    """
    id: str
    title: str
    url: str
    owner: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
