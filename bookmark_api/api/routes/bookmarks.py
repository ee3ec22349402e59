from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookmark_api.api.deps import get_bookmark_service, get_token_claims, resolve_owner
from bookmark_api.core.exceptions import bookmark_not_found
from bookmark_api.db.postgres import get_db
from bookmark_api.schemas.bookmark import (
    BookmarkCreate,
    BookmarkOut,
    BookmarkSummary,
    BookmarkUpdate,
)
from bookmark_api.services.bookmark_service import BookmarkService

router = APIRouter(prefix="/bookmark", tags=["bookmark"])

# 순서: 인증(claims) → 본문 검증 → owner 조회 → 저장소 작업
# 본문 검증은 FastAPI가 의존성 해결 직후에 수행합니다.


@router.get("", response_model=List[BookmarkOut])
def list_bookmarks(
    claims: Dict[str, Any] = Depends(get_token_claims),
    service: BookmarkService = Depends(get_bookmark_service),
    db: Session = Depends(get_db),
):
    owner = resolve_owner(db, claims)
    return service.list_bookmarks(owner)


@router.post("", response_model=BookmarkSummary)
def create_bookmark(
    payload: BookmarkCreate,
    claims: Dict[str, Any] = Depends(get_token_claims),
    service: BookmarkService = Depends(get_bookmark_service),
    db: Session = Depends(get_db),
):
    # 설정값 기반 title 검사도 owner 조회 전에 끝냄
    service.check_title(payload.title)
    owner = resolve_owner(db, claims)
    return service.create_bookmark(owner, payload)


@router.put("/{bookmark_id}", response_model=BookmarkSummary)
def update_bookmark(
    bookmark_id: str,
    payload: BookmarkUpdate,
    claims: Dict[str, Any] = Depends(get_token_claims),
    service: BookmarkService = Depends(get_bookmark_service),
    db: Session = Depends(get_db),
):
    owner = resolve_owner(db, claims)
    return service.update_bookmark(owner, bookmark_id, payload)


# id 없는 경로: 일치할 수 없는 조회이므로 항상 404 (쿼리스트링의 id는 무시)
@router.put("", response_model=BookmarkSummary, include_in_schema=False)
def update_bookmark_without_id(
    payload: BookmarkUpdate,
    claims: Dict[str, Any] = Depends(get_token_claims),
    db: Session = Depends(get_db),
):
    resolve_owner(db, claims)
    raise bookmark_not_found(None)


@router.delete("/{bookmark_id}", response_model=BookmarkSummary)
def delete_bookmark(
    bookmark_id: str,
    claims: Dict[str, Any] = Depends(get_token_claims),
    service: BookmarkService = Depends(get_bookmark_service),
    db: Session = Depends(get_db),
):
    owner = resolve_owner(db, claims)
    return service.delete_bookmark(owner, bookmark_id)


@router.delete("", response_model=BookmarkSummary, include_in_schema=False)
def delete_bookmark_without_id(
    claims: Dict[str, Any] = Depends(get_token_claims),
    db: Session = Depends(get_db),
):
    resolve_owner(db, claims)
    raise bookmark_not_found(None)
