import logging
from typing import Any, Dict

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookmark_api.core.exceptions import AuthenticationException, PostgreSQLException
from bookmark_api.core.security import decode_access_token
from bookmark_api.core.settings import Settings, get_settings
from bookmark_api.db.mongodb import get_mongo_db
from bookmark_api.models.user import User
from bookmark_api.services.bookmark_service import BookmarkService

logger = logging.getLogger(__name__)

# 토큰이 없을 때 FastAPI 기본 403 대신 우리 401 응답을 쓰기 위해 auto_error=False
bearer_scheme = HTTPBearer(auto_error=False)


def get_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Authorization: Bearer 헤더 우선, 없으면 access_token 쿠키."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    token = request.cookies.get("access_token")
    if token:
        return token
    raise AuthenticationException("Not authenticated")


def get_token_claims(
    token: str = Depends(get_token),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    return decode_access_token(token, settings)


def resolve_owner(db: Session, claims: Dict[str, Any]) -> User:
    """
    토큰 claims의 username으로 사용자 조회.
    없는 사용자, 비활성 사용자, 버전이 다른(로그아웃 이후의) 토큰은 인증 실패.
    """
    username = claims["sub"]
    try:
        user = db.query(User).filter(User.username == username).first()
    except SQLAlchemyError as e:
        logger.error(f"User lookup failed for '{username}': {e}", exc_info=True)
        raise PostgreSQLException()

    if user is None or not user.is_active:
        logger.warning(f"Token presented for unknown or inactive user '{username}'")
        raise AuthenticationException()

    try:
        token_ver = int(claims.get("ver", 0))
    except (TypeError, ValueError):
        raise AuthenticationException()
    if token_ver != int(user.token_version or 0):
        raise AuthenticationException("Token has been revoked")

    return user


def get_bookmark_service(
    db: Database = Depends(get_mongo_db),
    settings: Settings = Depends(get_settings),
) -> BookmarkService:
    return BookmarkService(db, settings)
