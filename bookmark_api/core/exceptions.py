"""
커스텀 예외 클래스 정의.

이 모듈은 애플리케이션 전체에서 사용할 예외 클래스들을 정의합니다.
예외 계층 구조를 통해 타입별 에러 처리가 가능하며,
모든 예외는 to_dict()로 동일한 형태의 에러 본문을 만듭니다.

    {"status": 404, "type": "not_found", "error": "Bookmark not found.", "id": "..."}
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional


class AppException(Exception):
    """
    애플리케이션 기본 예외.

    모든 커스텀 예외의 기본 클래스입니다.
    하위 클래스는 status_code와 error_type만 바꿉니다.
    """
    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "Internal server error", **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "status": self.status_code,
            "type": self.error_type,
            "error": self.message,
        }
        body.update(self.extra)
        return body


class AuthenticationException(AppException):
    """
    인증 실패.

    토큰이 없거나, 서명/만료 검증에 실패했거나,
    토큰의 사용자를 찾을 수 없을 때 사용됩니다.
    """
    status_code = 401
    error_type = "unauthorized"

    def __init__(self, message: str = "Could not validate credentials", **extra: Any):
        super().__init__(message, **extra)


class ValidationException(AppException):
    """
    입력값 검증 실패.

    요청 데이터의 형식이나 값이 유효하지 않을 때 사용됩니다.
    fields에는 {"field": ..., "message": ...} 목록이 들어갑니다.
    """
    status_code = 400
    error_type = "validation_failed"

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[List[Dict[str, str]]] = None,
    ):
        super().__init__(message, fields=fields or [])


class ResourceNotFoundException(AppException):
    """
    리소스를 찾을 수 없음.

    요청한 북마크가 없거나 호출자 소유가 아닐 때 사용됩니다.
    """
    status_code = 404
    error_type = "not_found"


class DatabaseException(AppException):
    """
    데이터베이스 관련 예외.

    PostgreSQL, MongoDB 등 모든 데이터베이스 작업 중 발생하는
    일반적인 에러에 사용됩니다. 드라이버 메시지는 클라이언트에 노출하지 않습니다.
    """
    error_type = "store_error"

    def __init__(self, message: str = "Database operation failed", **extra: Any):
        super().__init__(message, **extra)


class MongoDBException(DatabaseException):
    """
    MongoDB 관련 예외.

    MongoDB 연결 실패, 쿼리 실패 등에 사용됩니다.
    """
    pass


class PostgreSQLException(DatabaseException):
    """
    PostgreSQL 관련 예외.

    사용자 조회 실패 등에 사용됩니다.
    """
    pass


def bookmark_not_found(bookmark_id: Optional[str]) -> ResourceNotFoundException:
    return ResourceNotFoundException("Bookmark not found.", id=bookmark_id)
