from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

# 앱 시작 시 로깅 설정 적용
from bookmark_api.core.logging_config import setup_logging
setup_logging()  # 가장 먼저 호출

from bookmark_api.core.settings import settings
from bookmark_api.core.exceptions import (
    AppException,
    AuthenticationException,
    DatabaseException,
    ResourceNotFoundException,
    ValidationException,
)
from bookmark_api.api.routes.bookmarks import router as bookmarks_router
from bookmark_api.db.postgres import init_db
from bookmark_api.db.mongodb import init_mongo, close_mongo

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    try:
        # PostgreSQL users 테이블 준비
        init_db(settings)
    except Exception as e:
        logger.error(f"init_db failed: {e}")

    init_mongo()

    yield

    # Shutdown
    close_mongo()


app = FastAPI(title="Bookmark API", lifespan=lifespan)


def _error_response(err: dict, headers: dict | None = None) -> JSONResponse:
    # 모든 에러 본문: {"err": {"status", "type", "error", ...}}
    return JSONResponse(status_code=err["status"], content={"err": err}, headers=headers)


# Exception handlers
@app.exception_handler(DatabaseException)
async def database_exception_handler(request: Request, exc: DatabaseException):
    """데이터베이스 관련 예외 처리 (원인은 발생 지점에서 이미 로깅됨)"""
    logger.error(f"Database error at {request.url.path}: {exc}")
    return _error_response(exc.to_dict())


@app.exception_handler(AuthenticationException)
async def authentication_exception_handler(request: Request, exc: AuthenticationException):
    """인증 실패 예외 처리"""
    logger.warning(f"Authentication failed at {request.url.path}: {exc}")
    return _error_response(exc.to_dict(), headers={"WWW-Authenticate": "Bearer"})


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """검증 실패, 리소스 없음 등 나머지 애플리케이션 예외 처리"""
    logger.warning(f"{exc.error_type} at {request.url.path}: {exc}")
    return _error_response(exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """FastAPI 본문/파라미터 검증 실패를 ValidationException 형태로 변환"""
    fields = []
    for e in exc.errors():
        loc = [str(p) for p in e.get("loc", ()) if p != "body"]
        ctx_error = (e.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error is not None else e.get("msg", "Invalid value")
        fields.append({"field": ".".join(loc) or "body", "message": message})
    logger.warning(f"Validation error at {request.url.path}: {fields}")
    return _error_response(ValidationException(fields=fields).to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """라우팅 404/405 등 프레임워크 HTTP 예외도 같은 형태로 응답"""
    if exc.status_code == ResourceNotFoundException.status_code:
        error_type = ResourceNotFoundException.error_type
    else:
        error_type = "http_error"
    err = {"status": exc.status_code, "type": error_type, "error": str(exc.detail)}
    return _error_response(err, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error at {request.url.path}")
    return _error_response(AppException().to_dict())


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Authorization"],
)

app.include_router(bookmarks_router)


@app.get("/")
def root():
    return {"message": "Bookmark API"}
