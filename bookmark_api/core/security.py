from datetime import datetime, timedelta, timezone
from typing import Optional, Any, Dict
from jose import ExpiredSignatureError, JWTError, jwt

from bookmark_api.core.exceptions import AuthenticationException
from bookmark_api.core.settings import Settings


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    토큰 서명/만료를 검증하고 claims를 반환.
    실패하면 항상 AuthenticationException을 발생시킵니다.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthenticationException("Token has expired")
    except JWTError:
        raise AuthenticationException()

    # sub은 username
    if not payload.get("sub"):
        raise AuthenticationException()
    return payload
