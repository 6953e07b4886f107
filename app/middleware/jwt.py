import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Request, status
from jose import JWTError, jwt

from app.config.config import Settings
from app.services.errors import Unauthenticated

logger = logging.getLogger(__name__)


def create_access_token(settings: Settings, user_id: str) -> str:
    """Создать JWT токен с id пользователя в sub"""
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
    }
    return jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )


class AuthVerifier(ABC):
    """Проверка заголовка Authorization"""

    @abstractmethod
    def verify(self, header: str | None) -> dict:
        """Вернуть claims или выбросить Unauthenticated"""


class JWTAuthVerifier(AuthVerifier):
    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTAuthVerifier":
        return cls(settings.JWT_SECRET, settings.JWT_ALGORITHM)

    @staticmethod
    def extract_token(header: str | None) -> str:
        if not header or not header.startswith("Bearer "):
            raise Unauthenticated("No token provided")
        # всё после префикса проверяет jwt.decode
        return header[len("Bearer "):]

    def verify(self, header: str | None) -> dict:
        token = self.extract_token(header)
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm]
            )
        except JWTError as e:
            logger.error(f"JWT decode error: {e}")
            raise Unauthenticated("Invalid or expired token")

        if not payload.get("sub"):
            logger.error("JWT decode error: token has no subject")
            raise Unauthenticated("Invalid or expired token")
        return payload


async def get_current_claims(request: Request) -> dict:
    """Проверить bearer токен защищённого маршрута"""
    verifier: AuthVerifier = request.app.state.auth_verifier
    try:
        claims = verifier.verify(request.headers.get("Authorization"))
    except Unauthenticated as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.claims = claims
    return claims
