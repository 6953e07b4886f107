import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.config import Settings, get_app_settings
from app.db.database import get_db
from app.middleware.jwt import get_current_claims
from app.models.request_model import RegisterRequest, LoginRequest
from app.models.response_model import RegisterResponse, TokenResponse, ProtectedResponse, UserResponse
from app.services.auth import register_user, login_user
from app.services.errors import ServiceError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class AuthRouter:
    def __init__(self, router: APIRouter):
        self.router = router
        self._register_routes()

    def _register_routes(self):
        self.router.post(
            "/auth/register", status_code=201, response_model=RegisterResponse
        )(self.register)
        self.router.post("/auth/login", response_model=TokenResponse)(self.login)
        self.router.get("/auth/protected", response_model=ProtectedResponse)(self.protected)

    @staticmethod
    async def register(
            payload: RegisterRequest,
            db: AsyncSession = Depends(get_db),
            settings: Settings = Depends(get_app_settings),
    ):
        try:
            user = await register_user(db, settings, payload.email, payload.password)
        except ServiceError as e:
            logger.warning(f"Registration rejected: {e.message}")
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Registration error: {e}")
            raise HTTPException(status_code=500, detail="Server error during registration")

        return {"user": UserResponse.model_validate(user)}

    @staticmethod
    async def login(
            payload: LoginRequest,
            db: AsyncSession = Depends(get_db),
            settings: Settings = Depends(get_app_settings),
    ):
        try:
            token = await login_user(db, settings, payload.email, payload.password)
        except ServiceError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Login error: {e}")
            raise HTTPException(status_code=500, detail="Server error during login")

        return {"token": token, "token_type": "bearer"}

    @staticmethod
    async def protected(claims: dict = Depends(get_current_claims)):
        """Вернуть данные из проверенного токена"""
        return {"message": "Access granted", "claims": claims}
