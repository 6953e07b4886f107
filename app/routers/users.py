import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.middleware.jwt import get_current_claims
from app.models.response_model import DashboardResponse, UserResponse
from app.services.auth import verify_identity, list_public_users
from app.services.errors import ServiceError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class UsersRouter:
    def __init__(self, router: APIRouter):
        self.router = router
        self._register_routes()

    def _register_routes(self):
        self.router.get("/dashboard", response_model=DashboardResponse)(self.dashboard)
        self.router.get("/users", response_model=list[UserResponse])(self.list_users)

    @staticmethod
    async def dashboard(
            claims: dict = Depends(get_current_claims),
            db: AsyncSession = Depends(get_db),
    ):
        """Получить пользователя из токена"""
        try:
            user = await verify_identity(db, claims["sub"])
        except ServiceError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Dashboard error: {e}")
            raise HTTPException(status_code=500, detail="Server error fetching user")

        return {"user": UserResponse.model_validate(user)}

    @staticmethod
    async def list_users(
            _: dict = Depends(get_current_claims),
            db: AsyncSession = Depends(get_db),
    ):
        """Получить всех пользователей"""
        try:
            users = await list_public_users(db)
        except Exception as e:
            logger.error(f"Error fetching users: {e}")
            raise HTTPException(status_code=500, detail="Server error fetching users")

        return [UserResponse.model_validate(user) for user in users]
