import asyncio
import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.config import Settings
from app.db.user.models import User
from app.db.user.requests import get_app_user, create_user, get_user_by_id, list_users
from app.middleware.jwt import create_access_token
from app.services.errors import InvalidInput, DuplicateUser, InvalidCredentials, NotFound
from app.services.password import MAX_PASSWORD_BYTES, hash_password, verify_password

logger = logging.getLogger(__name__)


@lru_cache()
def _dummy_hash(rounds: int) -> str:
    return hash_password("dummy-password", rounds=rounds)


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


async def register_user(db: AsyncSession, settings: Settings, email: str, password: str) -> User:
    """Создать пользователя с bcrypt-хешем пароля"""
    email = _normalize_email(email)
    if not email or not password:
        raise InvalidInput("Email and password are required")
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    existing_user = await get_app_user(db, email)
    if existing_user:
        raise DuplicateUser("User already exists")

    password_hash = await asyncio.to_thread(hash_password, password, settings.BCRYPT_ROUNDS)
    try:
        user = await create_user(db, email, password_hash)
    except IntegrityError:
        # зарегистрирован параллельно между проверкой и вставкой
        raise DuplicateUser("User already exists")

    logger.info(f"User {user.id} registered")
    return user


async def login_user(db: AsyncSession, settings: Settings, email: str, password: str) -> str:
    """Проверить пароль и выдать токен; ответ одинаков для неизвестного email и неверного пароля"""
    email = _normalize_email(email)
    user = await get_app_user(db, email) if email else None

    if user is None:
        dummy_hash = await asyncio.to_thread(_dummy_hash, settings.BCRYPT_ROUNDS)
        await asyncio.to_thread(verify_password, password or "", dummy_hash)
        logger.info("Login failed: unknown email")
        raise InvalidCredentials("Invalid credentials")

    if not await asyncio.to_thread(verify_password, password or "", user.password_hash):
        logger.info(f"Login failed for user {user.id}: wrong password")
        raise InvalidCredentials("Invalid credentials")

    logger.info(f"User {user.id} logged in")
    return create_access_token(settings, user.id)


async def verify_identity(db: AsyncSession, user_id: str) -> User:
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def list_public_users(db: AsyncSession) -> list[User]:
    return await list_users(db)
