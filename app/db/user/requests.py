from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.user.models import User


async def get_user_by_id(session: AsyncSession, user_id: str) -> User | None:
    stmt = select(User).where(User.id == user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_app_user(session: AsyncSession, email: str) -> User | None:
    stmt = select(User).where(User.email == email)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_user(
        session: AsyncSession,
        email: str,
        password_hash: str,
) -> User:
    user = User(
        email=email,
        password_hash=password_hash
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(user)
    return user


async def list_users(session: AsyncSession) -> list[User]:
    stmt = select(User).order_by(User.created_at, User.id)
    result = await session.execute(stmt)
    return list(result.scalars().all())
