import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from friendvault.exceptions import InvalidRequestError, NotFoundError
from friendvault.models.user import User

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, user_id: uuid.UUID, email: str) -> tuple[User, bool]:
    """Insert the user unless a row with this id exists.

    Returns the stored row and whether it was created by this call. An existing
    row is returned as-is; its email is never overwritten.
    """
    email = email.strip()
    if not email:
        raise InvalidRequestError("Email cannot be empty")

    existing = await get_user(db, user_id)
    if existing is not None:
        return existing, False

    user = User(id=user_id, email=email)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same id
        await db.rollback()
        existing = await get_user(db, user_id)
        if existing is None:
            raise
        return existing, False

    logger.info("Created user %s", user_id)
    return user, True


async def delete_user(db: AsyncSession, user_id: uuid.UUID) -> User:
    """Delete the user. Secrets and friend requests go with it via ON DELETE CASCADE."""
    user = await get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found or already deleted.")

    await db.delete(user)
    await db.flush()
    logger.info("Deleted user %s", user_id)
    return user
