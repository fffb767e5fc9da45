import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from friendvault.exceptions import InvalidRequestError, NotFoundError
from friendvault.models.base import utcnow
from friendvault.models.secret_message import SecretMessage
from friendvault.services.user_service import get_user

logger = logging.getLogger(__name__)


def _clean_content(content: str | None) -> str:
    if not isinstance(content, str) or not content.strip():
        raise InvalidRequestError("Secret message content cannot be empty")
    return content.strip()


async def create_secret(db: AsyncSession, owner_id: uuid.UUID, content: str) -> SecretMessage:
    """Store a new secret for the owner. Earlier secrets are kept."""
    content = _clean_content(content)

    if await get_user(db, owner_id) is None:
        raise InvalidRequestError("User account does not exist")

    secret = SecretMessage(user_id=owner_id, content=content, updated_at=utcnow())
    db.add(secret)
    await db.flush()
    return secret


async def list_secrets(db: AsyncSession, owner_id: uuid.UUID) -> list[SecretMessage]:
    result = await db.execute(
        select(SecretMessage)
        .where(SecretMessage.user_id == owner_id)
        .order_by(SecretMessage.updated_at, SecretMessage.id)
    )
    return list(result.scalars().all())


async def update_secret(
    db: AsyncSession, secret_id: uuid.UUID, content: str, acting_user_id: uuid.UUID
) -> SecretMessage:
    """Replace the content of a secret owned by the acting user.

    A secret owned by someone else is reported exactly like a missing one.
    """
    content = _clean_content(content)

    result = await db.execute(
        select(SecretMessage).where(
            SecretMessage.id == secret_id,
            SecretMessage.user_id == acting_user_id,
        )
    )
    secret = result.scalar_one_or_none()
    if secret is None:
        logger.warning("User %s cannot update secret %s", acting_user_id, secret_id)
        raise NotFoundError("Secret message not found or not owned by user.")

    secret.content = content
    secret.updated_at = utcnow()
    await db.flush()
    return secret
