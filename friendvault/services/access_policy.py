"""Who may read whose secrets.

Visibility follows the stored direction of an accepted edge: the receiver of
an accepted request can read the sender's secrets. The sender gains nothing
from the same edge, and no mirrored edge is ever created.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from friendvault.exceptions import UnauthorizedError
from friendvault.models.friend_request import STATUS_ACCEPTED, FriendRequest
from friendvault.models.secret_message import SecretMessage
from friendvault.models.user import User

logger = logging.getLogger(__name__)


async def can_view_friend_secrets(
    db: AsyncSession, viewer_id: uuid.UUID, target_id: uuid.UUID
) -> bool:
    result = await db.execute(
        select(FriendRequest.id).where(
            FriendRequest.sender_id == target_id,
            FriendRequest.receiver_id == viewer_id,
            FriendRequest.status == STATUS_ACCEPTED,
        )
    )
    return result.first() is not None


async def get_friend_secrets(
    db: AsyncSession, viewer_id: uuid.UUID, target_id: uuid.UUID
) -> list[dict]:
    """All of the target's secrets, if the viewer is allowed to see them.

    Raises UnauthorizedError otherwise, without saying whether the target
    exists or has any secrets.
    """
    if not await can_view_friend_secrets(db, viewer_id, target_id):
        logger.warning("User %s denied access to secrets of %s", viewer_id, target_id)
        raise UnauthorizedError("You are not friends with this user.")

    result = await db.execute(
        select(SecretMessage, User.email)
        .join(User, User.id == SecretMessage.user_id)
        .where(SecretMessage.user_id == target_id)
        .order_by(SecretMessage.updated_at, SecretMessage.id)
    )
    return [
        {
            "secret_message_id": secret.id,
            "friend_id": secret.user_id,
            "sender_email": email,
            "friend_secret": secret.content,
            "updated_at": secret.updated_at,
        }
        for secret, email in result.all()
    ]
