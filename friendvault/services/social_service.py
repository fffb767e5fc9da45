import logging
import uuid

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from friendvault.exceptions import ConflictError, InvalidRequestError, NotFoundError
from friendvault.models.friend_request import STATUS_ACCEPTED, STATUS_PENDING, FriendRequest
from friendvault.models.user import User
from friendvault.services.user_service import get_user

logger = logging.getLogger(__name__)


async def get_request_between(
    db: AsyncSession, sender_id: uuid.UUID, receiver_id: uuid.UUID
) -> FriendRequest | None:
    """Edge for the ordered (sender, receiver) pair, if any."""
    result = await db.execute(
        select(FriendRequest).where(
            FriendRequest.sender_id == sender_id,
            FriendRequest.receiver_id == receiver_id,
        )
    )
    return result.scalar_one_or_none()


async def send_request(
    db: AsyncSession, sender_id: uuid.UUID, receiver_id: uuid.UUID
) -> FriendRequest:
    """Create a pending edge sender -> receiver.

    The existence check gives a clean conflict in the common case; the unique
    index on the pair is what actually guarantees a single edge.
    """
    if sender_id == receiver_id:
        raise InvalidRequestError("Cannot send a friend request to yourself")

    if await get_user(db, sender_id) is None or await get_user(db, receiver_id) is None:
        raise InvalidRequestError("Invalid receiver ID.")

    if await get_request_between(db, sender_id, receiver_id) is not None:
        raise ConflictError("Friend request already sent.")

    request = FriendRequest(
        sender_id=sender_id,
        receiver_id=receiver_id,
        status=STATUS_PENDING,
    )
    db.add(request)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Friend request already sent.")

    logger.info("Friend request %s sent from %s to %s", request.id, sender_id, receiver_id)
    return request


async def list_incoming_pending(db: AsyncSession, user_id: uuid.UUID) -> list[dict]:
    """Pending requests addressed to the user, with the sender's email."""
    result = await db.execute(
        select(FriendRequest, User.email)
        .join(User, User.id == FriendRequest.sender_id)
        .where(
            FriendRequest.receiver_id == user_id,
            FriendRequest.status == STATUS_PENDING,
        )
        .order_by(FriendRequest.created_at)
    )
    return [
        {
            "id": request.id,
            "status": request.status,
            "created_at": request.created_at,
            "sender_id": request.sender_id,
            "receiver_id": request.receiver_id,
            "sender_email": sender_email,
        }
        for request, sender_email in result.all()
    ]


async def accept_request(
    db: AsyncSession, request_id: uuid.UUID, acting_user_id: uuid.UUID
) -> FriendRequest:
    """Accept a request. Only its receiver can; anyone else gets not-found."""
    result = await db.execute(
        select(FriendRequest).where(
            FriendRequest.id == request_id,
            FriendRequest.receiver_id == acting_user_id,
        )
    )
    request = result.scalar_one_or_none()
    if request is None:
        logger.warning("User %s cannot accept friend request %s", acting_user_id, request_id)
        raise NotFoundError("Friend request not found.")

    if request.status != STATUS_ACCEPTED:
        request.status = STATUS_ACCEPTED
        await db.flush()
        logger.info("Friend request %s accepted by %s", request_id, acting_user_id)
    return request


async def delete_request(
    db: AsyncSession, request_id: uuid.UUID, acting_user_id: uuid.UUID
) -> FriendRequest:
    """Decline, withdraw or unfriend. Only the sender or receiver may delete the edge."""
    result = await db.execute(
        select(FriendRequest).where(
            FriendRequest.id == request_id,
            or_(
                FriendRequest.sender_id == acting_user_id,
                FriendRequest.receiver_id == acting_user_id,
            ),
        )
    )
    request = result.scalar_one_or_none()
    if request is None:
        raise NotFoundError("Friend request not found or already deleted.")

    await db.delete(request)
    await db.flush()
    logger.info("Friend request %s deleted by %s", request_id, acting_user_id)
    return request
