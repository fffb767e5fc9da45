import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from friendvault.database import get_db
from friendvault.dependencies import get_current_user_id
from friendvault.schemas.common import ApiResponse
from friendvault.schemas.friend import (
    FriendRequestAccept,
    FriendRequestCreate,
    FriendRequestResponse,
    IncomingFriendRequest,
)
from friendvault.schemas.secret import FriendSecretResponse
from friendvault.services import access_policy, social_service

router = APIRouter(tags=["social"])


@router.post("/add-friend", response_model=ApiResponse[FriendRequestResponse])
async def add_friend(
    data: FriendRequestCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    request = await social_service.send_request(db, user_id, data.receiver_id)
    return ApiResponse[FriendRequestResponse](
        status="pending",
        message="Friend request sent.",
        data=FriendRequestResponse.model_validate(request),
    )


@router.get("/friend-requests", response_model=ApiResponse[list[IncomingFriendRequest]])
async def list_friend_requests(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    requests = await social_service.list_incoming_pending(db, user_id)
    return ApiResponse[list[IncomingFriendRequest]](
        status="fetched",
        message="Incoming friend requests retrieved successfully.",
        data=[IncomingFriendRequest(**r) for r in requests],
    )


@router.post("/friends/accept", response_model=ApiResponse[FriendRequestResponse])
async def accept_friend(
    data: FriendRequestAccept,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    request = await social_service.accept_request(db, data.request_id, user_id)
    return ApiResponse[FriendRequestResponse](
        status="accepted",
        message="Friend request accepted.",
        data=FriendRequestResponse.model_validate(request),
    )


@router.delete("/friends/{request_id}", response_model=ApiResponse[FriendRequestResponse])
async def delete_friend_request(
    request_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    request = await social_service.delete_request(db, request_id, user_id)
    return ApiResponse[FriendRequestResponse](
        status="deleted",
        message="Friend request declined and deleted successfully.",
        data=FriendRequestResponse.model_validate(request),
    )


@router.get("/friends/messages/{friend_id}", response_model=ApiResponse[list[FriendSecretResponse]])
async def get_friend_messages(
    friend_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    secrets = await access_policy.get_friend_secrets(db, user_id, friend_id)
    return ApiResponse[list[FriendSecretResponse]](
        status="retrieved",
        message="Friend secret messages retrieved successfully.",
        data=[FriendSecretResponse(**s) for s in secrets],
    )
