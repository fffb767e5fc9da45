import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from friendvault.database import get_db
from friendvault.dependencies import get_current_user_id
from friendvault.exceptions import NotFoundError
from friendvault.schemas.common import ApiResponse
from friendvault.schemas.user import UserCreate, UserResponse
from friendvault.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=ApiResponse[UserResponse], status_code=201)
async def create_user(
    data: UserCreate,
    response: Response,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create the account for the asserted identity. Repeating the call is harmless."""
    user, created = await user_service.create_user(db, user_id, data.email)
    if not created:
        response.status_code = 200
        return ApiResponse[UserResponse](
            status="exists",
            message="User already exists.",
            data=UserResponse.model_validate(user),
        )
    return ApiResponse[UserResponse](
        status="created",
        message="User created successfully.",
        data=UserResponse.model_validate(user),
    )


@router.delete("/{target_id}", response_model=ApiResponse[UserResponse])
async def delete_user(
    target_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    # Accounts can only be deleted by their owner
    if target_id != user_id:
        raise NotFoundError("User not found or already deleted.")

    user = await user_service.delete_user(db, target_id)
    return ApiResponse[UserResponse](
        status="deleted",
        message="User deleted successfully.",
        data=UserResponse.model_validate(user),
    )
