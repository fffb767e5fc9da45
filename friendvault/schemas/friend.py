import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class FriendRequestCreate(BaseModel):
    receiver_id: uuid.UUID


class FriendRequestAccept(BaseModel):
    request_id: uuid.UUID = Field(alias="requestId")

    model_config = {"populate_by_name": True}


class FriendRequestResponse(BaseModel):
    id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class IncomingFriendRequest(FriendRequestResponse):
    sender_email: str
