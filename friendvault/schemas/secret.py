import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class SecretCreate(BaseModel):
    content: str = Field(max_length=10_000)


class SecretUpdate(BaseModel):
    content: str = Field(max_length=10_000)


class SecretResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    content: str
    updated_at: datetime

    model_config = {"from_attributes": True}


class FriendSecretResponse(BaseModel):
    secret_message_id: uuid.UUID
    friend_id: uuid.UUID
    sender_email: str
    friend_secret: str
    updated_at: datetime
