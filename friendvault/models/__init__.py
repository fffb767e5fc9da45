from friendvault.models.base import Base
from friendvault.models.friend_request import FriendRequest
from friendvault.models.secret_message import SecretMessage
from friendvault.models.user import User

__all__ = [
    "Base",
    "FriendRequest",
    "SecretMessage",
    "User",
]
