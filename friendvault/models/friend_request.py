import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from friendvault.models.base import Base, utcnow

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"


class FriendRequest(Base):
    """Directed edge sender -> receiver. Declining deletes the row."""

    __tablename__ = "friend_requests"

    sender_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    receiver_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=STATUS_PENDING, server_default=STATUS_PENDING
    )  # pending, accepted
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("friend_requests_unique_pair_idx", "sender_id", "receiver_id", unique=True),
        CheckConstraint("sender_id <> receiver_id", name="not_self"),
        CheckConstraint("status IN ('pending', 'accepted')", name="status_values"),
    )
