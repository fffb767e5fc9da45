from datetime import datetime

from sqlalchemy import DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from friendvault.models.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    # id is asserted by the caller, never generated for a real account
    email: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Rows are removed by the database cascade, not loaded by the ORM
    secret_messages: Mapped[list["SecretMessage"]] = relationship(  # noqa: F821
        back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
