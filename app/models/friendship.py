# app/models/friendship.py

import enum

from pydantic import PositiveInt
from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Index, Integer, func

from app.models.base import Base, CamelModel


class FriendshipStatus(str, enum.Enum):
    requested = "requested"
    declined = "declined"
    accepted = "accepted"


class Friendship(Base):
    """
    One directed edge (user_id -> friend_user_id).

    An accepted friendship is stored as two rows, one per direction. The
    composite primary key keeps a single current status per ordered pair.
    """

    __tablename__ = "friendships"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    friend_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    status = Column(
        Enum(
            FriendshipStatus,
            name="friendship_status",
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses],
            validate_strings=True,
        ),
        nullable=False,
        default=FriendshipStatus.requested,
    )

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("user_id <> friend_user_id", name="ck_friendships_not_self"),
        # the mutual-friend self-join probes edges by their far endpoint
        Index("ix_friendships_friend_user_id_status", "friend_user_id", "status"),
    )


class FriendshipRequestCreate(CamelModel):
    friend_user_id: PositiveInt


class FriendshipRequestRead(CamelModel):
    user_id: PositiveInt
    friend_user_id: PositiveInt
    status: FriendshipStatus
