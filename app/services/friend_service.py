# app/services/friend_service.py

import logging
from typing import List

import pydantic
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, aliased

from app.common.errors import NotFoundError, RecordShapeError, ensure_user_id
from app.models.friend import FriendRecord
from app.models.friendship import Friendship, FriendshipStatus
from app.models.user import User
from app.services.friend_aggregates import (
    mutual_friend_count_all,
    user_mutual_friend_count,
    user_total_friend_count,
)

logger = logging.getLogger(__name__)


class FriendService:
    """Read side of the friend graph: enriched friend records for a user."""

    def __init__(self, db: Session):
        self.db = db

    def _friends_query(self, requester_id: int, total, mutual) -> Select:
        # users ⋈ accepted edge ⟕ total ⟕ mutual, counts defaulting to 0
        friends = aliased(User, name="friends")
        return (
            select(
                friends.id.label("id"),
                friends.full_name.label("full_name"),
                friends.phone_number.label("phone_number"),
                func.coalesce(total.c.total_friend_count, 0).label("total_friend_count"),
                func.coalesce(mutual.c.mutual_friend_count, 0).label("mutual_friend_count"),
            )
            .select_from(friends)
            .join(Friendship, Friendship.friend_user_id == friends.id)
            .outerjoin(total, total.c.user_id == friends.id)
            .outerjoin(mutual, mutual.c.user_id == friends.id)
            .where(
                Friendship.user_id == requester_id,
                Friendship.status == FriendshipStatus.accepted,
            )
        )

    @staticmethod
    def _to_record(row) -> FriendRecord:
        try:
            return FriendRecord.model_validate(dict(row))
        except pydantic.ValidationError as e:
            raise RecordShapeError(f"Friend row has an unexpected shape: {e}") from e

    def get_friend(self, requester_id: int, friend_user_id: int) -> FriendRecord:
        ensure_user_id(requester_id, "requester_id")
        ensure_user_id(friend_user_id, "friend_user_id")

        total = user_total_friend_count([friend_user_id]).subquery("user_total_friend_count")
        mutual = user_mutual_friend_count(requester_id, friend_user_id).subquery(
            "user_mutual_friend_count"
        )
        stmt = self._friends_query(requester_id, total, mutual).where(
            Friendship.friend_user_id == friend_user_id
        )

        row = self.db.execute(stmt).mappings().first()
        if row is None:
            raise NotFoundError(f"User {friend_user_id} is not a friend of user {requester_id}")

        logger.debug("Friend %s of user %s: %s", friend_user_id, requester_id, dict(row))
        return self._to_record(row)

    def get_all_friends(self, requester_id: int) -> List[FriendRecord]:
        ensure_user_id(requester_id, "requester_id")

        mine = aliased(Friendship, name="mine")
        my_friend_ids = select(mine.friend_user_id).where(
            mine.user_id == requester_id,
            mine.status == FriendshipStatus.accepted,
        )
        total = user_total_friend_count(my_friend_ids).subquery("user_total_friend_count")
        mutual = mutual_friend_count_all(requester_id).subquery("mutual_friend_count")
        stmt = self._friends_query(requester_id, total, mutual).order_by(Friendship.friend_user_id)

        rows = self.db.execute(stmt).mappings().all()
        logger.debug("User %s has %d friends", requester_id, len(rows))
        return [self._to_record(row) for row in rows]
