# app/services/friendship_service.py

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.common.errors import ConflictError, NotFoundError, ValidationError, ensure_user_id
from app.models.friendship import Friendship, FriendshipRequestRead, FriendshipStatus
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class FriendshipService:
    """
    Write side of the friend graph.

    Each ordered pair has one edge whose status is overwritten in place.
    Accepting a request flips the requester's edge and creates or updates the
    reverse edge in the same transaction, so accepted edges always come in
    pairs.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_edge(self, user_id: int, friend_user_id: int) -> Optional[Friendship]:
        return self.db.get(Friendship, (user_id, friend_user_id))

    def _get_pending(self, requester_id: int, user_id: int) -> Friendship:
        edge = self._get_edge(requester_id, user_id)
        if edge is None or edge.status != FriendshipStatus.requested:
            raise NotFoundError(f"No pending friendship request from user {requester_id}")
        return edge

    def _set_edge(self, user_id: int, friend_user_id: int, status: FriendshipStatus) -> Friendship:
        edge = self._get_edge(user_id, friend_user_id)
        if edge is None:
            edge = Friendship(user_id=user_id, friend_user_id=friend_user_id, status=status)
            self.db.add(edge)
        else:
            edge.status = status
        return edge

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def send_request(self, user_id: int, friend_user_id: int) -> FriendshipRequestRead:
        ensure_user_id(user_id, "user_id")
        ensure_user_id(friend_user_id, "friend_user_id")
        if user_id == friend_user_id:
            raise ValidationError("Cannot send a friendship request to yourself")

        # NotFoundError for an unknown target
        UserService(self.db).get_user(friend_user_id)

        existing = self._get_edge(user_id, friend_user_id)
        if existing is not None and existing.status == FriendshipStatus.accepted:
            raise ConflictError(f"User {friend_user_id} is already a friend")

        # re-requesting after a decline resets the same edge
        edge = self._set_edge(user_id, friend_user_id, FriendshipStatus.requested)
        self._commit()

        logger.info("Friendship requested: %s -> %s", user_id, friend_user_id)
        return FriendshipRequestRead.model_validate(edge)

    def accept_request(self, user_id: int, friend_user_id: int) -> FriendshipRequestRead:
        """Accept the pending request ``friend_user_id -> user_id``."""
        ensure_user_id(user_id, "user_id")
        ensure_user_id(friend_user_id, "friend_user_id")

        pending = self._get_pending(friend_user_id, user_id)
        pending.status = FriendshipStatus.accepted
        edge = self._set_edge(user_id, friend_user_id, FriendshipStatus.accepted)
        self._commit()

        logger.info("Friendship accepted: %s <-> %s", friend_user_id, user_id)
        return FriendshipRequestRead.model_validate(edge)

    def decline_request(self, user_id: int, friend_user_id: int) -> FriendshipRequestRead:
        """Decline the pending request ``friend_user_id -> user_id``."""
        ensure_user_id(user_id, "user_id")
        ensure_user_id(friend_user_id, "friend_user_id")

        pending = self._get_pending(friend_user_id, user_id)
        pending.status = FriendshipStatus.declined
        self._commit()

        logger.info("Friendship declined: %s -> %s", friend_user_id, user_id)
        return FriendshipRequestRead.model_validate(pending)

    def get_outgoing_requests(self, user_id: int) -> List[FriendshipRequestRead]:
        ensure_user_id(user_id, "user_id")

        stmt = (
            select(Friendship)
            .where(
                Friendship.user_id == user_id,
                Friendship.status != FriendshipStatus.accepted,
            )
            .order_by(Friendship.friend_user_id)
        )
        return [FriendshipRequestRead.model_validate(edge) for edge in self.db.scalars(stmt)]
