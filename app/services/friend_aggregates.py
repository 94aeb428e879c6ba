# app/services/friend_aggregates.py
"""
Relation-valued building blocks for friend counts.

Every function here returns an un-executed ``Select``. Callers turn them into
subqueries and join them onto their own statement, so the database computes
all counts inside the one composed query; nothing is cached in Python and no
query is issued per friend.

Rows only exist for users with at least one accepted edge (total) or at least
one shared neighbour (mutual). Consumers must OUTER join and coalesce to 0.
"""

from typing import Iterable, Optional, Union

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import aliased

from app.models.friendship import Friendship, FriendshipStatus

ACCEPTED = FriendshipStatus.accepted


def accepted_friendships() -> Select:
    """(user_id, friend_user_id) for every accepted edge."""
    return select(Friendship.user_id, Friendship.friend_user_id).where(
        Friendship.status == ACCEPTED
    )


def user_total_friend_count(user_ids: Optional[Union[Iterable[int], Select]] = None) -> Select:
    """
    Accepted outgoing edges per user: rows of ``(user_id, total_friend_count)``.

    ``user_ids`` optionally narrows the grouping to a candidate set; it may be
    a list of ids or a select returning one id column.
    """
    stmt = (
        select(
            Friendship.user_id.label("user_id"),
            func.count(Friendship.friend_user_id).label("total_friend_count"),
        )
        .where(Friendship.status == ACCEPTED)
        .group_by(Friendship.user_id)
    )
    if user_ids is not None:
        if isinstance(user_ids, Select):
            # the id select also reads friendships; keep it uncorrelated
            user_ids = user_ids.correlate(None)
        else:
            user_ids = list(user_ids)
        stmt = stmt.where(Friendship.user_id.in_(user_ids))
    return stmt


def user_mutual_friend_count(user_id: int, friend_user_id: int) -> Select:
    """
    Mutual friends of one pair: at most one row of
    ``(user_id=friend_user_id, peer_id=user_id, mutual_friend_count)``.

    f1 walks the friend's edges, f2 walks the user's edges; they meet on the
    shared far endpoint.
    """
    f1 = aliased(Friendship, name="f1")
    f2 = aliased(Friendship, name="f2")

    return (
        select(
            f1.user_id.label("user_id"),
            f2.user_id.label("peer_id"),
            func.count().label("mutual_friend_count"),
        )
        .select_from(f1)
        .join(f2, f1.friend_user_id == f2.friend_user_id)
        .where(
            f1.status == ACCEPTED,
            f2.status == ACCEPTED,
            f1.user_id == friend_user_id,
            f2.user_id == user_id,
            # neither endpoint of the pair counts as its own mutual friend
            f1.friend_user_id.not_in([user_id, friend_user_id]),
        )
        .group_by(f1.user_id, f2.user_id)
    )


def mutual_friend_count_all(user_id: int) -> Select:
    """
    Mutual friend counts between ``user_id`` and each of its friends, in one
    pass: rows of ``(user_id=<friend id>, mutual_friend_count)``.

    The accepted edges are split into the user's own edges and the edges of
    the user's friends, then self-joined on the far endpoint. Each join row is
    one shared neighbour, so grouping by the friend gives the intersection
    size for every friend at once.
    """
    my_friendships = (
        accepted_friendships()
        .where(Friendship.user_id == user_id, Friendship.friend_user_id != user_id)
        .cte("my_friendships")
    )
    friends_friendships = (
        accepted_friendships()
        .where(
            Friendship.user_id != user_id,
            Friendship.user_id.in_(select(my_friendships.c.friend_user_id)),
        )
        .cte("friends_friendships")
    )

    return (
        select(
            friends_friendships.c.user_id.label("user_id"),
            func.count().label("mutual_friend_count"),
        )
        .select_from(my_friendships)
        .join(
            friends_friendships,
            and_(
                my_friendships.c.friend_user_id == friends_friendships.c.friend_user_id,
                # the friend is not a mutual friend of itself
                my_friendships.c.friend_user_id != friends_friendships.c.user_id,
            ),
        )
        .group_by(friends_friendships.c.user_id)
    )
