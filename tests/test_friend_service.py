"""
Tests for FriendService: enriched friend records with total and mutual counts.

Graphs are built through FriendshipService so both directions of every
accepted friendship exist, exactly as they would in production.
"""

import random

import pytest

from app.common.errors import NotFoundError, RecordShapeError, ValidationError
from app.models.friend import FriendRecord
from app.models.friendship import Friendship, FriendshipStatus


def by_id(records):
    return {record.id: record for record in records}


# ============================================================================
# Scenarios
# ============================================================================


def test_star_graph_target_total(users, friendship_service, friend_service):
    """B, C, D and E each ask A; A accepts all four."""
    a = users["A"]
    for name in "BCDE":
        friendship_service.send_request(users[name], a)
    for name in "BCDE":
        friendship_service.accept_request(a, users[name])

    record = friend_service.get_friend(users["B"], a)

    assert record.id == a
    assert record.full_name == "User A"
    assert record.total_friend_count == 4
    assert record.mutual_friend_count == 0


def test_one_shared_edge(users, friendship_service, friend_service):
    """Star graph plus C -> B accepted: A and B share C."""
    a, b, c = users["A"], users["B"], users["C"]
    for name in "BCDE":
        friendship_service.send_request(users[name], a)
    friendship_service.send_request(c, b)
    for name in "BCDE":
        friendship_service.accept_request(a, users[name])
    friendship_service.accept_request(b, c)

    assert friend_service.get_friend(b, a).mutual_friend_count == 1
    assert friend_service.get_friend(a, b).mutual_friend_count == 1


def test_asymmetric_web(users, befriend, friend_service):
    """A: B C D E; B: A C D."""
    ids = users
    for name in "BCDE":
        befriend(ids["A"], ids[name])
    befriend(ids["B"], ids["C"])
    befriend(ids["B"], ids["D"])

    friends = by_id(friend_service.get_all_friends(ids["A"]))

    assert set(friends) == {ids[name] for name in "BCDE"}
    counts = {
        name: (friends[ids[name]].total_friend_count, friends[ids[name]].mutual_friend_count)
        for name in "BCDE"
    }
    assert counts == {"B": (3, 2), "C": (2, 1), "D": (2, 1), "E": (1, 0)}


def test_denser_web(users, befriend, friend_service):
    """A: B C D E; B: A C D E."""
    ids = users
    for name in "BCDE":
        befriend(ids["A"], ids[name])
    for name in "CDE":
        befriend(ids["B"], ids[name])

    friends = by_id(friend_service.get_all_friends(ids["A"]))

    counts = {
        name: (friends[ids[name]].total_friend_count, friends[ids[name]].mutual_friend_count)
        for name in "BCDE"
    }
    assert counts == {"B": (4, 3), "C": (2, 1), "D": (2, 1), "E": (2, 1)}


def test_triangle_does_not_count_endpoints(users, befriend, friend_service):
    a, b, c = users["A"], users["B"], users["C"]
    befriend(a, b)
    befriend(b, c)
    befriend(a, c)

    # only C is shared; neither A nor B counts itself
    assert friend_service.get_friend(a, b).mutual_friend_count == 1
    assert by_id(friend_service.get_all_friends(a))[b].mutual_friend_count == 1


def test_record_fields_come_from_friend(users, befriend, friend_service):
    befriend(users["A"], users["B"])

    record = friend_service.get_friend(users["A"], users["B"])

    assert isinstance(record, FriendRecord)
    assert record.full_name == "User B"
    assert record.phone_number.startswith("+1555")


# ============================================================================
# Properties
# ============================================================================


def test_target_total_is_requester_independent(users, befriend, friend_service):
    a = users["A"]
    for name in "BCD":
        befriend(users[name], a)

    totals = {friend_service.get_friend(users[name], a).total_friend_count for name in "BCD"}

    assert totals == {3}


def test_no_friends_returns_empty_list(users, friend_service):
    assert friend_service.get_all_friends(users["A"]) == []


def test_pending_and_declined_edges_are_not_friends(users, friendship_service, friend_service):
    a, b, c = users["A"], users["B"], users["C"]
    friendship_service.send_request(a, b)
    friendship_service.send_request(a, c)
    friendship_service.decline_request(c, a)

    assert friend_service.get_all_friends(a) == []
    with pytest.raises(NotFoundError):
        friend_service.get_friend(a, b)
    with pytest.raises(NotFoundError):
        friend_service.get_friend(a, c)


def test_pending_edges_do_not_count(users, befriend, friendship_service, friend_service):
    a, b, c = users["A"], users["B"], users["C"]
    befriend(a, b)
    befriend(a, c)
    # B -> C is only requested, so C is not a mutual friend of A and B
    friendship_service.send_request(b, c)

    record = friend_service.get_friend(a, b)

    assert record.total_friend_count == 1
    assert record.mutual_friend_count == 0


def test_repeated_reads_are_identical(users, befriend, friend_service):
    for name in "BCDE":
        befriend(users["A"], users[name])
    befriend(users["B"], users["C"])

    assert friend_service.get_all_friends(users["A"]) == friend_service.get_all_friends(users["A"])
    assert friend_service.get_friend(users["A"], users["B"]) == friend_service.get_friend(
        users["A"], users["B"]
    )


def test_counts_match_set_intersection_on_random_graph(make_user, befriend, friend_service):
    rng = random.Random(20240611)
    ids = [make_user() for _ in range(12)]
    neighbours = {user_id: set() for user_id in ids}
    for i, u in enumerate(ids):
        for v in ids[i + 1:]:
            if rng.random() < 0.35:
                befriend(u, v)
                neighbours[u].add(v)
                neighbours[v].add(u)

    for u in ids:
        all_friends = by_id(friend_service.get_all_friends(u))
        assert set(all_friends) == neighbours[u]

        for v in neighbours[u]:
            expected_mutual = len((neighbours[u] & neighbours[v]) - {u, v})
            single = friend_service.get_friend(u, v)
            reverse = friend_service.get_friend(v, u)

            assert single.total_friend_count == len(neighbours[v])
            assert single.mutual_friend_count == expected_mutual
            # cross-consistency between the pair and batch forms
            assert all_friends[v] == single
            # symmetry
            assert reverse.mutual_friend_count == single.mutual_friend_count


# ============================================================================
# Errors
# ============================================================================


@pytest.mark.parametrize("bad_id", [0, -3, True, "1", 1.0, None])
def test_get_friend_rejects_malformed_ids(friend_service, bad_id):
    with pytest.raises(ValidationError):
        friend_service.get_friend(bad_id, 1)
    with pytest.raises(ValidationError):
        friend_service.get_friend(1, bad_id)


@pytest.mark.parametrize("bad_id", [0, -1, False, "7"])
def test_get_all_friends_rejects_malformed_ids(friend_service, bad_id):
    with pytest.raises(ValidationError):
        friend_service.get_all_friends(bad_id)


def test_get_friend_unknown_pair_is_not_found(users, friend_service):
    with pytest.raises(NotFoundError):
        friend_service.get_friend(users["A"], 999)


def test_malformed_row_is_a_defect(make_user, befriend, friend_service):
    a = make_user()
    nameless = make_user(full_name="")
    befriend(a, nameless)

    with pytest.raises(RecordShapeError):
        friend_service.get_friend(a, nameless)
    with pytest.raises(RecordShapeError):
        friend_service.get_all_friends(a)


def test_one_directional_accepted_edge_is_still_listed(users, db_session, friend_service):
    """A lone accepted edge is read as-is; the reverse edge is the writer's job."""
    a, b = users["A"], users["B"]
    db_session.add(Friendship(user_id=a, friend_user_id=b, status=FriendshipStatus.accepted))
    db_session.commit()

    record = friend_service.get_friend(a, b)

    # B has no accepted outgoing edge, so its total defaults to 0
    assert record.total_friend_count == 0
    assert record.mutual_friend_count == 0
