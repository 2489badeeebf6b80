import pytest

from app.core.errors import InvalidOperationError, NotFoundError, UpstreamFailureError
from app.modules.follows.services import follow as follow_service
from app.modules.follows.services.follow import toggle_follow
from app.modules.user_management.models.user import User


def _reload(db, user_id):
    db.expire_all()
    return db.query(User).filter(User.cognito_id == user_id).one()


def test_follow_then_unfollow_adjusts_counter(db, make_user):
    make_user("alice")
    make_user("bob", followers=4)

    result = toggle_follow(db, "alice", "bob")
    assert result.following is True
    assert _reload(db, "alice").following == ["bob"]
    assert _reload(db, "bob").followers == 5

    result = toggle_follow(db, "alice", "bob")
    assert result.following is False
    assert _reload(db, "alice").following == []
    assert _reload(db, "bob").followers == 4


def test_follow_keeps_existing_following_order(db, make_user):
    make_user("alice", following=["carol", "dave"])
    make_user("bob")
    make_user("carol", followers=1)

    toggle_follow(db, "alice", "bob")
    assert _reload(db, "alice").following == ["carol", "dave", "bob"]

    toggle_follow(db, "alice", "carol")
    assert _reload(db, "alice").following == ["dave", "bob"]


def test_self_follow_is_rejected_without_mutation(db, make_user):
    make_user("alice", followers=2)

    with pytest.raises(InvalidOperationError):
        toggle_follow(db, "alice", "alice")

    alice = _reload(db, "alice")
    assert alice.following == []
    assert alice.followers == 2


def test_missing_target_fails_before_mutation(db, make_user):
    make_user("alice")

    with pytest.raises(NotFoundError):
        toggle_follow(db, "alice", "ghost")

    assert _reload(db, "alice").following == []


def test_missing_actor_fails(db, make_user):
    make_user("bob")

    with pytest.raises(NotFoundError):
        toggle_follow(db, "ghost", "bob")

    assert _reload(db, "bob").followers == 0


def test_follower_counter_never_goes_negative(db, make_user):
    # Corrupted state: edge present but counter already zero
    make_user("alice", following=["bob"])
    make_user("bob", followers=0)

    result = toggle_follow(db, "alice", "bob")

    assert result.following is False
    assert _reload(db, "bob").followers == 0


def test_failed_target_write_leaves_actor_write_in_place(db, make_user, monkeypatch):
    make_user("alice")
    make_user("bob", followers=7)

    real_save_user = follow_service.save_user
    calls = {"count": 0}

    def flaky_save_user(session, user):
        calls["count"] += 1
        if calls["count"] == 2:
            raise UpstreamFailureError("Failed to save user: connection reset")
        return real_save_user(session, user)

    monkeypatch.setattr(follow_service, "save_user", flaky_save_user)

    with pytest.raises(UpstreamFailureError):
        toggle_follow(db, "alice", "bob")

    # The edge exists on the actor side while the counter was never bumped
    assert _reload(db, "alice").following == ["bob"]
    assert _reload(db, "bob").followers == 7
