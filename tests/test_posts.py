import re

import pytest

from app.core.errors import InvalidInputError, NotFoundError
from app.core.storage import ImageFile
from app.modules.posts.comments.services.comment import add_comment
from app.modules.posts.likes.services.like import toggle_like
from app.modules.posts.models.post import Post
from app.modules.posts.services.post import create_post
from app.modules.user_management.models.user import User

BUCKET = "posts-test"


def _image(filename="photo.png"):
    return ImageFile(filename=filename, content=b"\x89PNG", content_type="image/png")


def test_create_post_uploads_image_and_bumps_counter(db, make_user, object_store, s3_client):
    make_user("alice", posts=2)

    post = create_post(db, object_store, BUCKET, "alice", "Sunset at the beach", _image())

    assert re.fullmatch(r"post-[0-9a-f-]{36}\.png", post.image)
    assert s3_client.put_calls[0]["Bucket"] == BUCKET
    assert s3_client.put_calls[0]["Key"] == post.image
    stored = db.query(Post).filter(Post.id == post.id).one()
    assert stored.user_id == "alice"
    assert stored.likes == []
    assert stored.comments == []
    db.expire_all()
    assert db.query(User).filter(User.cognito_id == "alice").one().posts == 3


def test_short_description_fails_before_upload_or_persistence(db, make_user, object_store, s3_client):
    make_user("alice")

    with pytest.raises(InvalidInputError):
        create_post(db, object_store, BUCKET, "alice", "abc", _image())

    assert s3_client.put_calls == []
    assert db.query(Post).count() == 0
    assert db.query(User).filter(User.cognito_id == "alice").one().posts == 0


def test_description_is_measured_after_trimming(db, make_user, object_store, s3_client):
    make_user("alice")

    with pytest.raises(InvalidInputError):
        create_post(db, object_store, BUCKET, "alice", "   abcd   ", _image())

    assert s3_client.put_calls == []


@pytest.mark.parametrize("image", [None, ImageFile(filename="notes.txt", content=b"hi")])
def test_missing_or_unsupported_image_is_rejected(db, make_user, object_store, s3_client, image):
    make_user("alice")

    with pytest.raises(InvalidInputError):
        create_post(db, object_store, BUCKET, "alice", "A valid description", image)

    assert s3_client.put_calls == []
    assert db.query(Post).count() == 0


def test_create_post_for_unknown_owner(db, object_store, s3_client):
    with pytest.raises(NotFoundError):
        create_post(db, object_store, BUCKET, "ghost", "A valid description", _image())

    assert s3_client.put_calls == []


def test_like_toggles_membership(db, make_user, make_post):
    make_post("p1", "bob")

    assert toggle_like(db, "alice", "p1").liked is True
    assert toggle_like(db, "carol", "p1").liked is True
    db.expire_all()
    assert db.query(Post).filter(Post.id == "p1").one().likes == ["alice", "carol"]

    assert toggle_like(db, "alice", "p1").liked is False
    db.expire_all()
    assert db.query(Post).filter(Post.id == "p1").one().likes == ["carol"]


def test_owner_can_like_own_post(db, make_post):
    make_post("p1", "bob")

    assert toggle_like(db, "bob", "p1").liked is True


def test_like_unknown_post(db):
    with pytest.raises(NotFoundError):
        toggle_like(db, "alice", "missing")


def test_comments_are_appended_in_order(db, make_post):
    make_post("p1", "bob")

    add_comment(db, "alice", "p1", "first!")
    add_comment(db, "carol", "p1", "  second  ")

    db.expire_all()
    comments = db.query(Post).filter(Post.id == "p1").one().comments
    assert [c["comment"] for c in comments[-2:]] == ["first!", "second"]
    assert [c["userId"] for c in comments[-2:]] == ["alice", "carol"]
    assert all(c["date"] for c in comments)


@pytest.mark.parametrize("text", [None, "", "x", "   y   "])
def test_short_comment_is_rejected(db, make_post, text):
    make_post("p1", "bob")

    with pytest.raises(InvalidInputError):
        add_comment(db, "alice", "p1", text)

    db.expire_all()
    assert db.query(Post).filter(Post.id == "p1").one().comments == []


def test_comment_on_unknown_post(db):
    with pytest.raises(NotFoundError):
        add_comment(db, "alice", "missing", "hello")
