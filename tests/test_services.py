"""
Tests for the credential and post store services, called directly.
"""
import pytest

from app.auth import issue_token, verify_token
from app.errors import AuthError, ConflictError, NotFound, ValidationError
from app.models.like import PostLike
from app.models.post import Post
from app.services import posts as feed
from app.services import users


class TestCredentialStore:

    def test_register_hashes_password(self, db):
        user, token = users.register(db, "alice", "a@x.com", "secret1", "secret1")
        assert user.hashed_password != "secret1"
        assert verify_token(token) == user.id

    def test_register_conflict_on_username_or_email(self, db, test_user):
        with pytest.raises(ConflictError):
            users.register(db, "testuser", "new@example.com", "secret1", "secret1")
        with pytest.raises(ConflictError):
            users.register(db, "newname", "test@example.com", "secret1", "secret1")

    def test_register_validation(self, db):
        with pytest.raises(ValidationError) as exc:
            users.register(db, "al", "a@x.com", "secret1", "secret1")
        assert exc.value.details["errors"][0]["field"] == "username"

    def test_authenticate(self, db, test_user):
        user, token = users.authenticate(db, "TEST@example.com", "testpassword123")
        assert user.id == test_user.id
        assert verify_token(token) == test_user.id

    def test_authenticate_failures_share_a_message(self, db, test_user):
        with pytest.raises(AuthError) as wrong_password:
            users.authenticate(db, "test@example.com", "wrong-password")
        with pytest.raises(AuthError) as unknown_email:
            users.authenticate(db, "ghost@example.com", "wrong-password")
        assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"

    def test_authenticate_rejects_malformed_email(self, db, test_user):
        with pytest.raises(ValidationError) as exc:
            users.authenticate(db, "test@", "testpassword123")
        assert exc.value.message == "Invalid email"

    def test_get_user_not_found(self, db):
        with pytest.raises(NotFound):
            users.get_user(db, "missing")


class TestTokens:

    def test_round_trip(self):
        assert verify_token(issue_token("abc123")) == "abc123"

    @pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
    def test_rejects_bad_tokens(self, token):
        with pytest.raises(AuthError):
            verify_token(token)


class TestPostStore:

    def test_create_post_needs_text_or_image(self, db, test_user):
        with pytest.raises(ValidationError):
            feed.create_post(db, test_user.id)
        with pytest.raises(ValidationError):
            feed.create_post(db, test_user.id, text="   ", image_url=None)

        assert feed.create_post(db, test_user.id, text="words").text == "words"
        assert feed.create_post(db, test_user.id, image_url="/uploads/x.png").image_url == "/uploads/x.png"

    def test_create_post_captures_username(self, db, test_user):
        post = feed.create_post(db, test_user.id, text="  padded  ")
        assert post.username == "testuser"
        assert post.text == "padded"

    def test_toggle_like_is_its_own_inverse(self, db, test_post, other_user):
        post, liked = feed.toggle_like(db, test_post.id, other_user.id)
        assert liked is True
        assert [like.user_id for like in post.likes] == [other_user.id]

        post, liked = feed.toggle_like(db, test_post.id, other_user.id)
        assert liked is False
        assert post.likes == []

    def test_like_set_has_each_user_once(self, db, test_post, test_user, other_user):
        feed.toggle_like(db, test_post.id, test_user.id)
        post, _ = feed.toggle_like(db, test_post.id, other_user.id)
        user_ids = [like.user_id for like in post.likes]
        assert sorted(user_ids) == sorted([test_user.id, other_user.id])
        assert len(set(user_ids)) == len(user_ids)

    def test_toggle_like_missing_post(self, db, test_user):
        with pytest.raises(NotFound):
            feed.toggle_like(db, "missing", test_user.id)

    def test_add_comment(self, db, test_post, other_user):
        post = feed.add_comment(db, test_post.id, other_user.id, "nice!")
        assert len(post.comments) == 1
        assert post.comments[0].username == "otheruser"
        assert post.comments[0].created_at is not None

    def test_add_comment_missing_author(self, db, test_post):
        with pytest.raises(NotFound) as exc:
            feed.add_comment(db, test_post.id, "missing", "hello")
        assert exc.value.message == "User not found"

    def test_toggle_like_missing_user(self, db, test_post):
        with pytest.raises(NotFound) as exc:
            feed.toggle_like(db, test_post.id, "f" * 32)
        assert exc.value.message == "User not found"
        assert db.query(PostLike).count() == 0

    def test_likes_from_separate_sessions_are_both_kept(self, db, session_factory, test_post, test_user, other_user):
        post_id = test_post.id
        first = session_factory()
        second = session_factory()
        try:
            # second session holds the like set as it was before either toggle
            stale = second.get(Post, post_id)
            assert stale.likes == []

            _, first_liked = feed.toggle_like(first, post_id, test_user.id)
            post, second_liked = feed.toggle_like(second, post_id, other_user.id)

            assert first_liked is True
            assert second_liked is True
            assert sorted(like.user_id for like in post.likes) == sorted([test_user.id, other_user.id])
        finally:
            first.close()
            second.close()

        db.expire_all()
        assert db.query(PostLike).filter(PostLike.post_id == post_id).count() == 2

    def test_add_comment_empty_text(self, db, test_post, other_user):
        with pytest.raises(ValidationError):
            feed.add_comment(db, test_post.id, other_user.id, " ")

    def test_list_posts_counts_all(self, db, test_user):
        for i in range(4):
            feed.create_post(db, test_user.id, text=f"post {i}")
        posts, total = feed.list_posts(db, page=2, page_size=3)
        assert total == 4
        assert len(posts) == 1

    def test_list_posts_rejects_bad_page(self, db):
        with pytest.raises(ValidationError):
            feed.list_posts(db, page=0, page_size=10)
