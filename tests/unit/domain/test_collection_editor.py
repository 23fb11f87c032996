"""Unit tests for the nested-collection editor."""

from datetime import date
from uuid import UUID, uuid4

import pytest

from domain.entities.post import Comment, Like, Post
from domain.entities.profile import EducationEntry, ExperienceEntry, Profile
from domain.services.collection_editor import (
    LikeResult,
    insert_front,
    remove_by_id,
    strip_user,
    toggle_like,
    unlike,
)


def _experience(title: str) -> ExperienceEntry:
    return ExperienceEntry(title=title, company="Acme", from_date=date(2020, 1, 1))


def _post(author: UUID | None = None) -> Post:
    return Post(user_id=author or uuid4(), text="hello", name="Author", avatar="")


class TestInsertFront:
    def test_new_entry_lands_at_index_zero(self):
        profile = Profile(user_id=uuid4())

        updated, stored = insert_front(profile, "experience", _experience("E1"))

        assert updated.experience[0].id == stored.id
        assert updated.experience[0].title == "E1"

    def test_existing_order_is_preserved(self):
        profile = Profile(user_id=uuid4())
        profile, e1 = insert_front(profile, "experience", _experience("E1"))
        profile, e2 = insert_front(profile, "experience", _experience("E2"))

        updated, e3 = insert_front(profile, "experience", _experience("E3"))

        assert [e.id for e in updated.experience] == [e3.id, e2.id, e1.id]

    def test_assigns_fresh_id(self):
        draft = _experience("E1")
        profile = Profile(user_id=uuid4())

        _, stored = insert_front(profile, "experience", draft)

        assert stored.id != draft.id

    def test_identical_entries_are_allowed(self):
        profile = Profile(user_id=uuid4())
        draft = _experience("Same")

        profile, first = insert_front(profile, "experience", draft)
        profile, second = insert_front(profile, "experience", draft)

        assert len(profile.experience) == 2
        assert first.id != second.id

    def test_does_not_mutate_input(self):
        profile = Profile(user_id=uuid4())

        entry = EducationEntry(school="MIT", degree="BSc", from_date=date(2010, 9, 1))

        insert_front(profile, "education", entry)

        assert profile.education == ()

    def test_works_for_post_comments(self):
        post = _post()
        comment = Comment(user_id=uuid4(), text="nice", name="C", avatar="")

        updated, stored = insert_front(post, "comments", comment)

        assert updated.comments == (stored,)
        assert post.comments == ()

    def test_rejects_non_collection_field(self):
        with pytest.raises(TypeError):
            insert_front(_post(), "text", _experience("E1"))


class TestRemoveById:
    def test_removes_matching_entry_and_keeps_order(self):
        profile = Profile(user_id=uuid4())
        profile, e1 = insert_front(profile, "experience", _experience("E1"))
        profile, e2 = insert_front(profile, "experience", _experience("E2"))
        profile, e3 = insert_front(profile, "experience", _experience("E3"))

        updated, removed = remove_by_id(profile, "experience", e2.id)

        assert removed is True
        assert [e.id for e in updated.experience] == [e3.id, e1.id]

    def test_missing_id_is_a_no_op(self):
        profile = Profile(user_id=uuid4())
        profile, _ = insert_front(profile, "experience", _experience("E1"))
        profile, _ = insert_front(profile, "experience", _experience("E2"))
        before = profile.experience

        updated, removed = remove_by_id(profile, "experience", uuid4())

        assert removed is False
        assert updated is profile
        assert updated.experience == before

    def test_empty_collection(self):
        profile = Profile(user_id=uuid4())

        updated, removed = remove_by_id(profile, "education", uuid4())

        assert removed is False
        assert updated.education == ()


class TestToggleLike:
    def test_first_like_is_added(self):
        post = _post()
        liker = uuid4()

        updated, result = toggle_like(post, liker)

        assert result is LikeResult.ADDED
        assert updated.likes == (Like(user_id=liker),)

    def test_second_like_by_same_user_is_idempotent(self):
        post = _post()
        liker = uuid4()

        once, first = toggle_like(post, liker)
        twice, second = toggle_like(once, liker)

        assert first is LikeResult.ADDED
        assert second is LikeResult.ALREADY_LIKED
        assert len(twice.likes) == len(post.likes) + 1
        assert twice is once

    def test_membership_is_keyed_by_user_not_post(self):
        post = _post()
        # A like recorded under the post's own id must not block real users
        post = Post(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=(Like(user_id=post.id),),
        )
        liker = uuid4()

        updated, result = toggle_like(post, liker)

        assert result is LikeResult.ADDED
        assert updated.likes[0] == Like(user_id=liker)

    def test_newest_like_first(self):
        post = _post()
        first, second = uuid4(), uuid4()

        post, _ = toggle_like(post, first)
        post, _ = toggle_like(post, second)

        assert [like.user_id for like in post.likes] == [second, first]


class TestUnlike:
    def test_unlike_after_like_removes_membership(self):
        liker = uuid4()
        post, _ = toggle_like(_post(), liker)

        updated, result = unlike(post, liker)

        assert result is LikeResult.REMOVED
        assert not updated.liked_by(liker)

    def test_unlike_without_like_is_soft(self):
        other = uuid4()
        post, _ = toggle_like(_post(), other)

        updated, result = unlike(post, uuid4())

        assert result is LikeResult.NOT_LIKED
        assert updated is post
        assert updated.likes == (Like(user_id=other),)

    def test_removes_only_the_callers_like(self):
        a, b, c = uuid4(), uuid4(), uuid4()
        post = _post()
        for liker in (a, b, c):
            post, _ = toggle_like(post, liker)

        updated, _ = unlike(post, b)

        assert [like.user_id for like in updated.likes] == [c, a]


class TestStripUser:
    def test_removes_likes_and_comments_of_user(self):
        leaving, staying = uuid4(), uuid4()
        post = _post()
        post, _ = toggle_like(post, leaving)
        post, _ = toggle_like(post, staying)
        gone = Comment(user_id=leaving, text="a", name="L", avatar="")
        post, _ = insert_front(post, "comments", gone)
        post, kept = insert_front(
            post, "comments", Comment(user_id=staying, text="b", name="S", avatar="")
        )

        stripped = strip_user(post, leaving)

        assert stripped.likes == (Like(user_id=staying),)
        assert stripped.comments == (kept,)

    def test_untouched_post_is_returned_as_is(self):
        post = _post()

        assert strip_user(post, uuid4()) is post
