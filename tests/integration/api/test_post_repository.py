"""Integration tests for conditional writes in the post repository."""

from dataclasses import replace
from uuid import uuid4

import pytest

from core.exceptions import StaleVersionError
from domain.entities.post import Like, Post


@pytest.mark.asyncio
async def test_update_bumps_version(uow_factory) -> None:
    async with uow_factory() as uow:
        created = await uow.posts.create(
            Post(user_id=uuid4(), text="hi", name="A", avatar="")
        )
        await uow.commit()

    liker = uuid4()
    async with uow_factory() as uow:
        saved = await uow.posts.update(replace(created, likes=(Like(user_id=liker),)))
        await uow.commit()

    assert saved.version == created.version + 1
    assert saved.likes == (Like(user_id=liker),)


@pytest.mark.asyncio
async def test_stale_write_is_rejected(uow_factory) -> None:
    async with uow_factory() as uow:
        created = await uow.posts.create(
            Post(user_id=uuid4(), text="hi", name="A", avatar="")
        )
        await uow.commit()

    first, second = uuid4(), uuid4()
    async with uow_factory() as uow:
        await uow.posts.update(replace(created, likes=(Like(user_id=first),)))
        await uow.commit()

    with pytest.raises(StaleVersionError):
        async with uow_factory() as uow:
            await uow.posts.update(replace(created, likes=(Like(user_id=second),)))

    async with uow_factory() as uow:
        stored = await uow.posts.get(created.id)

    assert stored is not None
    assert stored.likes == (Like(user_id=first),)


@pytest.mark.asyncio
async def test_activity_lookup(uow_factory) -> None:
    user_id = uuid4()
    async with uow_factory() as uow:
        liked = await uow.posts.create(
            Post(user_id=uuid4(), text="a", name="A", avatar="", likes=(Like(user_id=user_id),))
        )
        await uow.posts.create(Post(user_id=uuid4(), text="b", name="B", avatar=""))
        await uow.commit()

    async with uow_factory() as uow:
        found = await uow.posts.get_with_activity_by(user_id)

    assert [p.id for p in found] == [liked.id]
