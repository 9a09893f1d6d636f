from __future__ import annotations

import asyncio

import pytest

from taskboard.core.locks import KeyedLock

pytestmark = pytest.mark.asyncio


async def test_same_key_runs_one_at_a_time() -> None:
    locks = KeyedLock()
    events: list[str] = []

    async def worker(name: str) -> None:
        async with locks.hold("project"):
            events.append(f"{name}:start")
            await asyncio.sleep(0.01)
            events.append(f"{name}:end")

    await asyncio.gather(worker("a"), worker("b"), worker("c"))

    assert events == ["a:start", "a:end", "b:start", "b:end", "c:start", "c:end"]
    assert len(locks) == 0


async def test_different_keys_do_not_contend() -> None:
    locks = KeyedLock()
    inside = asyncio.Event()
    release = asyncio.Event()

    async def holder() -> None:
        async with locks.hold("first"):
            inside.set()
            await release.wait()

    task = asyncio.create_task(holder())
    await inside.wait()
    assert locks.is_locked("first")

    async with locks.hold("second"):
        assert locks.is_locked("first")
        assert locks.is_locked("second")
        assert len(locks) == 2

    release.set()
    await task
    assert len(locks) == 0


async def test_lock_is_released_when_body_raises() -> None:
    locks = KeyedLock()

    with pytest.raises(RuntimeError):
        async with locks.hold("project"):
            raise RuntimeError("boom")

    assert not locks.is_locked("project")
    async with locks.hold("project"):
        assert locks.is_locked("project")
