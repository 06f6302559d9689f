import asyncio

from braidr.services.locks import ScheduleLocks


async def test_same_day_is_serialized():
    locks = ScheduleLocks()
    events = []

    async def worker(name):
        async with locks.hold("stylist-1", "2026-03-09"):
            events.append(f"{name}-in")
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            events.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))

    assert events == ["a-in", "a-out", "b-in", "b-out"]


async def test_different_days_do_not_wait_on_each_other():
    locks = ScheduleLocks()
    inside = asyncio.Event()
    release = asyncio.Event()

    async def holder():
        async with locks.hold("stylist-1", "2026-03-09"):
            inside.set()
            await release.wait()

    task = asyncio.create_task(holder())
    await inside.wait()

    async with locks.hold("stylist-1", "2026-03-10"):
        assert len(locks) == 2

    release.set()
    await task


async def test_registry_is_emptied_after_use():
    locks = ScheduleLocks()
    async with locks.hold("stylist-1", "2026-03-09"):
        assert len(locks) == 1
    assert len(locks) == 0


async def test_lock_released_on_error():
    locks = ScheduleLocks()
    try:
        async with locks.hold("stylist-1", "2026-03-09"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    async with locks.hold("stylist-1", "2026-03-09"):
        pass
    assert len(locks) == 0
