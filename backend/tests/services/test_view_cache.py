"""List View Cache — tests for load-once, invalidation by path, and disabled mode."""

import asyncio

from invoice_actions.infrastructure.view_cache import ListViewCache


def _counting_loader(calls: list):
    async def load():
        calls.append(1)
        return [{"n": len(calls)}]
    return load


async def test_loads_once_until_invalidated():
    cache, calls = ListViewCache(), []
    loader = _counting_loader(calls)

    assert await cache.get_or_load("/dashboard/invoices", loader) == [{"n": 1}]
    assert await cache.get_or_load("/dashboard/invoices", loader) == [{"n": 1}]

    cache.invalidate("/dashboard/invoices")
    assert await cache.get_or_load("/dashboard/invoices", loader) == [{"n": 2}]


async def test_invalidate_drops_every_variant_of_a_path():
    cache, calls = ListViewCache(), []
    loader = _counting_loader(calls)
    await cache.get_or_load("/dashboard/invoices", loader, variant="paid")
    await cache.get_or_load("/dashboard/invoices", loader, variant=None)
    await cache.get_or_load("/dashboard/customers", loader)

    cache.invalidate("/dashboard/invoices")

    assert not cache.is_cached("/dashboard/invoices", "paid")
    assert not cache.is_cached("/dashboard/invoices")
    assert cache.is_cached("/dashboard/customers")


def test_invalidate_unknown_path_is_noop():
    ListViewCache().invalidate("/nowhere")


async def test_disabled_cache_always_loads():
    cache, calls = ListViewCache(enabled=False), []
    loader = _counting_loader(calls)
    await cache.get_or_load("/dashboard/invoices", loader)
    await cache.get_or_load("/dashboard/invoices", loader)
    assert len(calls) == 2


async def test_invalidate_during_load_discards_stale_result():
    cache = ListViewCache()
    rows = ["old"]
    read_done, write_done = asyncio.Event(), asyncio.Event()

    async def slow_loader():
        snapshot = list(rows)
        read_done.set()
        await write_done.wait()
        return snapshot

    async def concurrent_write():
        await read_done.wait()
        rows.append("new")
        cache.invalidate("/dashboard/invoices")
        write_done.set()

    loaded, _ = await asyncio.gather(
        cache.get_or_load("/dashboard/invoices", slow_loader),
        concurrent_write(),
    )

    assert loaded == ["old"]
    assert not cache.is_cached("/dashboard/invoices")

    async def fresh_loader():
        return list(rows)

    assert await cache.get_or_load("/dashboard/invoices", fresh_loader) == ["old", "new"]


async def test_invalidating_other_path_does_not_discard_load():
    cache = ListViewCache()
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow_loader():
        started.set()
        await release.wait()
        return ["row"]

    async def other_write():
        await started.wait()
        cache.invalidate("/dashboard/customers")
        release.set()

    await asyncio.gather(
        cache.get_or_load("/dashboard/invoices", slow_loader), other_write(),
    )
    assert cache.is_cached("/dashboard/invoices")
