"""Unit tests for execution-context-local tenant slots."""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from tenancy.application.context import TenantContext
from tenancy.domain.value_objects import Dimension

COMPANY = Dimension("company")
BOOKKEEPER = Dimension("bookkeeper")


class TestTenantContext:
    """Tests for get/set/clear within one execution context."""

    def test_empty_by_default(self):
        assert TenantContext().get(COMPANY) is None

    def test_set_then_get(self):
        context = TenantContext()
        context.set(COMPANY, "foo")
        assert context.get(COMPANY) == "foo"

    def test_set_none_empties_slot(self):
        context = TenantContext()
        context.set(COMPANY, "foo")
        context.set(COMPANY, None)
        assert context.get(COMPANY) is None
        assert context.snapshot() == {}

    def test_dimensions_are_independent(self):
        context = TenantContext()
        context.set(COMPANY, "foo")
        context.set(BOOKKEEPER, "maria")
        context.set(COMPANY, None)
        assert context.get(BOOKKEEPER) == "maria"

    def test_instances_share_the_calling_context(self):
        TenantContext().set(COMPANY, "foo")
        assert TenantContext().get(COMPANY) == "foo"

    def test_snapshot_is_a_copy(self):
        context = TenantContext()
        context.set(COMPANY, "foo")
        snapshot = context.snapshot()
        snapshot[COMPANY] = "bar"
        assert context.get(COMPANY) == "foo"

    def test_clear_empties_every_slot(self):
        context = TenantContext()
        context.set(COMPANY, "foo")
        context.set(BOOKKEEPER, "maria")
        context.clear()
        assert context.snapshot() == {}


class TestThreadIsolation:
    """Slots must not be shared between OS threads."""

    def test_new_thread_starts_empty(self):
        context = TenantContext()
        context.set(COMPANY, "foo")

        with ThreadPoolExecutor(max_workers=1) as pool:
            seen = pool.submit(context.get, COMPANY).result()

        assert seen is None

    def test_value_set_in_thread_does_not_leak(self):
        context = TenantContext()
        context.set(COMPANY, "foo")

        def worker():
            context.set(COMPANY, "bar")

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

        assert context.get(COMPANY) == "foo"

    def test_concurrent_threads_see_their_own_tenant(self):
        context = TenantContext()
        barrier = threading.Barrier(4)

        def worker(tenant):
            context.set(COMPANY, tenant)
            barrier.wait()
            return context.get(COMPANY)

        tenants = ["a", "b", "c", "d"]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(worker, tenants))

        assert results == tenants


class TestTaskIsolation:
    """Slots follow asyncio tasks, not the event loop thread."""

    @pytest.mark.asyncio
    async def test_concurrent_tasks_see_their_own_tenant(self):
        context = TenantContext()

        async def worker(tenant):
            context.set(COMPANY, tenant)
            await asyncio.sleep(0)
            await asyncio.sleep(0.01)
            return context.get(COMPANY)

        results = await asyncio.gather(worker("foo"), worker("bar"))

        assert results == ["foo", "bar"]
        assert context.get(COMPANY) is None

    @pytest.mark.asyncio
    async def test_child_task_inherits_but_does_not_leak(self):
        context = TenantContext()
        context.set(COMPANY, "foo")

        async def child():
            inherited = context.get(COMPANY)
            context.set(COMPANY, "bar")
            return inherited

        inherited = await asyncio.create_task(child())

        assert inherited == "foo"
        assert context.get(COMPANY) == "foo"
