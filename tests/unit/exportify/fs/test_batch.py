# tests/unit/exportify/fs/test_batch.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Unit tests for batched filesystem operations."""

import asyncio
import logging
import threading

import pytest

from exportify.config import BatchConfig
from exportify.errors import BatchAbortedError
from exportify.fs.batch import (
    FileCache,
    batch_check_exists,
    batch_discover_files,
    batch_find_declarations,
    batch_process,
    batch_validate_mappings,
    build_file_cache,
)


@pytest.fixture
def pkg(make_package):
    return make_package(
        {"name": "pkg"},
        {
            "lib/index.js": "",
            "lib/index.d.ts": "",
            "lib/utils.js": "",
            "src/index.ts": "",
        },
    )


class TestBatchProcess:
    """Tests for batch_process."""

    @pytest.mark.asyncio
    async def test_sync_operation_keeps_order(self):
        result = await batch_process([3, 1, 2], lambda n: n * 10)
        assert [r.result for r in result.results] == [30, 10, 20]
        assert [r.input for r in result.results] == ["3", "1", "2"]
        assert result.success_count == 3
        assert result.failure_count == 0

    @pytest.mark.asyncio
    async def test_async_operation(self):
        async def double(n):
            await asyncio.sleep(0.01 * (3 - n))
            return n * 2

        result = await batch_process([0, 1, 2], double)
        assert [r.result for r in result.results] == [0, 2, 4]

    @pytest.mark.asyncio
    async def test_failures_are_collected(self, caplog):
        def explode(n):
            if n == 2:
                raise ValueError("bad input")
            return n

        with caplog.at_level(logging.WARNING):
            result = await batch_process([1, 2, 3], explode)

        assert result.success_count == 2
        failed = result.results[1]
        assert failed.success is False
        assert failed.error == "bad input"
        assert result.stats.errors == ["2: bad input"]
        assert "Batch operation failed for 2" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def slow(n):
            await asyncio.sleep(5)
            return n

        config = BatchConfig(operation_timeout=0.05)
        result = await batch_process(["a"], slow, config)

        assert result.results[0].success is False
        assert result.results[0].error == "Operation timeout after 0.05s"

    @pytest.mark.asyncio
    async def test_abort_on_error(self):
        def explode(n):
            raise RuntimeError("boom")

        config = BatchConfig(continue_on_error=False)
        with pytest.raises(BatchAbortedError) as exc_info:
            await batch_process(["x"], explode, config)

        assert exc_info.value.input_value == "x"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_is_success(self):
        result = await batch_process([0, 1], lambda n: n, is_success=bool)
        assert [r.success for r in result.results] == [False, True]
        assert [r.result for r in result.successful()] == [1]

    @pytest.mark.asyncio
    async def test_concurrency_limit(self):
        running = 0
        peak = 0

        async def track(n):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return n

        await batch_process(list(range(8)), track, BatchConfig(concurrency=2))
        assert peak <= 2

    @pytest.mark.asyncio
    async def test_timed_out_threads_hold_their_slot(self):
        """Blocking calls that outlive their timeout still count against concurrency."""
        lock = threading.Lock()
        release = threading.Event()
        running = 0
        peak = 0

        def stuck(n):
            nonlocal running, peak
            with lock:
                running += 1
                peak = max(peak, running)
            release.wait(timeout=2)
            with lock:
                running -= 1
            return n

        config = BatchConfig(concurrency=2, operation_timeout=0.05)
        try:
            result = await batch_process(list(range(6)), stuck, config)
        finally:
            release.set()

        assert result.failure_count == 6
        assert peak <= 2

    @pytest.mark.asyncio
    async def test_stats_disabled(self):
        result = await batch_process([1], lambda n: n, BatchConfig(collect_stats=False))
        assert result.results[0].elapsed == 0.0

    @pytest.mark.asyncio
    async def test_empty(self):
        result = await batch_process([], lambda n: n)
        assert result.results == []
        assert result.stats.average_time == 0.0


class TestBatchHelpers:
    """Tests for the batch wrappers around single-file probes."""

    @pytest.mark.asyncio
    async def test_check_exists(self, pkg):
        result = await batch_check_exists([pkg / "lib/index.js", pkg / "lib/nope.js"])
        assert [r.result for r in result.results] == [True, False]

    @pytest.mark.asyncio
    async def test_discover_files(self, pkg):
        result = await batch_discover_files(["./utils", "./missing"], pkg)
        assert result.results[0].result.file_path == "lib/utils.js"
        assert [r.success for r in result.results] == [True, False]

    @pytest.mark.asyncio
    async def test_find_declarations(self, pkg):
        result = await batch_find_declarations(["lib/index.js", "lib/utils.js"], pkg)
        assert [r.success for r in result.results] == [True, False]

    @pytest.mark.asyncio
    async def test_validate_mappings(self, pkg):
        result = await batch_validate_mappings(
            [("./src/index.ts", "./lib/index.js"), ("./src/utils.ts", "./lib/utils.js")],
            pkg,
        )
        assert result.results[0].input == "./src/index.ts -> ./lib/index.js"
        first, second = (r.result for r in result.results)
        assert first.source_exists and first.output_exists
        assert not second.source_exists and second.output_exists


class TestFileCache:
    """Tests for FileCache and build_file_cache."""

    @pytest.mark.asyncio
    async def test_build(self, pkg):
        cache = await build_file_cache(pkg, ("lib", "missing"))
        assert len(cache) == 3
        assert "./lib/index.js" in cache
        assert "lib/index.d.ts" in cache

    def test_lazy_miss(self, pkg):
        cache = FileCache(pkg)
        assert cache.exists("./src/index.ts")
        assert not cache.exists("./src/other.ts")
        assert len(cache) == 1

    def test_known_files_trusted(self, tmp_path):
        cache = FileCache(tmp_path, ["lib/ghost.js"])
        assert "./lib/ghost.js" in cache
        assert 42 not in cache
