# exportify/fs/batch.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Batched filesystem operations.

Fans work out over asyncio with a semaphore bounding concurrency. Blocking
operations run on a thread pool of the same size; each one is limited by a
timeout after which it is marked failed. A timed-out thread cannot be
interrupted, so it keeps its pool slot until the call returns and later
items wait for a free slot inside their own timeout. By default failures
are collected and the batch carries on; with continue_on_error=False the
first failure aborts it.

Results always come back in input order.
"""

import asyncio
import inspect
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Generic, Iterable, Optional, Sequence, TypeVar, Union

from ..config import DEFAULT_BUILD_DIRS, BatchConfig
from ..errors import BatchAbortedError
from ..paths import strip_relative_prefix
from .declarations import DeclarationResult, find_declaration_file
from .discovery import DEFAULT_CONFIGS, DiscoveryResult, FileDiscoveryConfig, discover_files
from .probe import PathLike, file_exists

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Operation = Union[Callable[[T], R], Callable[[T], Awaitable[R]]]


@dataclass
class BatchItemResult(Generic[R]):
    """Outcome for one input of a batch."""

    input: str
    success: bool
    result: Optional[R] = None
    error: Optional[str] = None
    elapsed: float = 0.0  # seconds, 0.0 when stats collection is off


@dataclass
class BatchStats:
    """Timing and error summary for a batch."""

    total_time: float = 0.0
    average_time: float = 0.0
    errors: list[str] = field(default_factory=list)


@dataclass
class BatchOperationResult(Generic[R]):
    """All item results of a batch plus summary statistics."""

    results: list[BatchItemResult[R]]
    stats: BatchStats

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failure_count(self) -> int:
        return len(self.results) - self.success_count

    def successful(self) -> list[BatchItemResult[R]]:
        """Item results that succeeded, in input order."""
        return [r for r in self.results if r.success]


async def batch_process(
    inputs: Sequence[T],
    operation: Operation,
    config: Optional[BatchConfig] = None,
    is_success: Optional[Callable[[R], bool]] = None,
    log: Optional[logging.Logger] = None,
) -> BatchOperationResult[R]:
    """Run an operation over every input with bounded concurrency.

    Args:
        inputs: Items to process.
        operation: Sync callable (run on the batch thread pool) or coroutine function.
        config: Concurrency, timeout and error policy. Defaults to BatchConfig().
        is_success: Classifies a returned value; defaults to "did not raise".
        log: Receives a warning per failed item; defaults to this module's logger.

    Returns:
        BatchOperationResult with one entry per input, in input order.

    Raises:
        BatchAbortedError: On the first failure when continue_on_error is False.
    """
    config = config or BatchConfig()
    log = log or logger
    semaphore = asyncio.Semaphore(config.concurrency)
    is_coroutine = inspect.iscoroutinefunction(operation)
    executor = None
    if not is_coroutine:
        executor = ThreadPoolExecutor(
            max_workers=config.concurrency, thread_name_prefix="exportify-batch"
        )
    loop = asyncio.get_running_loop()
    errors: list[str] = []
    started = time.perf_counter()

    async def run_one(item: T) -> BatchItemResult[R]:
        async with semaphore:
            op_started = time.perf_counter()
            label = str(item)
            try:
                if is_coroutine:
                    awaitable = operation(item)
                else:
                    awaitable = loop.run_in_executor(executor, operation, item)
                value = await asyncio.wait_for(awaitable, timeout=config.operation_timeout)
            except asyncio.TimeoutError as e:
                message = f"Operation timeout after {config.operation_timeout}s"
                return _failure(label, message, e, op_started)
            except Exception as e:
                return _failure(label, str(e) or type(e).__name__, e, op_started)

            elapsed = time.perf_counter() - op_started if config.collect_stats else 0.0
            success = is_success(value) if is_success is not None else True
            return BatchItemResult(input=label, success=success, result=value, elapsed=elapsed)

    def _failure(label: str, message: str, exc: BaseException, op_started: float) -> BatchItemResult[R]:
        errors.append(f"{label}: {message}")
        log.warning(f"Batch operation failed for {label}: {message}")
        if not config.continue_on_error:
            raise BatchAbortedError(label, message) from exc
        elapsed = time.perf_counter() - op_started if config.collect_stats else 0.0
        return BatchItemResult(input=label, success=False, error=message, elapsed=elapsed)

    tasks = [asyncio.create_task(run_one(item)) for item in inputs]
    try:
        results = list(await asyncio.gather(*tasks))
    except BatchAbortedError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    finally:
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)

    total = time.perf_counter() - started
    stats = BatchStats(
        total_time=total,
        average_time=total / len(results) if results else 0.0,
        errors=errors,
    )
    return BatchOperationResult(results=results, stats=stats)


async def batch_check_exists(
    file_paths: Sequence[PathLike], config: Optional[BatchConfig] = None
) -> BatchOperationResult[bool]:
    """Check many paths for existence; result is True/False per path."""
    return await batch_process(file_paths, file_exists, config)


async def batch_discover_files(
    import_paths: Sequence[str],
    package_dir: PathLike,
    discovery_config: FileDiscoveryConfig = DEFAULT_CONFIGS["module"],
    config: Optional[BatchConfig] = None,
) -> BatchOperationResult[DiscoveryResult]:
    """Run discover_files for many import paths; success means a file was found."""
    return await batch_process(
        import_paths,
        lambda path: discover_files(path, package_dir, discovery_config),
        config,
        is_success=lambda result: result.file_path is not None,
    )


async def batch_find_declarations(
    source_files: Sequence[str],
    package_dir: PathLike,
    build_dirs: Sequence[str] = DEFAULT_BUILD_DIRS,
    config: Optional[BatchConfig] = None,
) -> BatchOperationResult[DeclarationResult]:
    """Run find_declaration_file for many files; success means one exists."""
    return await batch_process(
        source_files,
        lambda path: find_declaration_file(path, package_dir, build_dirs),
        config,
        is_success=lambda result: result.exists,
    )


@dataclass(frozen=True)
class MappingValidation:
    """Existence of both sides of a source -> output mapping."""

    source_exists: bool
    output_exists: bool


@dataclass(frozen=True)
class _Mapping:
    source: str
    output: str

    def __str__(self) -> str:
        return f"{self.source} -> {self.output}"


async def batch_validate_mappings(
    mappings: Iterable[tuple[str, str]],
    package_dir: PathLike,
    config: Optional[BatchConfig] = None,
) -> BatchOperationResult[MappingValidation]:
    """Check both ends of (source, output) pairs; items are labelled "src -> out"."""
    package_dir = Path(package_dir)

    def validate(mapping: _Mapping) -> MappingValidation:
        return MappingValidation(
            source_exists=file_exists(package_dir / strip_relative_prefix(mapping.source)),
            output_exists=file_exists(package_dir / strip_relative_prefix(mapping.output)),
        )

    items = [_Mapping(source, output) for source, output in mappings]
    return await batch_process(items, validate, config)


class FileCache:
    """Pre-walked set of package files with lazy fallback for misses.

    Lookups take package-relative paths with or without "./". Paths not seen
    during the walk are checked on disk once and the answer is remembered.
    """

    def __init__(self, package_dir: PathLike, known_files: Iterable[str] = ()):
        self.package_dir = Path(package_dir)
        self._entries: dict[str, bool] = {path: True for path in known_files}

    def __len__(self) -> int:
        return sum(1 for present in self._entries.values() if present)

    def __contains__(self, path: Any) -> bool:
        return isinstance(path, str) and self.exists(path)

    def exists(self, path: str) -> bool:
        clean = strip_relative_prefix(path)
        cached = self._entries.get(clean)
        if cached is not None:
            return cached
        present = file_exists(self.package_dir / clean)
        self._entries[clean] = present
        return present


def _walk_files(package_dir: Path, search_dirs: Sequence[str]) -> list[str]:
    found = []
    for search_dir in search_dirs:
        root = package_dir / search_dir
        for dirpath, _, filenames in os.walk(root):
            for filename in filenames:
                found.append((Path(dirpath) / filename).relative_to(package_dir).as_posix())
    return found


async def build_file_cache(
    package_dir: PathLike,
    search_dirs: Sequence[str] = ("lib", "dist", "src", "build"),
) -> FileCache:
    """Walk the given directories once and return a FileCache over them.

    Missing directories are skipped.
    """
    package_dir = Path(package_dir)
    files = await asyncio.to_thread(_walk_files, package_dir, search_dirs)
    return FileCache(package_dir, files)
