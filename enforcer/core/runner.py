"""
Audit Runner Module

This module drives a whole run: it validates the options, collects the
candidate files and feeds them to a bounded pool of worker threads.
"""

import os
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .aggregator import AuditReport, ReportAggregator
from .errors import PathIOError, StartupError, WriteError
from .processor import FileProcessor, ProcessResult
from .walker import collect_paths

logger = logging.getLogger(__name__)

MAX_AUTO_THREADS = 12


def resolve_thread_count(requested: Optional[int] = None) -> int:
    """
    Resolve the worker count once at startup.

    Args:
        requested: Explicit count; None or 0 selects one thread per CPU,
            capped at MAX_AUTO_THREADS

    Returns:
        A positive worker count
    """
    if requested is None or requested == 0:
        return min(MAX_AUTO_THREADS, os.cpu_count() or 1)
    if requested < 0:
        raise ValueError(f"thread count must not be negative, got {requested}")
    return requested


@dataclass(frozen=True)
class RunOptions:
    """Validated settings for one run."""
    root: Path
    patterns: Tuple[str, ...]
    ignore: Tuple[str, ...] = ()
    clean: bool = False
    threads: int = 1
    status: bool = False
    tabs_allowed: bool = False


def _check_startup(options: RunOptions) -> List[Path]:
    if not options.root.exists():
        raise StartupError(f"Path does not exist: {options.root}")
    if not options.root.is_dir():
        raise StartupError(f"Path is not a directory: {options.root}")
    if not options.patterns:
        raise StartupError("No glob patterns given and none configured")
    if options.threads < 1:
        raise StartupError(f"Invalid thread count: {options.threads}")

    paths = collect_paths(options.root, options.patterns, options.ignore)
    if not paths:
        patterns = ", ".join(options.patterns)
        raise StartupError(f"No files under {options.root} match {patterns}")
    return paths


def run_audit(options: RunOptions,
              on_result: Optional[Callable[[Path, Optional[ProcessResult]], None]] = None) -> AuditReport:
    """
    Audit every file selected by ``options``.

    Args:
        options: Run settings
        on_result: Called from the calling thread after each file, with the
            result or None if the file failed

    Returns:
        The aggregated report

    Raises:
        StartupError: If the run cannot start; nothing has been scanned yet
    """
    paths = _check_startup(options)
    processor = FileProcessor(clean_enabled=options.clean)
    aggregator = ReportAggregator()

    logger.info(f"Checking {len(paths)} files with {options.threads} threads")

    with ThreadPoolExecutor(max_workers=options.threads) as executor:
        futures = {executor.submit(processor.process, path): path for path in paths}

        for future in as_completed(futures):
            path = futures[future]
            result = None
            try:
                result = future.result()
            except (PathIOError, WriteError) as e:
                logger.error(str(e))
                aggregator.add_error(path, str(e))
            else:
                aggregator.add_result(result)

            if on_result is not None:
                on_result(path, result)

    return aggregator.report()
