"""
Path Walker Module

Expands scan globs below a root directory and drops everything the ignore
patterns exclude.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Set

from .errors import StartupError
from .path_filter import has_unwanted_component

logger = logging.getLogger(__name__)


def endings_to_globs(endings: Iterable[str]) -> List[str]:
    """Turn file endings such as ``c`` or ``.h`` into recursive globs."""
    return [f"**/*.{ending.lstrip('.')}" for ending in endings if ending.strip('.')]


def collect_paths(root: Path, patterns: Iterable[str], ignore: Iterable[str]) -> List[Path]:
    """
    Find the regular files to audit.

    Args:
        root: Directory the patterns are relative to
        patterns: Glob patterns, e.g. ``**/*.c``
        ignore: Ignore patterns applied to every component below ``root``

    Returns:
        Matching files in first-seen order, each listed once
    """
    root = Path(root)
    ignore = list(ignore)
    seen: Set[Path] = set()
    paths: List[Path] = []

    for pattern in patterns:
        try:
            candidates = sorted(root.glob(pattern))
        except (ValueError, NotImplementedError) as e:
            raise StartupError(f"Invalid glob pattern {pattern!r}: {e}") from e

        matched = 0
        for candidate in candidates:
            relative = candidate.relative_to(root)
            if has_unwanted_component(relative, ignore):
                continue
            if not candidate.is_file():
                continue
            # a symlink and its target are one file
            real = candidate.resolve()
            if real in seen:
                continue
            seen.add(real)
            paths.append(candidate)
            matched += 1
        logger.debug(f"Pattern {pattern!r} matched {matched} new files")

    logger.info(f"Found {len(paths)} files to check")
    return paths
