"""Ignore-pattern matching for path components."""

import fnmatch
import logging
from pathlib import PurePath
from typing import Iterable, Union

logger = logging.getLogger(__name__)


def is_unwanted(component: str, ignore_patterns: Iterable[str]) -> bool:
    """
    Check a single path component against the ignore patterns.

    Args:
        component: One segment of a path, e.g. ``.git`` or ``build_Debug``
        ignore_patterns: Shell-style glob patterns

    Returns:
        True if any pattern matches the component
    """
    for pattern in ignore_patterns:
        if fnmatch.fnmatchcase(component, pattern):
            return True
    return False


def has_unwanted_component(path: Union[str, PurePath], ignore_patterns: Iterable[str]) -> bool:
    """Check every component of ``path``; one match excludes the whole path."""
    patterns = list(ignore_patterns)
    for component in PurePath(path).parts:
        if is_unwanted(component, patterns):
            logger.debug(f"Ignoring {path}: component '{component}' is unwanted")
            return True
    return False
