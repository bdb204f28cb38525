"""
Content Scanner Module

This module classifies the raw bytes of a file against the fixed rule set:
tab characters and illegal characters.

A byte is legal when it is printable ASCII (0x20-0x7E), a tab, a line feed
or a carriage return. Every other byte is illegal, including DEL, the
remaining control bytes and anything with the high bit set (UTF-8
multi-byte sequences and the UTF-8 BOM among them).
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Tuple
import logging

logger = logging.getLogger(__name__)

TAB = b'\t'

ALLOWED_BYTES = bytes(range(0x20, 0x7F)) + b'\t\n\r'


class Finding(Enum):
    """Findings the scanner can report about a file."""
    TABS = "tabs"
    ILLEGAL_CHARACTERS = "illegal characters"


@dataclass(frozen=True)
class ScanResult:
    """Independent findings about one file's content."""
    has_tabs: bool = False
    has_illegal_characters: bool = False

    @property
    def findings(self) -> FrozenSet[Finding]:
        found = set()
        if self.has_tabs:
            found.add(Finding.TABS)
        if self.has_illegal_characters:
            found.add(Finding.ILLEGAL_CHARACTERS)
        return frozenset(found)

    @property
    def is_clean(self) -> bool:
        return not self.findings


def scan(data: bytes) -> ScanResult:
    """
    Classify file content.

    Args:
        data: Raw file content

    Returns:
        ScanResult with both findings computed
    """
    has_tabs = TAB in data
    # whatever survives deleting the allowed bytes is illegal
    has_illegal_characters = len(data.translate(None, ALLOWED_BYTES)) > 0
    return ScanResult(has_tabs=has_tabs, has_illegal_characters=has_illegal_characters)


def find_illegal_characters(data: bytes, limit: int = 0) -> List[Tuple[int, int, int]]:
    """
    Locate illegal bytes.

    Args:
        data: Raw file content
        limit: Stop after this many hits (0 means no limit)

    Returns:
        List of (line, column, byte value), 1-based line and column
    """
    hits: List[Tuple[int, int, int]] = []
    allowed = frozenset(ALLOWED_BYTES)
    for line_number, line in enumerate(data.split(b'\n'), start=1):
        for column, value in enumerate(line, start=1):
            if value not in allowed:
                hits.append((line_number, column, value))
                if limit and len(hits) >= limit:
                    return hits
    return hits
