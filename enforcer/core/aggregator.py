"""
Report Aggregator Module

This module merges per-file results into the counts shown at the end of a
run. Workers finish in any order, so every count is a plain sum and the
aggregator only needs a lock around its updates.
"""

import threading
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from .processor import ProcessResult

logger = logging.getLogger(__name__)


@dataclass
class AuditReport:
    """Totals for one run."""
    files_checked: int = 0
    files_with_tabs: int = 0
    files_with_illegal_characters: int = 0
    files_cleaned: int = 0
    flagged_files: List[ProcessResult] = field(default_factory=list)
    errors: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def findings_count(self, tabs_allowed: bool = False) -> int:
        """Number of findings that should fail the run."""
        count = self.files_with_illegal_characters
        if not tabs_allowed:
            count += self.files_with_tabs
        return count

    def is_successful(self, tabs_allowed: bool = False) -> bool:
        return self.findings_count(tabs_allowed) == 0 and not self.errors

    def summary_line(self) -> str:
        line = (f"checked {self.files_checked} files! "
                f"({self.files_with_tabs} had tabs, "
                f"{self.files_with_illegal_characters} had illegal characters)")
        extras = []
        if self.files_cleaned:
            extras.append(f"{self.files_cleaned} cleaned")
        if self.errors:
            extras.append(f"{self.error_count} errors")
        if extras:
            line += " [" + ", ".join(extras) + "]"
        return line

    def to_dict(self) -> dict:
        return {
            'files_checked': self.files_checked,
            'files_with_tabs': self.files_with_tabs,
            'files_with_illegal_characters': self.files_with_illegal_characters,
            'files_cleaned': self.files_cleaned,
            'errors': [{'path': str(path), 'message': message} for path, message in self.errors],
        }


class ReportAggregator:
    """Thread-safe accumulator for ProcessResults and per-file errors."""

    def __init__(self):
        self._lock = threading.Lock()
        self._report = AuditReport()

    def add_result(self, result: ProcessResult):
        with self._lock:
            report = self._report
            report.files_checked += 1
            if result.scan.has_tabs:
                report.files_with_tabs += 1
            if result.scan.has_illegal_characters:
                report.files_with_illegal_characters += 1
            if result.cleaned:
                report.files_cleaned += 1
            if not result.scan.is_clean:
                report.flagged_files.append(result)

    def add_error(self, path: Path, message: str):
        with self._lock:
            self._report.errors.append((path, message))

    def report(self) -> AuditReport:
        """Return a snapshot of the totals so far."""
        with self._lock:
            report = self._report
            return AuditReport(
                files_checked=report.files_checked,
                files_with_tabs=report.files_with_tabs,
                files_with_illegal_characters=report.files_with_illegal_characters,
                files_cleaned=report.files_cleaned,
                flagged_files=sorted(report.flagged_files, key=lambda r: str(r.path)),
                errors=sorted(report.errors, key=lambda e: str(e[0])),
            )
