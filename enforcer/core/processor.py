"""
File Processor Module

This module runs the per-file pipeline: read the file, scan the original
bytes, and, when cleaning is enabled, replace the file with its cleaned
content.
"""

import os
import contextlib
import stat
import tempfile
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .cleaner import clean
from .errors import PathIOError, WriteError
from .scanner import ScanResult, scan

logger = logging.getLogger(__name__)

# surrogateescape lets undecodable bytes survive a decode/encode round trip
ENCODING = 'utf-8'
ENCODING_ERRORS = 'surrogateescape'


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of processing one file."""
    path: Path
    scan: ScanResult
    cleaned: bool = False


class FileProcessor:
    """
    Scan one file and optionally strip its trailing whitespace.

    Findings are always taken from the content as it was read, before any
    cleaning, so a file that gets fixed is still reported.
    """

    def __init__(self, clean_enabled: bool = False):
        """
        Initialize the processor.

        Args:
            clean_enabled: Whether files may be rewritten
        """
        self.clean_enabled = clean_enabled

    def _read_file(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise PathIOError(path, e.strerror or str(e)) from e

    def _write_file(self, path: Path, data: bytes):
        """
        Replace ``path`` with ``data`` atomically.

        The content goes to a temporary file next to the original, which is
        then renamed over it, so an interrupted write never truncates the
        original. A symlink is followed and its target is replaced.
        """
        target = path.resolve()
        tmp_path = None
        try:
            mode = stat.S_IMODE(target.stat().st_mode)
            with tempfile.NamedTemporaryFile(
                mode='wb',
                delete=False,
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, target)
            logger.debug(f"Rewrote {target}")
        except OSError as e:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
            raise WriteError(path, e.strerror or str(e)) from e

    def process(self, path: Union[str, Path]) -> ProcessResult:
        """
        Process a single regular file.

        Args:
            path: File to process

        Returns:
            ProcessResult with the pre-clean findings

        Raises:
            PathIOError: If the file cannot be read
            WriteError: If the cleaned content cannot be written back
        """
        path = Path(path)
        data = self._read_file(path)
        result = scan(data)

        if not self.clean_enabled:
            return ProcessResult(path, result)

        text = data.decode(ENCODING, ENCODING_ERRORS)
        cleaned = clean(text)
        if cleaned == text:
            return ProcessResult(path, result)

        self._write_file(path, cleaned.encode(ENCODING, ENCODING_ERRORS))
        logger.info(f"Removed trailing whitespace from {path}")
        return ProcessResult(path, result, cleaned=True)
