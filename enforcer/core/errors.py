"""
Error Types Module

Exceptions raised by the enforcer core. Per-file errors (PathIOError,
WriteError) are collected by the runner and never stop a run; only
ConfigReadError and StartupError are fatal.
"""


class EnforcerError(Exception):
    """Base class for all enforcer errors."""


class ConfigParseError(EnforcerError):
    """Config text has a malformed overall structure."""

    def __init__(self, message: str, line_number: int = 0):
        self.line_number = line_number
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ConfigReadError(EnforcerError):
    """An existing config file could not be read."""


class StartupError(EnforcerError):
    """Fatal condition detected before any file is scanned."""


class PathIOError(EnforcerError, OSError):
    """A candidate file could not be read."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class WriteError(EnforcerError, OSError):
    """A cleaned file could not be written back; the original is untouched."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write {path}: {reason}")
