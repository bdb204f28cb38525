"""
enforcer

A content auditor for source trees: finds tabs and illegal characters and
strips trailing whitespace.
"""

__version__ = "0.2.0"
__author__ = "enforcer contributors"

from .core.config import EnforcerConfig
from .core.scanner import ScanResult
from .core.processor import FileProcessor
from .core.runner import RunOptions, run_audit

__all__ = [
    'EnforcerConfig',
    'ScanResult',
    'FileProcessor',
    'RunOptions',
    'run_audit',
]
