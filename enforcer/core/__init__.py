"""
Core modules for content scanning, whitespace cleaning, and reporting.
"""

from .config import EnforcerConfig, parse_config, default_config, load_config
from .path_filter import is_unwanted, has_unwanted_component
from .scanner import Finding, ScanResult, scan
from .cleaner import clean
from .processor import FileProcessor, ProcessResult
from .aggregator import AuditReport, ReportAggregator
from .runner import RunOptions, resolve_thread_count, run_audit

__all__ = [
    'EnforcerConfig',
    'parse_config',
    'default_config',
    'load_config',
    'is_unwanted',
    'has_unwanted_component',
    'Finding',
    'ScanResult',
    'scan',
    'clean',
    'FileProcessor',
    'ProcessResult',
    'AuditReport',
    'ReportAggregator',
    'RunOptions',
    'resolve_thread_count',
    'run_audit',
]
