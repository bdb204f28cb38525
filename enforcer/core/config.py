"""
Configuration Module

This module loads the ``.enforcer`` configuration file, which lists the
ignore patterns and scan globs of a project.

Two notations are accepted and may be mixed::

    # section form
    [ignore]
    .git
    build_*

    # key-value form
    globs = ["**/*.c", "**/*.h"]

A broken list only empties the key it belongs to; the rest of the file
still applies.

Inside a section, a pattern line that is a single bracket expression such
as ``[abc]`` is read as a section header, and a pattern line of the form
``name=value`` is read as a key-value line that closes the section.
Patterns like that have to be written in the key-value form.
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import ConfigParseError, ConfigReadError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".enforcer"

RECOGNIZED_KEYS = ("ignore", "globs")

DEFAULT_IGNORE = (".git", ".repo")
DEFAULT_GLOBS = ("**/*.c", "**/*.cpp", "**/*.h")

_HEADER_RE = re.compile(r'^\[\s*([A-Za-z_][\w-]*)\s*\]$')
_KEY_VALUE_RE = re.compile(r'^([A-Za-z_][\w-]*)?\s*=\s*(.*)$')


@dataclass(frozen=True)
class EnforcerConfig:
    """Ignore patterns and scan globs, immutable once loaded."""
    ignore: Tuple[str, ...] = ()
    globs: Tuple[str, ...] = ()


def default_config() -> EnforcerConfig:
    """Return the built-in configuration."""
    return EnforcerConfig(ignore=DEFAULT_IGNORE, globs=DEFAULT_GLOBS)


def _parse_inline_list(key: str, raw: str, line_number: int) -> Tuple[str, ...]:
    """
    Parse the value of a ``key = [...]`` line.

    Returns an empty tuple (and logs a warning) when the value is not a
    list of strings.
    """
    try:
        value = json.loads(raw)
    except ValueError as e:
        logger.warning(f"Malformed list for '{key}' on line {line_number}: {e}")
        return ()

    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        logger.warning(f"Value for '{key}' on line {line_number} is not a list of strings")
        return ()

    return tuple(value)


def parse_config(text: str) -> EnforcerConfig:
    """
    Parse config text into an EnforcerConfig.

    Args:
        text: Content of a config file

    Returns:
        Parsed configuration; keys missing from the text are empty

    Raises:
        ConfigParseError: If the text is not structured as sections or
            key-value lines at all
    """
    values: Dict[str, List[str]] = {key: [] for key in RECOGNIZED_KEYS}
    section: Optional[str] = None
    in_section = False

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue

        header = _HEADER_RE.match(line)
        if header:
            name = header.group(1)
            in_section = True
            section = name if name in values else None
            if section is None:
                logger.debug(f"Skipping unknown section '{name}' on line {line_number}")
            continue

        key_value = _KEY_VALUE_RE.match(line)
        if key_value:
            key, raw = key_value.groups()
            if not key:
                raise ConfigParseError("key-value line without a key", line_number)
            # a key-value line closes any open section
            in_section = False
            section = None
            if key in values:
                values[key] = list(_parse_inline_list(key, raw, line_number))
            else:
                logger.debug(f"Ignoring unknown key '{key}' on line {line_number}")
            continue

        if not in_section:
            raise ConfigParseError(f"pattern '{line}' outside of any section", line_number)

        if section is not None:
            values[section].append(line)

    return EnforcerConfig(ignore=tuple(values["ignore"]), globs=tuple(values["globs"]))


def load_config(config_path: Path) -> EnforcerConfig:
    """
    Load the config file at ``config_path``, falling back to defaults.

    Raises:
        ConfigReadError: If the file exists but cannot be read
    """
    config_path = Path(config_path)
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        return default_config()

    try:
        data = config_path.read_bytes()
    except OSError as e:
        raise ConfigReadError(f"Failed to read config {config_path}: {e}") from e

    try:
        config = parse_config(data.decode('utf-8'))
    except UnicodeDecodeError as e:
        logger.warning(f"Config {config_path} is not valid UTF-8 ({e}), using defaults")
        return default_config()
    except ConfigParseError as e:
        logger.warning(f"Failed to parse config {config_path}: {e}, using defaults")
        return default_config()

    logger.info(f"Loaded configuration from {config_path}")
    return config
