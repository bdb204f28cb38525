"""Trailing whitespace removal."""

TRAILING_WHITESPACE = ' \t'


def _clean_line(line: str) -> str:
    line = line.rstrip(TRAILING_WHITESPACE)
    if line.endswith('\r'):
        line = line[:-1].rstrip(TRAILING_WHITESPACE) + '\r'
    return line


def clean(text: str) -> str:
    """
    Strip trailing spaces and tabs from every line of ``text``.

    Leading whitespace, blank lines and the presence or absence of a final
    newline are kept as they are. A carriage return ending a CRLF line is
    kept; the whitespace in front of it is removed.
    """
    return '\n'.join(_clean_line(line) for line in text.split('\n'))
