"""
Properties Loader - Reads Java-style ``.properties`` configuration files.

Supports the subset the logger configuration needs:
- ``#`` and ``!`` comment lines, blank lines
- ``key=value``, ``key: value`` and ``key value`` pairs
- trailing-backslash line continuation
- ``\\t \\n \\r \\f \\uXXXX`` escapes and escaped separators in keys
"""
from pathlib import Path
from typing import Iterator, Optional
import re
import sys

from shared.services.logger import get_logger
from config.settings import settings


logger = get_logger(__name__)

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|.|$)", re.DOTALL)
_ESCAPE_CHARS = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _continues(line: str) -> bool:
    """A line continues when it ends with an odd number of backslashes."""
    stripped = line.rstrip("\\")
    return (len(line) - len(stripped)) % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    lines = iter(_LINE_BREAK.split(text))
    for line in lines:
        line = line.lstrip(_WHITESPACE)
        if not line or line[0] in "#!":
            continue
        while _continues(line):
            line = line[:-1]
            following = next(lines, None)
            if following is None:
                break
            line += following.lstrip(_WHITESPACE)
        yield line


def _unescape(value: str) -> str:
    def replace(match: re.Match) -> str:
        escaped = match.group(1)
        if len(escaped) == 5:
            return chr(int(escaped[1:], 16))
        return _ESCAPE_CHARS.get(escaped, escaped)

    return _ESCAPE.sub(replace, value)


def _split_pair(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1
    index = min(index, len(line))

    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(line[:index]), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse ``.properties`` text into a dict.

    Args:
        text: File contents

    Returns:
        Mapping of keys to values; a repeated key keeps its last value
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_pair(line)
        properties[key] = value
    return properties


def resource_locations(name: str, config_dir: Optional[str] = None) -> list[Path]:
    """
    Candidate paths for ``name``, in lookup order.

    1. ``config_dir`` (defaults to ``LOGGER_CONFIG_DIR``, then the working directory)
    2. the first ``sys.path`` entry that contains ``name``
    """
    config_dir = config_dir or settings.LOGGER_CONFIG_DIR
    locations = [Path(config_dir or Path.cwd()) / name]

    for entry in sys.path:
        candidate = Path(entry or ".") / name
        if candidate.is_file():
            locations.append(candidate)
            break

    return locations


def load_properties(name: Optional[str] = None, config_dir: Optional[str] = None) -> dict[str, str]:
    """
    Read the first existing properties file among the resource locations.

    Raises:
        FileNotFoundError: No location holds the file
        OSError: The file exists but cannot be read
    """
    name = name or settings.LOGGER_PROPERTIES_NAME
    locations = resource_locations(name, config_dir)

    for path in locations:
        if path.is_file():
            logger.debug(f"Loading logger configuration from {path}")
            return parse_properties(path.read_text(encoding="utf-8"))

    raise FileNotFoundError(
        f"{name} not found in {', '.join(str(path.parent) for path in locations)}"
    )
