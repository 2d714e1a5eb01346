"""General helpers: string conversion, file checks, timing and line reading."""

from __future__ import annotations

import math
import os
import re
import time
from typing import Any, Callable, Iterable, Iterator, List, Optional, TextIO, TypeVar

T = TypeVar("T")

LOG_LEVELS = (
    "0-trace",
    "1-debug",
    "2-info",
    "3-warn",
    "4-err",
    "5-critical",
    "6-off",
)

_VALUE_PATTERN = re.compile(r"\s*([^,\s]+)")


def split_string(text: str) -> List[str]:
    """Split a comma separated string; a trailing comma adds no empty item."""
    parts = text.split(",")
    if parts[-1] == "":
        parts.pop()
    return parts


def string2bool(text: str) -> bool:
    """Return True for "true", "t" or "1"."""
    return text in ("true", "t", "1")


def bool2string(value: Any) -> str:
    """Return "true" when value is truthy, otherwise "false"."""
    return str(bool(value)).lower()


def check_file_extension(filename: str, extension_list: str) -> bool:
    """Check whether the extension of filename is in a comma separated list."""
    extension = filename[filename.rfind(".") + 1:]
    return extension in split_string(extension_list)


def file_exists(filename: str | os.PathLike) -> bool:
    """Return True if the path exists."""
    return os.path.exists(filename)


def folder_exist(folder_name: str) -> bool:
    """Return True if the folder exists; an empty name means the current one."""
    if not folder_name:
        return True
    return os.path.isdir(folder_name)


def get_file_directory(filename: str) -> str:
    """Return the part of a path before its last slash, or an empty string."""
    found = filename.rfind("/")
    return filename[:found] if found >= 0 else ""


def vec2string(values: Iterable[Any]) -> str:
    """Join values with commas."""
    return ",".join(str(value) for value in values)


def string2vec(text: str, convert: Callable[[str], T] = float) -> List[T]:
    """Parse comma or whitespace separated values, stopping at the first bad one."""
    values: List[T] = []
    pos = 0
    while True:
        match = _VALUE_PATTERN.match(text, pos)
        if match is None:
            break
        try:
            values.append(convert(match.group(1)))
        except ValueError:
            break
        pos = match.end()
        if text.startswith(",", pos):
            pos += 1
    return values


def get_current_time() -> float:
    """Return the current wall-clock time in seconds."""
    return time.time()


def get_duration(start: float, end: float) -> float:
    """Return the time from start to end in seconds, truncated to milliseconds."""
    milliseconds = math.trunc(round((end - start) * 1000, 6))
    return milliseconds / 1000.0


def iter_lines(stream: TextIO, delim: Optional[str] = None) -> Iterator[str]:
    """Yield lines ended by \\n, \\r\\n, \\r or the optional delimiter.

    A final piece without an ending is yielded only when it is not empty.
    """
    pattern = r"\r\n|\r|\n"
    if delim:
        pattern += "|" + re.escape(delim)
    *complete, last = re.split(pattern, stream.read())
    yield from complete
    if last:
        yield last