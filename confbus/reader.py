"""Reading typed key/value configuration files with a meta header."""

from __future__ import annotations

import enum
import re
from os import PathLike
from typing import IO, Iterator, Optional, Tuple, Union

from .exceptions import (
    FileError,
    InvalidValueError,
    MetaSectionError,
    NoTypeTagError,
    UnsupportedConfigurationError,
    UnsupportedTypeTagError,
)

META_HEADER = "--META--"
META_FOOTER = "--------"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_INT_RE = re.compile(r"\s*([+-]?\d+)")
_KEY_RE = re.compile(r"\s*(\S+)(.*)", re.DOTALL)

Value = Union[int, str]
Field = Tuple[str, Value]


class ConfigType(enum.IntEnum):
    """Kinds of configuration a file may declare."""

    TIMEOUT = 0


RELATIONS = {"Timeout": ConfigType.TIMEOUT}


def _error(cls, method):
    return cls(__file__, "ConfigReader", method)


def parse_value(text):
    """Parse a ``tag: value`` text into an int or a single-word string."""
    if not text:
        raise _error(NoTypeTagError, "parse_value")
    tag, _, rest = text.partition(":")
    tag = "".join(tag.split())
    if tag == "int":
        match = _INT_RE.match(rest)
        if match is None:
            raise _error(InvalidValueError, "parse_value")
        number = int(match.group(1))
        if not _INT_MIN <= number <= _INT_MAX:
            raise _error(InvalidValueError, "parse_value")
        return number
    if tag == "string":
        words = rest.split()
        if not words:
            raise _error(InvalidValueError, "parse_value")
        return words[0]
    raise _error(UnsupportedTypeTagError, "parse_value")


def parse_field(line):
    """Parse a ``key tag: value`` line into a ``(key, value)`` pair."""
    match = _KEY_RE.match(line)
    if match is None:
        raise _error(NoTypeTagError, "parse_field")
    key, rest = match.groups()
    return key, parse_value(rest)


class ConfigReader:
    """Reads the meta section and fields of one configuration file at a time."""

    def __init__(self, path=None):
        self._stream: Optional[IO[str]] = None
        if path is not None:
            self.set_file(path)

    def set_file(self, path: Union[str, PathLike]) -> None:
        """Open ``path``; a reader holds one open file at a time."""
        if self._stream is not None:
            raise _error(FileError, "set_file")
        try:
            self._stream = open(path, encoding="utf-8", newline="")
        except OSError as exc:
            raise _error(FileError, "set_file") from exc

    def _readline(self, method: str) -> Optional[str]:
        if self._stream is None:
            raise _error(FileError, method)
        try:
            line = self._stream.readline()
        except (OSError, UnicodeDecodeError) as exc:
            raise _error(FileError, method) from exc
        if line == "":
            return None
        return line[:-1] if line.endswith("\n") else line

    def _required_line(self) -> str:
        line = self._readline("read_meta")
        if line is None:
            raise _error(FileError, "read_meta")
        return line

    def read_meta(self) -> ConfigType:
        """Read the meta section from the start of the file."""
        if self._stream is None:
            raise _error(FileError, "read_meta")
        self._stream.seek(0)
        if self._required_line() != META_HEADER:
            raise _error(MetaSectionError, "read_meta")
        kind = RELATIONS.get(self._required_line())
        if kind is None:
            raise _error(UnsupportedConfigurationError, "read_meta")
        if self._required_line() != META_FOOTER:
            raise _error(MetaSectionError, "read_meta")
        return kind

    def next_field(self) -> Optional[Field]:
        """Return the next field, or None at the end of the file."""
        line = self._readline("next_field")
        if line is None:
            return None
        return parse_field(line)

    def close(self) -> None:
        """Close the current file so another one can be set."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __iter__(self) -> Iterator[Field]:
        while (field := self.next_field()) is not None:
            yield field

    def __enter__(self) -> "ConfigReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_reader(path):
    """Create a reader opened on ``path``."""
    return ConfigReader(path)