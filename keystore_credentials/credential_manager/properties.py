"""
Reader and writer for Java-style ``.properties`` files.

Supported syntax:
- ``#`` and ``!`` comment lines, blank lines
- ``key=value``, ``key:value`` and ``key value`` entries
- line continuation with a trailing backslash
- ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes
"""

import re
import string
from pathlib import Path
from typing import IO, Dict, Iterator, Mapping, Union

# latin-1 is the traditional encoding of .properties files
DEFAULT_ENCODING = "iso-8859-1"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_REVERSE_ESCAPES = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f", "\\": "\\\\"}


class PropertiesParseError(ValueError):
    """Raised when a properties file contains malformed content."""

    pass


def _logical_lines(text: str) -> Iterator[str]:
    pending = None
    for natural in _LINE_BREAK.split(text):
        line = natural.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = (pending or "") + line[:-1]
            continue

        yield (pending or "") + line
        pending = None

    if pending is not None:
        yield pending


def _split_entry(line: str):
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest[:1] and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    chars = []
    index = 0
    while index < len(text):
        char = text[index]
        index += 1
        if char != "\\":
            chars.append(char)
            continue
        if index >= len(text):
            break

        char = text[index]
        index += 1
        if char == "u":
            digits = text[index : index + 4]
            if len(digits) != 4 or any(c not in string.hexdigits for c in digits):
                raise PropertiesParseError("Malformed \\uxxxx encoding")
            chars.append(chr(int(digits, 16)))
            index += 4
        else:
            chars.append(_ESCAPES.get(char, char))

    # \uXXXX escapes above the BMP arrive as surrogate pairs
    joined = "".join(chars)
    return joined.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def loads(text: str) -> Dict[str, str]:
    """Parse properties text into a dict. Later duplicates win."""
    entries: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        entries[_unescape(key)] = _unescape(value)
    return entries


def load(stream: IO[str]) -> Dict[str, str]:
    """Parse properties from an open text stream."""
    return loads(stream.read())


def load_file(path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> Dict[str, str]:
    """
    Read and parse a properties file.

    Raises:
        OSError: If the file can't be opened or read
        UnicodeDecodeError: If the file doesn't match ``encoding``
        PropertiesParseError: If an escape sequence is malformed
    """
    with open(path, "r", encoding=encoding, newline="") as handle:
        return load(handle)


def _escape(text: str, is_key: bool) -> str:
    out = []
    for index, char in enumerate(text):
        if char in _REVERSE_ESCAPES:
            out.append(_REVERSE_ESCAPES[char])
        elif char in "=:#!" or (char == " " and (is_key or index == 0)):
            out.append("\\" + char)
        else:
            out.append(char)
    return "".join(out)


def dumps(entries: Mapping[str, object]) -> str:
    """Serialize a mapping as ``key=value`` lines that ``loads`` reads back."""
    lines = [
        f"{_escape(str(key), True)}={_escape(str(value), False)}"
        for key, value in entries.items()
    ]
    return "\n".join(lines) + ("\n" if lines else "")
