"""HTTP helpers: URL handling, unescaping, upload files and debug dumps."""

from __future__ import annotations

import os
import re
import secrets
import string
from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from .string_utilities import string_split

AnyStr = TypeVar("AnyStr", str, bytes)
Unescaper = Callable[[str], str]

SHOUTCAST_RESPONSE = 1 << 31

APPLICATION_OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain"

HTTP_VERSION_1_0 = "HTTP/1.0"
HTTP_VERSION_1_1 = "HTTP/1.1"

METHOD_CONNECT = "CONNECT"
METHOD_DELETE = "DELETE"
METHOD_GET = "GET"
METHOD_HEAD = "HEAD"
METHOD_OPTIONS = "OPTIONS"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_TRACE = "TRACE"
METHOD_PATCH = "PATCH"

HTTP_METHODS = (
    METHOD_GET,
    METHOD_POST,
    METHOD_PUT,
    METHOD_HEAD,
    METHOD_DELETE,
    METHOD_TRACE,
    METHOD_CONNECT,
    METHOD_OPTIONS,
    METHOD_PATCH,
)

POST_ENCODING_FORM_URLENCODED = "application/x-www-form-urlencoded"
POST_ENCODING_MULTIPART_FORMDATA = "multipart/form-data"

UPLOAD_FILENAME_PREFIX = "httpserve."
_UPLOAD_RANDOM_LENGTH = 6
_UPLOAD_ATTEMPTS = 100
_UPLOAD_ALPHABET = string.ascii_letters + string.digits

_REPEATED_SLASHES = re.compile(r"/{2,}")
_HEX_FIELD = re.compile(rb"\s*([+-]?)([0-9A-Fa-f]+)")


class GenerateFilenameError(Exception):
    """Raised when a unique upload file cannot be created."""


def tokenize_url(url: str, separator: str = "/") -> list[str]:
    """Split a URL into its non-empty path pieces."""
    return string_split(url, separator)


def standardize_url(url: str) -> str:
    """Collapse runs of slashes and drop a trailing slash (except for ``/``)."""
    collapsed = _REPEATED_SLASHES.sub("/", url)
    if len(collapsed) > 1 and collapsed.endswith("/"):
        return collapsed[:-1]
    return collapsed


def generate_random_upload_filename(directory: str) -> str:
    """Create a new, empty, uniquely named file in ``directory`` and return its path."""
    base = f"{directory}{os.sep}{UPLOAD_FILENAME_PREFIX}"
    flags = os.O_CREAT | os.O_EXCL | os.O_RDWR | getattr(os, "O_NOINHERIT", 0)
    for _ in range(_UPLOAD_ATTEMPTS):
        suffix = "".join(secrets.choice(_UPLOAD_ALPHABET) for _ in range(_UPLOAD_RANDOM_LENGTH))
        path = base + suffix
        try:
            fd = os.open(path, flags, 0o600)
        except FileExistsError:
            continue
        except OSError as exc:
            raise GenerateFilenameError("Failed to create unique file") from exc
        os.close(fd)
        return path
    raise GenerateFilenameError("Failed to create unique file")


def _decode_hex_field(field: bytes) -> int | None:
    match = _HEX_FIELD.match(field)
    if match is None:
        return None
    number = int(match.group(2), 16)
    if match.group(1) == b"-":
        number = -number
    return number & 0xFF


def _unescape_bytes(data: bytes) -> bytes:
    out = bytearray()
    size = len(data)
    rpos = 0
    while rpos < size and data[rpos] != 0:
        char = data[rpos]
        if char == ord("+"):
            out.append(ord(" "))
            rpos += 1
            continue
        if char == ord("%") and size > rpos + 2:
            decoded = _decode_hex_field(data[rpos + 1 : rpos + 3])
            if decoded is not None:
                out.append(decoded)
                rpos += 3
                continue
        out.append(char)
        rpos += 1
    return bytes(out)


def http_unescape(value: AnyStr) -> AnyStr:
    """Decode ``+`` as space and ``%XX`` escapes; malformed escapes are kept verbatim."""
    if isinstance(value, bytes):
        return _unescape_bytes(value)
    raw = value.encode("utf-8", "surrogateescape")
    return _unescape_bytes(raw).decode("utf-8", "surrogateescape")


def base_unescaper(value: str, unescaper: Unescaper | None = None) -> str:
    """Unescape ``value`` with ``unescaper`` if given, else with :func:`http_unescape`."""
    if not value or value[0] == "\0":
        return ""
    if unescaper is not None:
        return unescaper(value)
    return http_unescape(value)


def load_file(filename: str | os.PathLike[str]) -> bytes:
    """Return the whole content of ``filename`` as bytes."""
    try:
        with open(filename, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise ValueError("Unable to open file") from exc


def dump_header_map(prefix: str, mapping: Mapping[str, str]) -> str:
    """Render a header-like mapping as one debug line, or ``""`` when empty."""
    if not mapping:
        return ""
    entries = "".join(f'{key}:"{value}" ' for key, value in mapping.items())
    return f"    {prefix} [{entries}]\n"


def dump_arg_map(prefix: str, mapping: Mapping[str, Iterable[str]]) -> str:
    """Render a mapping of argument names to value lists as one debug line."""
    if not mapping:
        return ""
    entries = "".join(
        "{}:[{}] ".format(key, ", ".join(f'"{value}"' for value in values))
        for key, values in mapping.items()
    )
    return f"    {prefix} [{entries}]\n"