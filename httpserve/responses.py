"""HTTP responses: headers, footers and cookies, with string, file and digest-auth bodies."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable, Iterator, Mapping, MutableMapping

from .http_utils import (
    APPLICATION_OCTET_STREAM,
    SHOUTCAST_RESPONSE,
    TEXT_PLAIN,
    dump_header_map,
)
from .string_utilities import to_upper_copy

HTTP_OK = 200
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_SET_COOKIE = "Set-Cookie"


class _HeaderMap(MutableMapping[str, str]):
    """A mapping whose keys compare without regard to case, iterated in sorted order."""

    def __init__(self, items: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        self._data: dict[str, tuple[str, str]] = {}
        self.update(items)

    def __getitem__(self, key: str) -> str:
        return self._data[to_upper_copy(key)][1]

    def __setitem__(self, key: str, value: str) -> None:
        folded = to_upper_copy(key)
        existing = self._data.get(folded)
        name = existing[0] if existing is not None else key
        self._data[folded] = (name, value)

    def __delitem__(self, key: str) -> None:
        folded = to_upper_copy(key)
        if folded not in self._data:
            raise KeyError(key)
        self._data.pop(folded)

    def __iter__(self) -> Iterator[str]:
        for folded in sorted(self._data):
            yield self._data[folded][0]

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"


class HttpResponse:
    """A response with a status code, headers, footers and cookies, and an empty body."""

    def __init__(self, response_code: int = HTTP_OK, content_type: str | None = None) -> None:
        self.response_code = response_code
        self.headers: MutableMapping[str, str] = _HeaderMap()
        self.footers: MutableMapping[str, str] = _HeaderMap()
        self.cookies: MutableMapping[str, str] = _HeaderMap()
        if content_type is not None:
            self.headers[HEADER_CONTENT_TYPE] = content_type

    def body(self) -> bytes:
        """Return the bytes to send as the response body."""
        return b""

    def header_items(self) -> list[tuple[str, str]]:
        """Return the header lines to send: headers first, then one Set-Cookie per cookie."""
        items = list(self.headers.items())
        items.extend((HEADER_SET_COOKIE, f"{name}={value}") for name, value in self.cookies.items())
        return items

    def shoutcast(self) -> None:
        """Mark the response as a SHOUTcast (ICY) response."""
        self.response_code |= SHOUTCAST_RESPONSE

    def __str__(self) -> str:
        return (
            f"Response [response_code:{self.response_code}]\n"
            + dump_header_map("Headers", self.headers)
            + dump_header_map("Footers", self.footers)
            + dump_header_map("Cookies", self.cookies)
        )


class StringResponse(HttpResponse):
    """A response whose body is held in memory."""

    def __init__(
        self,
        content: str | bytes = "",
        response_code: int = HTTP_OK,
        content_type: str = TEXT_PLAIN,
    ) -> None:
        super().__init__(response_code, content_type)
        self.content = content

    def body(self) -> bytes:
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")


class FileResponse(HttpResponse):
    """A response whose body is the content of a regular file."""

    def __init__(
        self,
        filename: str | os.PathLike[str] = "",
        response_code: int = HTTP_OK,
        content_type: str = APPLICATION_OCTET_STREAM,
    ) -> None:
        super().__init__(response_code, content_type)
        self.filename = filename

    def body(self) -> bytes:
        """Read the file; anything but an existing regular file raises :class:`OSError`."""
        info = os.stat(self.filename)
        if not stat.S_ISREG(info.st_mode):
            raise OSError(f"{os.fspath(self.filename)!r} is not a regular file")
        with open(self.filename, "rb") as handle:
            return handle.read()


class DigestAuthFailResponse(StringResponse):
    """A response that asks the client for digest authentication."""

    def __init__(
        self,
        content: str | bytes = "",
        realm: str = "",
        opaque: str = "",
        reload_nonce: bool = False,
        response_code: int = HTTP_OK,
        content_type: str = TEXT_PLAIN,
    ) -> None:
        super().__init__(content, response_code, content_type)
        self.realm = realm
        self.opaque = opaque
        self.reload_nonce = reload_nonce

    def authenticate_header(self, nonce: str) -> str:
        """Return the WWW-Authenticate value challenging the client with ``nonce``."""
        value = (
            f'Digest realm="{self.realm}",qop="auth",'
            f'nonce="{nonce}",opaque="{self.opaque}"'
        )
        if self.reload_nonce:
            value += ',stale="true"'
        return value