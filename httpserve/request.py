"""Incoming HTTP requests: headers, cookies, query arguments and uploaded files."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, MutableMapping
from types import TracebackType

from .file_info import FileInfo
from .http_utils import HTTP_VERSION_1_1, Unescaper, base_unescaper, dump_arg_map, dump_header_map
from .responses import _HeaderMap
from .string_utilities import to_upper_copy

HeaderSource = Mapping[str, str] | Iterable[tuple[str, str]]
QuerySource = Mapping[str, "str | None"] | Iterable[tuple[str, "str | None"]]


def _pairs(source: QuerySource | None) -> list[tuple[str, str | None]]:
    if source is None:
        return []
    if isinstance(source, Mapping):
        return list(source.items())
    return list(source)


class HttpRequest:
    """A request as received from a client.

    Query arguments are kept raw, in the order the client sent them, and are
    unescaped the first time any of them is asked for.  Header, footer and
    cookie names are looked up without regard to case.
    """

    def __init__(
        self,
        method: str = "GET",
        path: str = "/",
        version: str = HTTP_VERSION_1_1,
        headers: HeaderSource | None = None,
        footers: HeaderSource | None = None,
        cookies: HeaderSource | None = None,
        query_args: QuerySource | None = None,
        user: str = "",
        password: str = "",
        requestor: str = "",
        requestor_port: int = 0,
        unescaper: Unescaper | None = None,
    ) -> None:
        self.method = to_upper_copy(method)
        self.path = path
        self.version = version
        self.user = user
        self.password = password
        self.requestor = requestor
        self.requestor_port = requestor_port
        self.unescaper = unescaper
        self._headers: MutableMapping[str, str] = _HeaderMap(headers or ())
        self._footers: MutableMapping[str, str] = _HeaderMap(footers or ())
        self._cookies: MutableMapping[str, str] = _HeaderMap(cookies or ())
        self._raw_args = _pairs(query_args)
        self._args: dict[str, list[str]] = {}
        self._args_populated = False
        self._querystring = ""
        self.files: dict[str, dict[str, FileInfo]] = {}

    @property
    def headers(self) -> Mapping[str, str]:
        """A copy of the request headers."""
        return _HeaderMap(self._headers)

    @property
    def footers(self) -> Mapping[str, str]:
        """A copy of the request footers (trailers)."""
        return _HeaderMap(self._footers)

    @property
    def cookies(self) -> Mapping[str, str]:
        """A copy of the request cookies."""
        return _HeaderMap(self._cookies)

    def header(self, key: str) -> str:
        """Return the header ``key``, or ``""`` when absent."""
        return self._headers.get(key, "")

    def footer(self, key: str) -> str:
        """Return the footer ``key``, or ``""`` when absent."""
        return self._footers.get(key, "")

    def cookie(self, key: str) -> str:
        """Return the cookie ``key``, or ``""`` when absent."""
        return self._cookies.get(key, "")

    def _populate_args(self) -> None:
        if self._args_populated:
            return
        for key, value in self._raw_args:
            unescaped = base_unescaper("" if value is None else value, self.unescaper)
            self._args.setdefault(key, []).append(unescaped)
        self._args_populated = True

    def _raw_arg(self, key: str) -> str:
        for name, value in self._raw_args:
            if name == key:
                return "" if value is None else value
        return ""

    def arg(self, key: str) -> list[str]:
        """Return every unescaped value of the query argument ``key``."""
        self._populate_args()
        return list(self._args.get(key, ()))

    def arg_flat(self, key: str) -> str:
        """Return the first value of ``key``.

        Before arguments have been unescaped, the raw value sent by the client
        is returned.
        """
        values = self._args.get(key)
        if values:
            return values[0]
        return self._raw_arg(key)

    def args(self) -> dict[str, list[str]]:
        """Return all query arguments, sorted by name, with all their values."""
        self._populate_args()
        return {key: list(values) for key, values in sorted(self._args.items())}

    def args_flat(self) -> dict[str, str]:
        """Return all query arguments, sorted by name, with their first value."""
        self._populate_args()
        return {key: values[0] for key, values in sorted(self._args.items()) if values}

    def querystring(self) -> str:
        """Rebuild the query string, ``?k=v&k2=v2``, or ``""`` without arguments."""
        if not self._querystring and self._raw_args:
            self._querystring = "?" + "&".join(
                f"{key}={'' if value is None else value}" for key, value in self._raw_args
            )
        return self._querystring

    def grow_last_arg(self, key: str, value: str) -> None:
        """Append ``value`` to the last value of ``key``, creating it if needed."""
        values = self._args.get(key)
        if values is None:
            self._args[key] = [value]
        elif values:
            values[-1] += value
        else:
            values.append(value)

    def get_or_create_file_info(self, key: str, upload_file_name: str) -> FileInfo:
        """Return the record of the file uploaded as ``key`` under ``upload_file_name``."""
        return self.files.setdefault(key, {}).setdefault(upload_file_name, FileInfo())

    def remove_uploaded_files(self) -> None:
        """Delete every stored upload from the file system, ignoring failures."""
        for uploads in self.files.values():
            for info in uploads.values():
                try:
                    os.remove(info.file_system_file_name)
                except OSError:
                    pass

    def __enter__(self) -> HttpRequest:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.remove_uploaded_files()

    def __str__(self) -> str:
        return (
            f'{self.method} Request [user:"{self.user}" pass:"{self.password}"] '
            f'path:"{self.path}"\n'
            + dump_header_map("Headers", self._headers)
            + dump_header_map("Footers", self._footers)
            + dump_header_map("Cookies", self._cookies)
            + dump_arg_map("Query Args", self.args())
            + f"    Version [ {self.version} ] Requestor [ {self.requestor} ] "
            f"Port [ {self.requestor_port} ]\n"
        )