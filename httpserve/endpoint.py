"""URL endpoints: registered patterns and the request paths matched against them."""

from __future__ import annotations

import functools
import re

from .http_utils import tokenize_url
from .string_utilities import to_upper_copy

_DEFAULT_ARG_PATTERN = r"([^\/]+)"


@functools.total_ordering
class HttpEndpoint:
    """A URL split into pieces, optionally compiled into a matching regular expression.

    At registration, pieces of the form ``{name}`` or ``{name|regex}`` declare
    URL parameters.  A *family* endpoint also matches every URL below it.
    """

    def __init__(
        self,
        url: str = "/",
        family: bool = False,
        registration: bool = False,
        use_regex: bool = False,
    ) -> None:
        if use_regex and not registration:
            raise ValueError("Cannot use regex if not during registration")

        complete = url
        if complete.endswith("/"):
            complete = complete[:-1]
        if not complete.startswith("/"):
            complete = "/" + complete

        normalized = "^/" if use_regex else "/"
        pars: list[str] = []
        pieces: list[str] = []
        chunk_positions: list[int] = []
        first = True

        for position, part in enumerate(tokenize_url(url)):
            if not registration:
                normalized += ("" if first else "/") + part
                first = False
                pieces.append(part)
                continue

            if part and part[0] != "{":
                if first:
                    normalized = ("" if part[0] == "^" else normalized) + part
                    first = False
                else:
                    normalized += "/" + part
                pieces.append(part)
                continue

            if len(part) < 3 or part[0] != "{" or part[-1] != "}":
                raise ValueError("Bad URL format")

            bar = part.find("|")
            if bar != -1:
                pars.append(part[1:bar])
                pattern = part[bar + 1 : -1]
            else:
                pars.append(part[1:-1])
                pattern = _DEFAULT_ARG_PATTERN
            normalized += ("" if first else "/") + pattern
            first = False
            chunk_positions.append(position)
            pieces.append(part)

        self._regex: re.Pattern[str] | None = None
        if use_regex:
            normalized += "$"
            try:
                self._regex = re.compile(normalized, re.IGNORECASE)
            except re.error as exc:
                raise ValueError(f"Not a valid regex in URL: {normalized}") from exc

        self._url_complete = complete
        self._url_normalized = normalized
        self._url_pars = tuple(pars)
        self._url_pieces = tuple(pieces)
        self._chunk_positions = tuple(chunk_positions)
        self._family_url = family

    @property
    def url_complete(self) -> str:
        """The URL with a leading slash and no trailing slash."""
        return self._url_complete

    @property
    def url_normalized(self) -> str:
        """The URL as a pattern, with parameters replaced by their regexes."""
        return self._url_normalized

    @property
    def url_pars(self) -> tuple[str, ...]:
        """Names of the URL parameters, in order."""
        return self._url_pars

    @property
    def url_pieces(self) -> tuple[str, ...]:
        """The non-empty path pieces of the URL."""
        return self._url_pieces

    @property
    def chunk_positions(self) -> tuple[int, ...]:
        """Indexes into :attr:`url_pieces` of the parameter pieces."""
        return self._chunk_positions

    @property
    def is_family_url(self) -> bool:
        """Whether the endpoint also matches URLs below it."""
        return self._family_url

    @property
    def is_regex_compiled(self) -> bool:
        """Whether a matching regular expression was compiled."""
        return self._regex is not None

    def match(self, url: HttpEndpoint) -> bool:
        """Tell whether the request endpoint ``url`` is served by this endpoint."""
        if self._regex is None:
            raise ValueError("Cannot run match. Regex suppressed.")

        if not self._family_url or len(url.url_pieces) < len(self._url_pieces):
            return self._regex.fullmatch(url.url_complete) is not None

        prefix = "/" + "/".join(url.url_pieces[: len(self._url_pieces)])
        return self._regex.fullmatch(prefix) is not None

    def _sort_key(self) -> tuple[bool, str]:
        return (not self._family_url, to_upper_copy(self._url_normalized))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HttpEndpoint):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpEndpoint):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __repr__(self) -> str:
        return (
            f"HttpEndpoint(url_complete={self._url_complete!r}, "
            f"url_normalized={self._url_normalized!r}, family={self._family_url!r})"
        )