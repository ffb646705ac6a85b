"""Resources that answer requests, one render method per HTTP method."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .http_utils import HTTP_METHODS
from .responses import HttpResponse, StringResponse

if TYPE_CHECKING:
    from .request import HttpRequest


def empty_render(request: HttpRequest) -> HttpResponse:
    """Answer any request with an empty ``200 OK`` text response."""
    return StringResponse()


class HttpResource:
    """A callable HTTP resource.

    Subclasses override :meth:`render` to answer every method alike, or one of
    the ``render_<method>`` methods to answer a single method.  Each method can
    be allowed or disallowed; all of them are allowed at first.
    """

    def __init__(self) -> None:
        self._method_state: dict[str, bool] = dict.fromkeys(HTTP_METHODS, True)

    def render(self, request: HttpRequest) -> HttpResponse:
        """Answer a request of any method."""
        return empty_render(request)

    def render_get(self, request: HttpRequest) -> HttpResponse:
        """Answer a GET request."""
        return self.render(request)

    def render_post(self, request: HttpRequest) -> HttpResponse:
        """Answer a POST request."""
        return self.render(request)

    def render_put(self, request: HttpRequest) -> HttpResponse:
        """Answer a PUT request."""
        return self.render(request)

    def render_head(self, request: HttpRequest) -> HttpResponse:
        """Answer a HEAD request."""
        return self.render(request)

    def render_delete(self, request: HttpRequest) -> HttpResponse:
        """Answer a DELETE request."""
        return self.render(request)

    def render_trace(self, request: HttpRequest) -> HttpResponse:
        """Answer a TRACE request."""
        return self.render(request)

    def render_options(self, request: HttpRequest) -> HttpResponse:
        """Answer an OPTIONS request."""
        return self.render(request)

    def render_patch(self, request: HttpRequest) -> HttpResponse:
        """Answer a PATCH request."""
        return self.render(request)

    def render_connect(self, request: HttpRequest) -> HttpResponse:
        """Answer a CONNECT request."""
        return self.render(request)

    def set_allowing(self, method: str, allowed: bool) -> None:
        """Allow or disallow ``method``; methods the resource does not know are ignored."""
        if method in self._method_state:
            self._method_state[method] = allowed

    def allow_all(self) -> None:
        """Allow every known method."""
        for method in self._method_state:
            self._method_state[method] = True

    def disallow_all(self) -> None:
        """Disallow every known method."""
        for method in self._method_state:
            self._method_state[method] = False

    def is_allowed(self, method: str) -> bool:
        """Tell whether ``method`` is allowed; unknown methods never are."""
        return self._method_state.get(method, False)

    def allowed_methods(self) -> list[str]:
        """Return the allowed methods in sorted order."""
        return sorted(method for method, allowed in self._method_state.items() if allowed)