"""Building blocks for HTTP servers: endpoints, IP rules, requests, responses and resources."""

__version__ = "0.1.0"

__all__ = [
    "endpoint",
    "file_info",
    "http_utils",
    "ip",
    "request",
    "resource",
    "responses",
    "string_utilities",
]