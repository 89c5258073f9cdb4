"""HTTP parser errors and the canned responses sent for them."""

from __future__ import annotations

from enum import IntEnum


class HttpError(IntEnum):
    """Errors the HTTP parser can report."""

    HTTP_VERSION_NOT_SUPPORTED = 1
    REQUEST_HEADER_FIELDS_TOO_LARGE = 2
    BAD_REQUEST = 3


_SIGNATURE = "<hr><i>microws Server</i>"

_FULL_RESPONSES = {
    HttpError.HTTP_VERSION_NOT_SUPPORTED: (
        "HTTP/1.1 505 HTTP Version Not Supported\r\nConnection: close\r\n\r\n"
        "<h1>HTTP Version Not Supported</h1>"
        "<p>This server does not support HTTP/1.0.</p>" + _SIGNATURE
    ),
    HttpError.REQUEST_HEADER_FIELDS_TOO_LARGE: (
        "HTTP/1.1 431 Request Header Fields Too Large\r\nConnection: close\r\n\r\n"
        "<h1>Request Header Fields Too Large</h1>" + _SIGNATURE
    ),
    HttpError.BAD_REQUEST: (
        "HTTP/1.1 400 Bad Request\r\nConnection: close\r\n\r\n"
        "<h1>Bad Request</h1>" + _SIGNATURE
    ),
}

_ANONYMIZED_RESPONSES = {
    HttpError.HTTP_VERSION_NOT_SUPPORTED: (
        "HTTP/1.1 505 HTTP Version Not Supported\r\nConnection: close\r\n\r\n"
    ),
    HttpError.REQUEST_HEADER_FIELDS_TOO_LARGE: (
        "HTTP/1.1 431 Request Header Fields Too Large\r\nConnection: close\r\n\r\n"
    ),
    HttpError.BAD_REQUEST: "HTTP/1.1 400 Bad Request\r\nConnection: close\r\n\r\n",
}


def error_response(error: HttpError | int, anonymized: bool = False) -> bytes:
    """Return the raw HTTP response written for a parser error.

    Raises ValueError for a code that is not an HttpError.
    """
    code = HttpError(error)
    table = _ANONYMIZED_RESPONSES if anonymized else _FULL_RESPONSES
    return table[code].encode("ascii")