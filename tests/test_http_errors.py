import pytest

from microws.http_errors import HttpError, error_response


@pytest.mark.parametrize(
    "code,error",
    [
        (1, HttpError.HTTP_VERSION_NOT_SUPPORTED),
        (2, HttpError.REQUEST_HEADER_FIELDS_TOO_LARGE),
        (3, HttpError.BAD_REQUEST),
    ],
)
def test_error_codes_match_parser_values(code, error):
    assert error_response(code) == error_response(error)
    assert error_response(code, anonymized=True) == error_response(error, anonymized=True)


def test_anonymized_bad_request_is_exact():
    assert (
        error_response(HttpError.BAD_REQUEST, anonymized=True)
        == b"HTTP/1.1 400 Bad Request\r\nConnection: close\r\n\r\n"
    )


@pytest.mark.parametrize(
    "error,status_line",
    [
        (HttpError.HTTP_VERSION_NOT_SUPPORTED, b"HTTP/1.1 505 HTTP Version Not Supported\r\n"),
        (HttpError.REQUEST_HEADER_FIELDS_TOO_LARGE, b"HTTP/1.1 431 Request Header Fields Too Large\r\n"),
        (HttpError.BAD_REQUEST, b"HTTP/1.1 400 Bad Request\r\n"),
    ],
)
def test_full_response_starts_with_status(error, status_line):
    response = error_response(error)
    assert response.startswith(status_line + b"Connection: close\r\n\r\n")


@pytest.mark.parametrize("error", list(HttpError))
def test_full_response_extends_anonymized(error):
    full = error_response(error)
    anonymous = error_response(error, anonymized=True)
    assert full.startswith(anonymous)
    assert len(full) > len(anonymous)
    assert anonymous.endswith(b"\r\n\r\n")


def test_version_page_mentions_http_10():
    body = error_response(HttpError.HTTP_VERSION_NOT_SUPPORTED).split(b"\r\n\r\n", 1)[1]
    assert b"This server does not support HTTP/1.0." in body


def test_integer_code_accepted():
    assert error_response(3) == error_response(HttpError.BAD_REQUEST)


def test_zero_is_not_an_error():
    with pytest.raises(ValueError):
        error_response(0)