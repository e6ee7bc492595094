"""Unit tests for error construction options."""

from __future__ import annotations

import httpx
import pytest

from packages.faultline.errors import (
    INVALID_INPUT,
    NOT_FOUND,
    UNAVAILABLE,
    UNKNOWN,
    Error,
    Fields,
    Option,
    OptionFunc,
    is_json_content,
    new_error,
    options,
    with_data,
    with_err,
    with_op,
    with_resp,
    with_text,
    with_textf,
    with_user_msg,
)


def test_options_applies_bundled_options_in_order() -> None:
    """options() should compose several options with last-write-wins."""
    err = new_error(options(with_op("First"), NOT_FOUND), with_op("Second"))

    assert err.op == "Second"
    assert err.kind == NOT_FOUND


def test_option_func_adapts_callable() -> None:
    """OptionFunc should turn a plain callable into an option."""

    def set_text(target: Error) -> None:
        target.text = "from a callable"

    err = new_error(OptionFunc(set_text))

    assert err.text == "from a callable"
    assert isinstance(OptionFunc(set_text), Option)
    assert isinstance(NOT_FOUND, Option)


def test_with_textf_formats_arguments() -> None:
    """with_textf should use %-style formatting, leaving bare text alone."""
    assert new_error(with_textf("boom %d of %s", 5, "ten")).text == "boom 5 of ten"
    assert new_error(with_textf("100%")).text == "100%"


def test_with_err_copies_structured_cause() -> None:
    """with_err should attach a copy of an Error, never the value itself."""
    cause = new_error(with_op("Select"), NOT_FOUND)
    err = new_error(with_op("Get"), with_err(cause))

    assert err.err is not cause
    assert isinstance(err.err, Error)
    assert err.err.op == "Select"


def test_with_err_keeps_foreign_cause() -> None:
    """with_err should store foreign exceptions as-is."""
    cause = KeyError("user")
    err = new_error(with_err(cause))

    assert err.err is cause


def test_fields_applies_only_non_default_values() -> None:
    """Fields should leave target fields alone when its own are default."""
    err = new_error(
        with_op("Get"),
        with_text("kept"),
        Fields(kind=INVALID_INPUT, user_msg="Bad request", data={"field": "name"}),
    )

    assert err.op == "Get"
    assert err.text == "kept"
    assert err.kind == INVALID_INPUT
    assert err.user_msg == "Bad request"
    assert err.data == {"field": "name"}


def test_fields_copies_structured_cause() -> None:
    """Fields should attach causes with the same copy rule as with_err."""
    cause = new_error(NOT_FOUND, with_text("no rows"))
    err = new_error(Fields(op="Get", err=cause))

    assert err.err is not cause
    assert cause.kind == NOT_FOUND
    assert str(err) == "Get: not found: no rows"


def test_with_data_accepts_any_payload() -> None:
    """with_data should store arbitrary payloads; None means absent."""
    assert new_error(with_data([1, 2])).data == [1, 2]
    assert new_error(with_data(None)).is_zero()


def _response(
    status: int,
    *,
    content: bytes = b"",
    content_type: str | None = None,
    url: str = "https://example.test/en-US/404?q=1",
) -> httpx.Response:
    headers = {"content-type": content_type} if content_type else {}
    return httpx.Response(
        status,
        content=content,
        headers=headers,
        request=httpx.Request("GET", url),
    )


def test_with_resp_describes_exchange() -> None:
    """with_resp should set kind, text and raw body data from a response."""
    err = new_error(with_resp(_response(404, content=b"page not found", content_type="text/plain")))

    assert err.kind == NOT_FOUND
    assert err.text == "[GET] /en-US/404?q=1: 404 Not Found"
    assert err.data == "page not found"


def test_with_resp_decodes_json_body() -> None:
    """with_resp should decode JSON bodies when the content type is JSON."""
    err = new_error(
        with_resp(
            _response(
                503,
                content=b'{"reason": "maintenance"}',
                content_type="application/problem+json; charset=utf-8",
            )
        )
    )

    assert err.kind == UNAVAILABLE
    assert err.data == {"reason": "maintenance"}


def test_with_resp_keeps_invalid_json_as_text() -> None:
    """A body labelled as JSON but not parseable should be kept as text."""
    err = new_error(with_resp(_response(500, content=b"{oops", content_type="application/json")))

    assert err.data == "{oops"


def test_with_resp_maps_unknown_status_to_unknown_kind() -> None:
    """Statuses without a predeclared kind should leave the kind unknown."""
    err = new_error(with_resp(_response(418)))

    assert err.kind == UNKNOWN
    assert err.status_code() == 0


@pytest.mark.parametrize(
    ("content_type", "want"),
    [
        ("application/json", True),
        ("application/json; charset=utf-8", True),
        ("APPLICATION/JSON", True),
        ("text/json", True),
        ("application/vnd.api+json", True),
        ("application/json-patch", True),
        ("text/plain", False),
        ("application/xml", False),
        ("", False),
    ],
)
def test_is_json_content(content_type: str, want: bool) -> None:
    """is_json_content should recognise JSON media types."""
    assert is_json_content(content_type) is want
