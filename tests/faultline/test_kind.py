"""Unit tests for error kinds and kind lookup."""

from __future__ import annotations

import pytest

from packages.faultline.errors import (
    CANCELED,
    CONFLICT,
    DEADLINE_EXCEEDED,
    FAILED_PRECONDITION,
    INTERNAL,
    INVALID_INPUT,
    NOT_FOUND,
    PERMISSION_DENIED,
    RESOURCE_EXHAUSTED,
    UNAUTHENTICATED,
    UNAVAILABLE,
    UNIMPLEMENTED,
    UNKNOWN,
    Error,
    Kind,
    kind_from_code,
    kind_from_status,
    new_error,
    what_kind,
    with_err,
    with_op,
)


class KindedError(Exception):
    """Foreign error reporting its own kind."""

    def __init__(self, kind: Kind) -> None:
        super().__init__("kinded")
        self.kind = kind

    def get_kind(self) -> Kind:
        return self.kind


@pytest.mark.parametrize(
    ("kind", "want"),
    [
        (UNKNOWN, "unknown error"),
        (INTERNAL, "internal error"),
        (INVALID_INPUT, "invalid input"),
        (NOT_FOUND, "not found"),
        (DEADLINE_EXCEEDED, "deadline exceeded"),
        (Kind("QUOTA_EXCEEDED", 429), "quota exceeded"),
    ],
)
def test_kind_str(kind: Kind, want: str) -> None:
    """Kinds should render their code in lowercase words."""
    assert str(kind) == want


def test_kind_equality_is_structural() -> None:
    """Locally declared kinds should equal predeclared ones with the same values."""
    assert Kind("NOT_FOUND", 404) == NOT_FOUND
    assert Kind() == UNKNOWN
    assert Kind("NOT_FOUND", 410) != NOT_FOUND


@pytest.mark.parametrize(
    ("status", "want"),
    [
        (400, INVALID_INPUT),
        (422, INVALID_INPUT),
        (401, UNAUTHENTICATED),
        (403, PERMISSION_DENIED),
        (404, NOT_FOUND),
        (409, CONFLICT),
        (412, FAILED_PRECONDITION),
        (429, RESOURCE_EXHAUSTED),
        (500, INTERNAL),
        (501, UNIMPLEMENTED),
        (503, UNAVAILABLE),
        (200, UNKNOWN),
        (418, UNKNOWN),
        (504, UNKNOWN),
    ],
)
def test_kind_from_status(status: int, want: Kind) -> None:
    """kind_from_status should map HTTP statuses to predeclared kinds."""
    assert kind_from_status(status) == want


@pytest.mark.parametrize(
    "kind",
    [
        INVALID_INPUT,
        UNAUTHENTICATED,
        PERMISSION_DENIED,
        NOT_FOUND,
        CONFLICT,
        FAILED_PRECONDITION,
        RESOURCE_EXHAUSTED,
        INTERNAL,
        CANCELED,
        UNIMPLEMENTED,
        UNAVAILABLE,
        DEADLINE_EXCEEDED,
    ],
)
def test_kind_from_code_returns_predeclared_kind(kind: Kind) -> None:
    """kind_from_code should resolve every predeclared code."""
    assert kind_from_code(kind.code) == kind


def test_kind_from_code_unknown() -> None:
    """Unrecognised codes should resolve to UNKNOWN."""
    assert kind_from_code("QUOTA_EXCEEDED") == UNKNOWN
    assert kind_from_code("") == UNKNOWN


@pytest.mark.parametrize(
    ("err", "want"),
    [
        (None, UNKNOWN),
        (ValueError("plain"), UNKNOWN),
        (Error(), UNKNOWN),
        (new_error(NOT_FOUND), NOT_FOUND),
        (new_error(with_op("Get"), with_err(new_error(with_op("Select"), NOT_FOUND))), NOT_FOUND),
        (new_error(INTERNAL, with_err(new_error(with_op("Select"), NOT_FOUND))), INTERNAL),
        (new_error(with_op("Get"), with_err(KindedError(CONFLICT))), CONFLICT),
    ],
)
def test_what_kind_walks_chain(err: BaseException | None, want: Kind) -> None:
    """what_kind should return the first known kind along the chain."""
    assert what_kind(err) == want


def test_what_kind_follows_exception_cause() -> None:
    """Foreign errors should be unwrapped through __cause__."""
    try:
        try:
            raise new_error(PERMISSION_DENIED)
        except Error as exc:
            raise RuntimeError("wrapped") from exc
    except RuntimeError as outer:
        assert what_kind(outer) == PERMISSION_DENIED
