"""Unit tests for template matching and diffing."""

from __future__ import annotations

import pytest

from packages.faultline.errors import (
    INTERNAL,
    NOT_FOUND,
    PERMISSION_DENIED,
    Error,
    diff,
    match,
    new_error,
    with_data,
    with_err,
    with_op,
    with_text,
    with_user_msg,
)


class NoRowsError(Exception):
    """Foreign error standing in for a database driver failure."""


@pytest.mark.parametrize(
    ("template", "err", "want"),
    [
        # Type mismatch.
        (ValueError("a"), new_error(with_op("Get")), False),
        (new_error(with_op("Get")), ValueError("a"), False),
        (None, None, False),
        # The template only has authority over the fields it sets.
        (Error(), new_error(with_op("Get"), NOT_FOUND), True),
        (new_error(with_op("Get")), new_error(with_op("Get"), NOT_FOUND), True),
        (new_error(with_op("Get"), NOT_FOUND), new_error(with_op("Get")), False),
        (new_error(with_op("Get")), new_error(with_op("Put")), False),
        (new_error(with_text("boom")), new_error(with_text("boom")), True),
        (new_error(with_text("boom")), new_error(with_text("bust")), False),
        (new_error(with_user_msg("Hi")), new_error(with_user_msg("Hi")), True),
        (new_error(with_user_msg("Hi")), new_error(with_user_msg("Bye")), False),
        (new_error(with_data({"id": [1, 2]})), new_error(with_data({"id": [1, 2]})), True),
        (new_error(with_data({"id": [1, 2]})), new_error(with_data({"id": [2, 1]})), False),
        # Causes.
        (
            new_error(with_op("Get")),
            new_error(with_op("Get"), with_err(NoRowsError("no rows"))),
            True,
        ),
        (
            new_error(with_err(NoRowsError("no rows"))),
            new_error(with_op("Get"), with_err(NoRowsError("no rows"))),
            True,
        ),
        (new_error(with_err(NoRowsError("no rows"))), new_error(with_op("Get")), False),
        (
            new_error(with_err(NoRowsError("no rows"))),
            new_error(with_err(NoRowsError("other"))),
            False,
        ),
        (
            new_error(INTERNAL, with_err(new_error(with_op("Select"), NOT_FOUND))),
            new_error(INTERNAL, with_err(new_error(with_op("Select"), NOT_FOUND, with_text("x")))),
            True,
        ),
        (
            new_error(INTERNAL, with_err(new_error(with_op("Select"), NOT_FOUND))),
            new_error(INTERNAL, with_err(new_error(with_op("Select"), PERMISSION_DENIED))),
            False,
        ),
    ],
)
def test_match(template: BaseException | None, err: BaseException | None, want: bool) -> None:
    """match should compare only the fields set on the template."""
    assert match(template, err) is want


def test_diff_lists_each_discrepancy() -> None:
    """diff should describe every mismatched field."""
    template = new_error(with_op("Get"), NOT_FOUND, with_text("boom"))
    err = new_error(with_op("Put"), INTERNAL, with_text("boom"))

    problems = diff(template, err)

    assert len(problems) == 2
    assert problems[0].startswith("op: 'Put' != 'Get'")
    assert problems[1].startswith("kind: ")


def test_diff_prefixes_nested_discrepancies() -> None:
    """Discrepancies found in causes should be prefixed with 'err: '."""
    template = new_error(with_op("Get"), INTERNAL, with_err(new_error(with_op("Select"), with_text("boom"))))
    err = new_error(with_op("Get"), INTERNAL, with_err(new_error(with_op("Select"), with_text("bust"))))

    assert diff(template, err) == ["err: text: 'bust' != 'boom'"]


def test_diff_reports_type_mismatch_once() -> None:
    """A non-Error argument should yield exactly one discrepancy."""
    problems = diff(new_error(with_op("Get")), KeyError("user"))

    assert len(problems) == 1
    assert "type mismatch" in problems[0]


def test_diff_reports_missing_foreign_cause() -> None:
    """A foreign template cause should require a cause on the candidate."""
    problems = diff(new_error(with_err(NoRowsError("no rows"))), new_error(with_op("Get")))

    assert problems == ["err: missing, want 'no rows'"]
