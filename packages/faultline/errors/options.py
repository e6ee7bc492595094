"""Options accepted by ``new_error``.

An option is any object with an ``apply(target)`` method that sets one or
more fields on the error being built. ``Kind`` values are options too.
"""

from __future__ import annotations

import dataclasses
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

import httpx

from .error import Error, JSONFunc
from .kind import UNKNOWN, Kind, kind_from_status

# Source: https://github.com/go-resty/resty/blob/v2.2.0/client.go#L64
_JSON_CONTENT = re.compile(r"(?i)(application|text)/(json|.*\+json|json-.*)(;|$)")


@runtime_checkable
class Option(Protocol):
    """Sets one or more fields on an error under construction."""

    def apply(self, target: Error) -> None:
        """Apply this option to ``target``."""


@dataclass(frozen=True)
class OptionFunc:
    """Adapter allowing a plain callable to be used as an ``Option``."""

    fn: Callable[[Error], None]

    def apply(self, target: Error) -> None:
        self.fn(target)


def options(*opts: Option) -> Option:
    """Bundle several options into one, applied in order."""

    def _apply(target: Error) -> None:
        for opt in opts:
            opt.apply(target)

    return OptionFunc(_apply)


def with_op(op: str) -> Option:
    """Set the operation, usually the qualified name of the calling method."""

    def _apply(target: Error) -> None:
        target.op = op

    return OptionFunc(_apply)


def with_user_msg(msg: str) -> Option:
    """Set a message which is safe to show to the end user."""

    def _apply(target: Error) -> None:
        target.user_msg = msg

    return OptionFunc(_apply)


def with_text(text: str) -> Option:
    """Set diagnostic text. It must not be exposed to the end user."""

    def _apply(target: Error) -> None:
        target.text = text

    return OptionFunc(_apply)


def with_textf(fmt: str, *args: Any) -> Option:
    """Set diagnostic text formatted with ``%``-style arguments."""
    return with_text(fmt % args if args else fmt)


def with_err(err: BaseException | None) -> Option:
    """Set the underlying cause.

    A structured cause is copied on attachment so the caller's error is
    never altered by field promotion.
    """

    def _apply(target: Error) -> None:
        target.err = _attach(err)

    return OptionFunc(_apply)


def with_data(data: Any) -> Option:
    """Set an arbitrary payload associated with the error."""

    def _apply(target: Error) -> None:
        target.data = data

    return OptionFunc(_apply)


def with_to_json(fn: JSONFunc) -> Option:
    """Override the JSON projection of the error."""

    def _apply(target: Error) -> None:
        target.to_json = fn

    return OptionFunc(_apply)


@dataclass(frozen=True)
class Fields:
    """Set several fields at once. Fields left at their default are ignored."""

    op: str = ""
    kind: Kind = UNKNOWN
    text: str = ""
    user_msg: str = ""
    data: Any = None
    err: BaseException | None = None
    to_json: JSONFunc | None = None

    def apply(self, target: Error) -> None:
        if self.op:
            target.op = self.op
        if self.kind != UNKNOWN:
            target.kind = self.kind
        if self.text:
            target.text = self.text
        if self.user_msg:
            target.user_msg = self.user_msg
        if self.data is not None:
            target.data = self.data
        if self.err is not None:
            target.err = _attach(self.err)
        if self.to_json is not None:
            target.to_json = self.to_json


def with_resp(response: httpx.Response) -> Option:
    """Describe a failed HTTP exchange.

    The kind is derived from the response status. The request method, URI
    and response status are set as the text; the request path is kept out
    of the op since it commonly embeds entity IDs. The body is set as the
    data, decoded when the response carries valid JSON.
    """

    def _apply(target: Error) -> None:
        target.kind = kind_from_status(response.status_code)

        request = response.request
        uri = request.url.raw_path.decode("ascii")
        target.text = (
            f"[{request.method}] {uri}: "
            f"{response.status_code} {response.reason_phrase}".rstrip()
        )

        try:
            body = response.read()
        except httpx.StreamError:
            return

        text = body.decode(response.encoding or "utf-8", errors="replace")
        target.data = text
        if is_json_content(response.headers.get("content-type", "")):
            try:
                target.data = json.loads(body)
            except ValueError:
                # Labelled as JSON but not parseable; keep the raw text.
                target.data = text

    return OptionFunc(_apply)


def is_json_content(content_type: str) -> bool:
    """Return whether the content type denotes a JSON document."""
    return _JSON_CONTENT.search(content_type) is not None


def _attach(err: BaseException | None) -> BaseException | None:
    if isinstance(err, Error):
        copy = dataclasses.replace(err)
        copy.__cause__ = err.__cause__ if err.__cause__ is not None else err.err
        return copy.with_traceback(err.__traceback__)
    return err
