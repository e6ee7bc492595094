"""JSON request body decoding.

Decoding failures are raised as ``Error`` values carrying a message that
can be shown to the client, so handlers can hand them straight to
``JSONResponder.error``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Protocol

from pydantic import BaseModel, TypeAdapter, ValidationError
from starlette.requests import Request

from ..config import DecoderSettings
from ..errors import (
    INVALID_INPUT,
    Error,
    Kind,
    codes,
    is_json_content,
    new_error,
    with_err,
    with_op,
    with_text,
    with_textf,
    with_user_msg,
)

UNSUPPORTED_MEDIA_TYPE = Kind(codes.UNSUPPORTED_MEDIA_TYPE, 415)
REQUEST_ENTITY_TOO_LARGE = Kind(codes.REQUEST_ENTITY_TOO_LARGE, 413)

Validator = Callable[[Any], None]


class Decoder(Protocol):
    """Decodes an HTTP request, optionally into ``model``."""

    async def decode(self, request: Request, model: Any = None) -> Any:
        """Return the decoded request body."""


DecoderMiddleware = Callable[[Decoder], Decoder]


@dataclass(frozen=True)
class JSONDecoder:
    """Decode JSON request bodies.

    Attributes:
        skip_check_content_type: Skip checking that the Content-Type header
            denotes JSON.
        use_decimal: Parse JSON numbers with a fraction as ``Decimal``
            instead of ``float``.
        disallow_unknown_fields: Reject object keys that do not match a
            field of the target model.
        max_body_bytes: Largest body accepted, in bytes.
    """

    skip_check_content_type: bool = False
    use_decimal: bool = False
    disallow_unknown_fields: bool = False
    max_body_bytes: int = 1_048_576

    @classmethod
    def from_settings(cls, settings: DecoderSettings) -> JSONDecoder:
        """Build a decoder from ``http.decoder`` settings."""
        return cls(
            skip_check_content_type=settings.skip_check_content_type,
            use_decimal=settings.use_decimal,
            disallow_unknown_fields=settings.disallow_unknown_fields,
            max_body_bytes=settings.max_body_bytes,
        )

    async def decode(self, request: Request, model: Any = None) -> Any:
        """Decode the request body, validating it into ``model`` if given.

        The body must hold exactly one JSON document.
        """
        op = "JSONDecoder.decode"

        if not self.skip_check_content_type:
            content_type = request.headers.get("content-type", "")
            if not is_json_content(content_type):
                raise new_error(
                    with_op(op),
                    with_err(
                        new_error(
                            UNSUPPORTED_MEDIA_TYPE,
                            with_textf("Content-Type header '%s' is not application/json", content_type),
                        )
                    ),
                )

        body = await self._read_body(request, op)
        value = self._parse(body, op)
        if model is None:
            return value
        return self._validate(value, model, op)

    async def _read_body(self, request: Request, op: str) -> bytes:
        chunks: list[bytes] = []
        size = 0
        async for chunk in request.stream():
            size += len(chunk)
            if size > self.max_body_bytes:
                raise new_error(
                    with_op(op),
                    REQUEST_ENTITY_TOO_LARGE,
                    with_textf("request body exceeds %d bytes", self.max_body_bytes),
                )
            chunks.append(chunk)
        return b"".join(chunks)

    def _parse(self, body: bytes, op: str) -> Any:
        try:
            doc = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _invalid(op, "Request body contains badly-formed JSON", exc) from exc

        if not doc.strip():
            raise new_error(
                with_op(op),
                INVALID_INPUT,
                with_text("empty request body"),
                with_user_msg("Request body must not be empty"),
            )

        try:
            return json.loads(
                doc,
                parse_float=Decimal if self.use_decimal else None,
                parse_constant=_reject_constant,
            )
        except json.JSONDecodeError as exc:
            raise _invalid(op, _syntax_message(exc), exc) from exc
        except (ValueError, RecursionError) as exc:
            # Non-standard constants, or nesting too deep to parse.
            raise _invalid(op, "Request body contains badly-formed JSON", exc) from exc

    def _validate(self, value: Any, model: Any, op: str) -> Any:
        if self.disallow_unknown_fields and isinstance(value, dict):
            unknown = _first_unknown_field(value, model)
            if unknown is not None:
                raise new_error(
                    with_op(op),
                    INVALID_INPUT,
                    with_textf("unknown field %r", unknown),
                    with_user_msg(f"Request body contains unknown field '{unknown}'"),
                )

        try:
            return TypeAdapter(model).validate_python(value)
        except ValidationError as exc:
            raise _invalid(op, _validation_message(exc), exc) from exc


def validating_decoder_middleware(validator: Validator) -> DecoderMiddleware:
    """Return a middleware running ``validator`` on each decoded value.

        decoder = validating_decoder_middleware(check_booking)(JSONDecoder())
    """

    def middleware(decoder: Decoder) -> Decoder:
        return _ValidatingDecoder(decoder=decoder, validator=validator)

    return middleware


@dataclass(frozen=True)
class _ValidatingDecoder:
    decoder: Decoder
    validator: Validator

    async def decode(self, request: Request, model: Any = None) -> Any:
        op = "validating_decoder"

        value = await self.decoder.decode(request, model)
        try:
            self.validator(value)
        except Error as exc:
            raise new_error(with_op(op), with_err(exc))
        except ValueError as exc:
            raise new_error(
                with_op(op),
                INVALID_INPUT,
                with_err(exc),
            ) from exc
        return value


def _invalid(op: str, msg: str, exc: BaseException) -> Error:
    return new_error(with_op(op), INVALID_INPUT, with_user_msg(msg), with_err(exc))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name!r}")


def _syntax_message(exc: json.JSONDecodeError) -> str:
    if exc.msg.startswith("Extra data"):
        return "Request body must only contain a single JSON object"
    if exc.pos >= len(exc.doc.rstrip()) or exc.msg.startswith("Unterminated string"):
        return "Request body contains badly-formed JSON"
    return f"Request body contains badly-formed JSON (at position {exc.pos})"


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    if first["type"] == "missing":
        return f"Request body is missing the '{field}' field"
    if first["type"] == "extra_forbidden":
        return f"Request body contains unknown field '{field}'"
    if not field:
        return "Request body contains an invalid value"
    return f"Request body contains an invalid value for the '{field}' field"


def _first_unknown_field(value: dict[str, Any], model: Any) -> str | None:
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        return None

    known: set[str] = set()
    for name, info in model.model_fields.items():
        known.add(name)
        if info.alias:
            known.add(info.alias)
        if isinstance(info.validation_alias, str):
            known.add(info.validation_alias)

    for key in value:
        if key not in known:
            return key
    return None
