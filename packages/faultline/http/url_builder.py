"""Fluent construction of URLs relative to a base URL.

    source = new_url_builder_source("https://api.example.com/v1")
    url = (
        source.new_url_builder()
        .path("/users/{user_id}/posts")
        .path_param("user_id", user_id)
        .query_param_int("limit", 20)
        .url()
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping
from urllib.parse import SplitResult, parse_qs, quote, urlencode, urlsplit, urlunsplit

from ..errors import INVALID_INPUT, new_error, with_err, with_op, with_textf

# Characters left unescaped in a single path segment, beyond the unreserved set.
_PATH_SEGMENT_SAFE = "$&+:=@"


@dataclass(frozen=True)
class URLBuilderSource:
    """Base URL from which any number of ``URLBuilder`` values are created."""

    base: SplitResult

    def new_url_builder(self) -> URLBuilder:
        """Return a builder starting from the base URL."""
        return URLBuilder(self.base)


def new_url_builder_source(base_url: str) -> URLBuilderSource:
    """Parse ``base_url`` into a builder source.

    A URL without a scheme is assumed to use ``http``. Invalid URLs, and
    URLs without a host, raise an ``INVALID_INPUT`` error.
    """
    op = "new_url_builder_source"

    if "://" not in base_url:
        base_url = f"http://{base_url}"

    try:
        parsed = urlsplit(base_url)
        host = parsed.hostname
        # Accessing the port validates it.
        parsed.port
    except ValueError as exc:
        raise new_error(with_op(op), INVALID_INPUT, with_err(exc)) from exc

    if not host:
        raise new_error(with_op(op), INVALID_INPUT, with_textf("missing host in %r", base_url))

    return URLBuilderSource(parsed)


class URLBuilder:
    """Build a URL by joining a path, path params and query params onto a base.

    Every method except ``url`` returns the builder for chaining.
    """

    def __init__(self, base: SplitResult) -> None:
        self._base = base
        self._path = ""
        self._path_params: dict[str, str] = {}
        self._query = parse_qs(base.query, keep_blank_values=True)

    def path(self, path: str) -> URLBuilder:
        """Set the path, joined onto the base path.

        The path may contain ``{name}`` placeholders for path params.
        """
        self._path = path
        return self

    def path_param(self, name: str, value: str) -> URLBuilder:
        """Replace each ``{name}`` in the path with the escaped ``value``."""
        self._path_params[name] = quote(value, safe=_PATH_SEGMENT_SAFE)
        return self

    def path_param_int(self, name: str, value: int) -> URLBuilder:
        return self.path_param(name, str(value))

    def path_params(self, params: Mapping[str, str]) -> URLBuilder:
        for name, value in params.items():
            self.path_param(name, value)
        return self

    def query_param(self, key: str, *values: str) -> URLBuilder:
        """Set the values for ``key``, replacing any from the base URL."""
        self._query[key] = list(values)
        return self

    def query_param_int(self, key: str, *values: int) -> URLBuilder:
        return self.query_param(key, *(str(value) for value in values))

    def query_param_bool(self, key: str, value: bool) -> URLBuilder:
        return self.query_param(key, "true" if value else "false")

    def query_param_float(self, key: str, *values: float) -> URLBuilder:
        return self.query_param(key, *(_format_float(value) for value in values))

    def query_params(self, params: Mapping[str, Iterable[str]]) -> URLBuilder:
        for key, values in params.items():
            self.query_param(key, *values)
        return self

    def url(self) -> str:
        """Return the URL built so far."""
        path = self._path
        for name, value in self._path_params.items():
            path = path.replace("{" + name + "}", value)

        base_path = self._base.path.rstrip("/")
        if path:
            path = f"{base_path}/{path.lstrip('/')}"
        else:
            path = base_path

        query = urlencode(sorted(self._query.items()), doseq=True)
        return urlunsplit((self._base.scheme, self._base.netloc, path, query, self._base.fragment))


def _format_float(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
