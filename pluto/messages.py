"""Request, response and body types exchanged between the server and handlers."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any, Callable, NamedTuple, TypeVar

T = TypeVar("T")

_PARSE_ERRORS = (ValueError, TypeError, KeyError)


class HeaderField(NamedTuple):
    """A single request header as a (name, value) pair."""

    name: str
    value: str


@dataclass
class RawHttpRequest:
    """A request exactly as it arrives from the client."""

    method: str
    url: str
    headers: list[HeaderField] = field(default_factory=list)
    body: bytes = b""


def _json_to_text(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _bad_request(message: str) -> HttpError:
    return HttpError(
        HttpResponse(400, {}, HttpBody.json({"statusCode": 400, "message": message}))
    )


@dataclass
class HttpRequest:
    """A request as seen by a handler, with route parameters and the matched path."""

    method: str
    url: str
    headers: list[HeaderField] = field(default_factory=list)
    body: bytes = b""
    params: dict[str, str] = field(default_factory=dict)
    path: str = ""

    @classmethod
    def from_raw(cls, raw: RawHttpRequest) -> HttpRequest:
        """Build a handler request from a raw one, with no params and an empty path."""
        return cls(
            method=raw.method,
            url=raw.url,
            headers=list(raw.headers),
            body=bytes(raw.body),
        )

    def body_into_struct(self, factory: Callable[[Any], T] | None = None) -> T:
        """Parse the body as JSON and pass it to ``factory``.

        Raises HttpError with a 400 response if parsing or construction fails.
        """
        try:
            data = json.loads(self.body)
            return data if factory is None else factory(data)
        except _PARSE_ERRORS as exc:
            raise _bad_request(str(exc)) from exc

    def params_into_struct(self, factory: Callable[[dict[str, str]], T] | None = None) -> T:
        """Pass a copy of the route parameters to ``factory``.

        Raises HttpError with a 400 response if construction fails.
        """
        params = dict(self.params)
        if factory is None:
            return params  # type: ignore[return-value]
        try:
            return factory(params)
        except _PARSE_ERRORS as exc:
            raise _bad_request(str(exc)) from exc


class BodyKind(enum.Enum):
    """How a response body is held before it is encoded."""

    JSON = "json"
    TEXT = "text"
    RAW = "raw"


@dataclass(frozen=True)
class HttpBody:
    """A response body: a JSON value, a string, or raw bytes."""

    kind: BodyKind
    value: Any

    @classmethod
    def json(cls, value: Any) -> HttpBody:
        """A body holding a JSON-serialisable value."""
        return cls(BodyKind.JSON, value)

    @classmethod
    def text(cls, value: str) -> HttpBody:
        """A body holding text."""
        return cls(BodyKind.TEXT, value)

    @classmethod
    def raw(cls, value: bytes) -> HttpBody:
        """A body holding raw bytes."""
        return cls(BodyKind.RAW, bytes(value))

    def to_bytes(self) -> bytes:
        """Encode the body; JSON is written compactly as UTF-8."""
        if self.kind is BodyKind.JSON:
            return _json_to_text(self.value).encode("utf-8")
        if self.kind is BodyKind.TEXT:
            return self.value.encode("utf-8")
        return bytes(self.value)


def _coerce_body(body: Any) -> HttpBody:
    if isinstance(body, HttpBody):
        return body
    if isinstance(body, str):
        return HttpBody.text(body)
    if isinstance(body, (bytes, bytearray, memoryview)):
        return HttpBody.raw(bytes(body))
    return HttpBody.json(body)


@dataclass
class HttpResponse:
    """A response as produced by a handler."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: HttpBody = field(default_factory=lambda: HttpBody.text(""))

    def __post_init__(self) -> None:
        self.body = _coerce_body(self.body)

    def add_raw_header(self, key: str, value: str) -> None:
        """Set a header, overwriting any existing value."""
        self.headers[key] = value

    def remove_header(self, key: str) -> None:
        """Remove a header if it is present."""
        self.headers.pop(key, None)


@dataclass
class RawHttpResponse:
    """A response ready to be sent back to the client."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    upgrade: bool | None = None

    @classmethod
    def from_response(cls, response: HttpResponse) -> RawHttpResponse:
        """Encode a handler response, defaulting Content-Type and stamping X-Powered-By."""
        headers = dict(response.headers)
        headers.setdefault("Content-Type", "application/json")
        headers["X-Powered-By"] = "Pluto"
        return cls(
            status_code=response.status_code,
            headers=headers,
            body=response.body.to_bytes(),
            upgrade=False,
        )

    def set_upgrade(self, upgrade: bool) -> None:
        """Set whether the request should be upgraded."""
        self.upgrade = upgrade


class HttpError(Exception):
    """An error that carries the HTTP response to send in its place."""

    def __init__(self, response: HttpResponse) -> None:
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


def bad_request_error(error: Any) -> HttpError:
    """Return an error carrying a 400 response that wraps ``error``."""
    return HttpError(
        HttpResponse(
            400,
            {},
            HttpBody.json({"statusCode": 400, "message": "Bad Request", "error": error}),
        )
    )


def internal_server_error() -> HttpError:
    """Return an error carrying the predefined 500 response."""
    return HttpError(
        HttpResponse(
            500,
            {},
            HttpBody.json({"statusCode": 500, "message": "Internal server error"}),
        )
    )


def not_found_error(message: str) -> HttpError:
    """Return an error carrying a 404 response with ``message``."""
    return HttpError(
        HttpResponse(
            404,
            {},
            HttpBody.json({"statusCode": 404, "message": message, "error": "Not Found"}),
        )
    )