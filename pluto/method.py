"""HTTP request methods."""

from __future__ import annotations

import string
from typing import ClassVar

# Characters a method token may hold.
_TOKEN_CHARS = frozenset("!*+-.^_`|~" + string.digits + string.ascii_letters)

_SAFE = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})
_IDEMPOTENT = _SAFE | {"PUT", "DELETE"}


class InvalidMethod(ValueError):
    """Raised when text or bytes do not form a valid HTTP method."""

    def __init__(self, message: str = "invalid HTTP method") -> None:
        super().__init__(message)


class Method:
    """An HTTP request method (verb).

    Standard methods are available as class attributes such as ``Method.GET``;
    any other valid token is accepted as an extension method. Methods compare
    equal to their string form and are case-sensitive.
    """

    __slots__ = ("_name",)

    GET: ClassVar[Method]
    POST: ClassVar[Method]
    PUT: ClassVar[Method]
    DELETE: ClassVar[Method]
    HEAD: ClassVar[Method]
    OPTIONS: ClassVar[Method]
    CONNECT: ClassVar[Method]
    PATCH: ClassVar[Method]
    TRACE: ClassVar[Method]

    def __init__(self, name: str) -> None:
        if not name or not all(char in _TOKEN_CHARS for char in name):
            raise InvalidMethod()
        self._name = name

    @classmethod
    def from_bytes(cls, src: bytes) -> Method:
        """Build a method from raw bytes, raising InvalidMethod if they are not a token."""
        try:
            text = bytes(src).decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidMethod() from exc
        return cls(text)

    @classmethod
    def parse(cls, text: str) -> Method:
        """Build a method from text, raising InvalidMethod if it is not a token."""
        return cls(text)

    def is_safe(self) -> bool:
        """Whether the method is essentially read-only."""
        return self._name in _SAFE

    def is_idempotent(self) -> bool:
        """Whether repeating the request has the same effect as doing it once."""
        return self._name in _IDEMPOTENT

    def as_str(self) -> str:
        """Return the method name."""
        return self._name

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Method({self._name!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Method):
            return self._name == other._name
        if isinstance(other, str):
            return self._name == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._name)


Method.GET = Method("GET")
Method.POST = Method("POST")
Method.PUT = Method("PUT")
Method.DELETE = Method("DELETE")
Method.HEAD = Method("HEAD")
Method.OPTIONS = Method("OPTIONS")
Method.CONNECT = Method("CONNECT")
Method.PATCH = Method("PATCH")
Method.TRACE = Method("TRACE")