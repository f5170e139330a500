"""Cross-origin resource sharing policy applied to responses."""

from __future__ import annotations

from collections.abc import Iterable

from pluto.all_or_some import AllOrSome
from pluto.messages import HttpResponse
from pluto.method import Method


class Cors:
    """A CORS policy, configured fluently and merged into responses.

    Without an allowed origin the policy adds nothing.
    """

    __slots__ = (
        "_allow_origin",
        "_allow_methods",
        "_allow_headers",
        "_allow_credentials",
        "_expose_headers",
        "_max_age",
        "_vary_origin",
    )

    def __init__(self) -> None:
        self._allow_origin: AllOrSome[str] | None = None
        self._allow_methods: list[Method] = []
        self._allow_headers: list[str] = []
        self._allow_credentials = False
        self._expose_headers: list[str] = []
        self._max_age: int | None = None
        self._vary_origin = False

    def allow_origin(self, origin: str) -> Cors:
        """Allow a single origin."""
        self._allow_origin = AllOrSome.some(origin)
        return self

    def any(self) -> Cors:
        """Allow any origin ("*")."""
        self._allow_origin = AllOrSome.all()
        return self

    def credentials(self, value: bool) -> Cors:
        """Set whether credentials are allowed."""
        self._allow_credentials = value
        return self

    def exposed_headers(self, headers: Iterable[str]) -> Cors:
        """Set the headers exposed to the client."""
        self._expose_headers = list(headers)
        return self

    def allow_headers(self, headers: Iterable[str]) -> Cors:
        """Set the request headers that are allowed."""
        self._allow_headers = list(headers)
        return self

    def max_age(self, value: int | None) -> Cors:
        """Set how long, in seconds, a preflight result may be cached."""
        self._max_age = value
        return self

    def allow_methods(self, methods: Iterable[Method | str]) -> Cors:
        """Set the methods that are allowed."""
        self._allow_methods = [
            m if isinstance(m, Method) else Method.parse(m) for m in methods
        ]
        return self

    def merge(self, response: HttpResponse) -> None:
        """Write the CORS headers into ``response``, overwriting existing ones."""
        if self._allow_origin is None:
            return
        origin = "*" if self._allow_origin.is_all() else self._allow_origin.get()
        response.add_raw_header("Access-Control-Allow-Origin", str(origin))

        if self._allow_credentials:
            response.add_raw_header("Access-Control-Allow-Credentials", "true")
        if self._expose_headers:
            response.add_raw_header(
                "Access-Control-Expose-Headers", ", ".join(self._expose_headers)
            )
        if self._allow_headers:
            response.add_raw_header(
                "Access-Control-Allow-Headers", ", ".join(self._allow_headers)
            )
        if self._allow_methods:
            response.add_raw_header(
                "Access-Control-Allow-Methods",
                ", ".join(m.as_str() for m in self._allow_methods),
            )
        if self._max_age is not None:
            response.add_raw_header("Access-Control-Max-Age", str(self._max_age))
        if self._vary_origin:
            response.add_raw_header("Vary", "Origin")

    def _state(self) -> tuple:
        return (
            self._allow_origin,
            tuple(self._allow_methods),
            tuple(self._allow_headers),
            self._allow_credentials,
            tuple(self._expose_headers),
            self._max_age,
            self._vary_origin,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cors):
            return NotImplemented
        return self._state() == other._state()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Cors(allow_origin={self._allow_origin!r}, "
            f"allow_methods={self._allow_methods!r}, "
            f"allow_headers={self._allow_headers!r}, "
            f"allow_credentials={self._allow_credentials!r}, "
            f"expose_headers={self._expose_headers!r}, "
            f"max_age={self._max_age!r})"
        )