"""A segment-based route tree that matches request paths and extracts parameters.

Route syntax:

* ``/users/{id}`` or ``/users/:id`` binds one non-empty path segment to ``id``.
* ``/files/{*rest}`` or ``/files/*rest`` binds the non-empty remainder of the
  path, slashes included, to ``rest``. A catch-all must be the last segment.

When several routes could match, static segments win over parameters and
parameters win over catch-alls. If a preferred branch fails further down, the
next one is tried.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


class RouteConflict(ValueError):
    """Raised when a route cannot be inserted because it clashes with another."""


@dataclass(frozen=True)
class RouteMatch(Generic[T]):
    """The value stored for a matched route and the parameters taken from the path."""

    value: T
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class _Segment:
    kind: str  # "static", "param" or "catchall"
    text: str


def _parse_segment(segment: str, route: str) -> _Segment:
    if segment.startswith("{") and segment.endswith("}") and len(segment) >= 2:
        inner = segment[1:-1]
        if inner.startswith("*"):
            kind, name = "catchall", inner[1:]
        else:
            kind, name = "param", inner
        if not name or any(char in name for char in "{}*/:"):
            raise ValueError(f"invalid parameter name in route '{route}'")
        return _Segment(kind, name)
    if "{" in segment or "}" in segment:
        raise ValueError(f"unbalanced braces in route '{route}'")
    if segment.startswith(":"):
        name = segment[1:]
        if not name:
            raise ValueError(f"empty parameter name in route '{route}'")
        return _Segment("param", name)
    if segment.startswith("*") and len(segment) > 1:
        return _Segment("catchall", segment[1:])
    return _Segment("static", segment)


class _Node:
    __slots__ = (
        "static",
        "param",
        "param_name",
        "catchall_name",
        "catchall_route",
        "catchall_value",
        "route",
        "value",
        "has_value",
    )

    def __init__(self) -> None:
        self.static: dict[str, _Node] = {}
        self.param: _Node | None = None
        self.param_name: str | None = None
        self.catchall_name: str | None = None
        self.catchall_route: str | None = None
        self.catchall_value: object = None
        self.route: str | None = None
        self.value: object = None
        self.has_value = False


class PathTree(Generic[T]):
    """Stores values under route patterns and finds them for concrete paths."""

    def __init__(self) -> None:
        self._root = _Node()

    def insert(self, path: str, value: T) -> None:
        """Store ``value`` under the route ``path``.

        Raises RouteConflict if the route is already taken or names a parameter
        differently from a route registered at the same position, and ValueError
        if the route is malformed.
        """
        segments = [_parse_segment(part, path) for part in path.split("/")]
        names = [seg.text for seg in segments if seg.kind != "static"]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate parameter name in route '{path}'")

        node = self._root
        last = len(segments) - 1
        for position, segment in enumerate(segments):
            if segment.kind == "catchall":
                if position != last:
                    raise ValueError(
                        f"catch-all parameter must be the last segment in route '{path}'"
                    )
                if node.catchall_name is not None:
                    raise RouteConflict(
                        "insertion failed due to conflict with previously "
                        f"registered route: {node.catchall_route}"
                    )
                node.catchall_name = segment.text
                node.catchall_route = path
                node.catchall_value = value
                return
            if segment.kind == "param":
                if node.param is None:
                    node.param = _Node()
                    node.param_name = segment.text
                elif node.param_name != segment.text:
                    raise RouteConflict(
                        f"parameter '{segment.text}' in route '{path}' conflicts "
                        f"with parameter '{node.param_name}' at the same position"
                    )
                node = node.param
            else:
                node = node.static.setdefault(segment.text, _Node())

        if node.has_value:
            raise RouteConflict(
                "insertion failed due to conflict with previously "
                f"registered route: {node.route}"
            )
        node.route = path
        node.value = value
        node.has_value = True

    def at(self, path: str) -> RouteMatch[T] | None:
        """Return the match for ``path``, or None if no route matches it."""
        parts = path.split("/")
        found = self._match(self._root, parts, 0)
        if found is None:
            return None
        value, bindings = found
        return RouteMatch(value, dict(bindings))

    def _match(
        self, node: _Node, parts: list[str], index: int
    ) -> tuple[T, list[tuple[str, str]]] | None:
        if index == len(parts):
            if node.has_value:
                return node.value, []  # type: ignore[return-value]
            return None

        part = parts[index]
        child = node.static.get(part)
        if child is not None:
            found = self._match(child, parts, index + 1)
            if found is not None:
                return found

        if node.param is not None and part:
            found = self._match(node.param, parts, index + 1)
            if found is not None:
                value, bindings = found
                return value, [(node.param_name, part), *bindings]  # type: ignore[list-item]

        if node.catchall_name is not None:
            rest = "/".join(parts[index:])
            if rest:
                return node.catchall_value, [(node.catchall_name, rest)]  # type: ignore[return-value]

        return None