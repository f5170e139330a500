"""Routing of requests to handlers by HTTP method and path."""

from __future__ import annotations

import copy
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Union

from pluto.messages import HttpError, HttpRequest, HttpResponse
from pluto.method import Method
from pluto.path_tree import PathTree, RouteMatch

Handler = Callable[[HttpRequest], Union[Awaitable[HttpResponse], HttpResponse]]


@dataclass(frozen=True)
class HandlerContainer:
    """A handler together with whether it requires an upgraded (update) call.

    A handler takes an HttpRequest and returns an HttpResponse, either directly
    or as an awaitable. It may raise HttpError to answer with the response the
    error carries.
    """

    upgrade: bool
    handler: Handler

    async def handle(self, request: HttpRequest) -> HttpResponse:
        """Run the handler and return its response, or the one an HttpError carries."""
        try:
            result = self.handler(request)
            if inspect.isawaitable(result):
                result = await result
        except HttpError as exc:
            return exc.response
        return result

    def __deepcopy__(self, memo: dict) -> HandlerContainer:
        return self


def _as_method(method: Method | str) -> Method:
    return method if isinstance(method, Method) else Method.parse(method)


class Router:
    """Registers handlers for HTTP methods and paths and finds them again.

    Paths are joined to the global prefix and stored without a trailing slash.
    OPTIONS requests are answered automatically unless switched off with
    ``set_handle_options(False)``; ``global_options`` installs a handler for them.
    """

    def __init__(self) -> None:
        self.prefix = ""
        self.trees: dict[Method, PathTree[HandlerContainer]] = {}
        self.handle_options = True
        self.options_handler: HandlerContainer | None = None

    def set_global_prefix(self, prefix: str) -> Router:
        """Set a prefix for every path registered afterwards."""
        self.prefix = prefix
        return self

    def handle(
        self, path: str, upgrade: bool, method: Method | str, handler: Handler
    ) -> Router:
        """Register ``handler`` for ``method`` requests at ``path``.

        Raises ValueError if ``path`` does not begin with '/' or is malformed,
        and RouteConflict if the route clashes with one already registered.
        """
        if not path.startswith("/"):
            raise ValueError(f"expect path beginning with '/', found: '{path}'")
        global_path = self.prefix + path
        if global_path.endswith("/"):
            global_path = global_path[:-1]
        tree = self.trees.setdefault(_as_method(method), PathTree())
        tree.insert(global_path, HandlerContainer(upgrade, handler))
        return self

    def lookup(self, method: Method | str, path: str) -> RouteMatch[HandlerContainer]:
        """Find the handler for ``method`` and ``path``.

        Raises LookupError with a message such as "Cannot GET /hello" if none matches.
        """
        method = _as_method(method)
        tree = self.trees.get(method)
        if tree is not None:
            found = tree.at(path)
            if found is not None:
                return found
        raise LookupError(f"Cannot {method} {path or '/'}")

    def get(self, path: str, upgrade: bool, handler: Handler) -> Router:
        """Register a handler for GET requests."""
        return self.handle(path, upgrade, Method.GET, handler)

    def head(self, path: str, upgrade: bool, handler: Handler) -> Router:
        """Register a handler for HEAD requests."""
        return self.handle(path, upgrade, Method.HEAD, handler)

    def options(self, path: str, upgrade: bool, handler: Handler) -> Router:
        """Register a handler for OPTIONS requests."""
        return self.handle(path, upgrade, Method.OPTIONS, handler)

    def post(self, path: str, upgrade: bool, handler: Handler) -> Router:
        """Register a handler for POST requests."""
        return self.handle(path, upgrade, Method.POST, handler)

    def put(self, path: str, upgrade: bool, handler: Handler) -> Router:
        """Register a handler for PUT requests."""
        return self.handle(path, upgrade, Method.PUT, handler)

    def patch(self, path: str, upgrade: bool, handler: Handler) -> Router:
        """Register a handler for PATCH requests."""
        return self.handle(path, upgrade, Method.PATCH, handler)

    def delete(self, path: str, upgrade: bool, handler: Handler) -> Router:
        """Register a handler for DELETE requests."""
        return self.handle(path, upgrade, Method.DELETE, handler)

    def set_handle_options(self, handle: bool) -> None:
        """Switch automatic answering of OPTIONS requests on or off."""
        self.handle_options = handle

    def global_options(self, upgrade: bool, handler: Handler) -> Router:
        """Install the handler used for OPTIONS requests that match no route."""
        self.options_handler = HandlerContainer(upgrade, handler)
        return self

    def allowed(self, path: str) -> list[str]:
        """Return the methods allowed at ``path``, with OPTIONS added if any are.

        The path "*" lists every method that has routes.
        """
        if path == "*":
            allowed = [m.as_str() for m in self.trees if m != Method.OPTIONS]
        else:
            allowed = [
                method.as_str()
                for method, tree in self.trees.items()
                if method != Method.OPTIONS and tree.at(path) is not None
            ]
        if allowed:
            allowed.append(Method.OPTIONS.as_str())
        return allowed

    def copy(self) -> Router:
        """Return an independent copy sharing the registered handlers."""
        clone = Router()
        clone.prefix = self.prefix
        clone.trees = copy.deepcopy(self.trees)
        clone.handle_options = self.handle_options
        clone.options_handler = self.options_handler
        return clone

    __copy__ = copy