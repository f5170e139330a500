"""Serving raw requests through a router, with CORS and upgrade handling."""

from __future__ import annotations

from pluto.cors import Cors
from pluto.messages import (
    HttpBody,
    HttpRequest,
    HttpResponse,
    RawHttpRequest,
    RawHttpResponse,
    internal_server_error,
    not_found_error,
)
from pluto.method import InvalidMethod, Method
from pluto.router import Router

_UPDATE_ENTRY = "http_request_update"


def _get_path(url: str) -> str:
    path = url.split("?", 1)[0]
    if path.endswith("/"):
        path = path[:-1]
    return path


def _internal_error() -> RawHttpResponse:
    return RawHttpResponse.from_response(internal_server_error().response)


class HttpServe:
    """Dispatches raw requests to a router and turns the results into raw responses.

    An instance created for the query entry point (any name other than
    "http_request_update") refuses routes that require an upgrade, answering
    with a 500 response whose upgrade flag is set so the client retries as an
    update call.
    """

    def __init__(self, init_name: str = "http_request") -> None:
        self.router = Router()
        self.cors_policy: Cors | None = None
        self.is_query = init_name != _UPDATE_ENTRY

    @classmethod
    def new_with_router(cls, router: Router, init_name: str) -> HttpServe:
        """Create a server for the entry point ``init_name`` using ``router``."""
        serve = cls(init_name)
        serve.router = router
        return serve

    def set_router(self, router: Router) -> None:
        """Replace the router used to dispatch requests."""
        self.router = router

    def use_cors(self, cors_policy: Cors) -> None:
        """Apply ``cors_policy`` to the responses produced by routes."""
        self.cors_policy = cors_policy

    def _apply_plugins(self, response: HttpResponse) -> None:
        if self.cors_policy is not None:
            self.cors_policy.merge(response)

    async def _answer_options(
        self, request: RawHttpRequest, allow: list[str]
    ) -> RawHttpResponse:
        handler = self.router.options_handler
        if handler is not None:
            response = await handler.handle(HttpRequest.from_raw(request))
            raw = RawHttpResponse.from_response(response)
            raw.set_upgrade(handler.upgrade)
            return raw

        response = HttpResponse(204, {}, HttpBody.text(""))
        self._apply_plugins(response)
        response.headers.setdefault("Access-Control-Allow-Methods", ",".join(allow))
        return RawHttpResponse.from_response(response)

    async def serve(self, request: RawHttpRequest) -> RawHttpResponse:
        """Route ``request`` and return the response to send back.

        An invalid method gives a 500 response, an unmatched route a 404
        response; OPTIONS requests for known paths are answered automatically
        unless the router has that switched off.
        """
        try:
            method = Method.parse(request.method)
        except InvalidMethod:
            return _internal_error()

        path = _get_path(request.url)
        try:
            found = self.router.lookup(method, path)
        except LookupError as exc:
            if request.method == Method.OPTIONS.as_str() and self.router.handle_options:
                allow = self.router.allowed(path)
                if allow:
                    return await self._answer_options(request, allow)
            message = exc.args[0] if exc.args else str(exc)
            return RawHttpResponse.from_response(not_found_error(message).response)

        container = found.value
        upgrade = container.upgrade
        if self.is_query and upgrade:
            raw = _internal_error()
            raw.set_upgrade(upgrade)
            return raw

        handler_request = HttpRequest.from_raw(request)
        handler_request.path = path
        handler_request.params = dict(found.params)
        response = await container.handle(handler_request)
        self._apply_plugins(response)
        raw = RawHttpResponse.from_response(response)
        raw.set_upgrade(upgrade)
        return raw