import pytest

from pluto.messages import (
    HttpBody,
    HttpError,
    HttpRequest,
    HttpResponse,
    RawHttpRequest,
    not_found_error,
)
from pluto.method import Method
from pluto.path_tree import RouteConflict
from pluto.router import HandlerContainer, Router

ALL_SORTED = [
    Method.DELETE.as_str(),
    Method.GET.as_str(),
    Method.HEAD.as_str(),
    Method.OPTIONS.as_str(),
    Method.PATCH.as_str(),
    Method.POST.as_str(),
    Method.PUT.as_str(),
]


def _responder(message):
    async def handler(_req):
        return HttpResponse(
            200, {}, HttpBody.json({"statusCode": 200, "message": message})
        )

    return handler


def _register_all(router):
    router.get("/hello", False, _responder("Hello World from GET"))
    router.post("/hello", False, _responder("Hello World from POST"))
    router.put("/hello", False, _responder("Hello World from PUT"))
    router.patch("/hello", False, _responder("Hello World from PATCH"))
    router.delete("/hello", False, _responder("Hello World from DELETE"))
    router.head("/hello", False, _responder("Hello World from HEAD"))
    router.options("/hello", False, _responder("Hello World from OPTIONS"))


def _request(method="GET", url="/"):
    return HttpRequest.from_raw(RawHttpRequest(method=method, url=url))


def test_router():
    router = Router()
    _register_all(router)
    assert sorted(router.allowed("/hello")) == ALL_SORTED


def test_router_prefix():
    router = Router()
    router.set_global_prefix("/api")
    _register_all(router)
    assert sorted(router.allowed("/api/hello")) == ALL_SORTED
    assert router.allowed("/hello") == []


@pytest.mark.asyncio
async def test_lookup_works():
    router = Router()
    router.get(
        "/hello",
        False,
        _responder_plain := (
            lambda _req: HttpResponse(
                200, {}, HttpBody.json({"message": "Hello World from GET"})
            )
        ),
    )
    found = router.lookup(Method.GET, "/hello")
    result = await found.value.handle(
        HttpRequest.from_raw(
            RawHttpRequest(
                method="GET", url="http:://localhost:8080/hello", headers=[], body=b""
            )
        )
    )
    assert result == HttpResponse(
        200, {}, HttpBody.json({"message": "Hello World from GET"})
    )
    assert found.value.handler is _responder_plain


def test_allowed_docs_example():
    router = Router()
    router.get("/hello", False, _responder("get"))
    router.post("/hello", False, _responder("post"))
    assert sorted(router.allowed("/hello")) == ["GET", "OPTIONS", "POST"]


def test_allowed_star_lists_all_methods_but_options():
    router = Router()
    router.get("/a", False, _responder("a"))
    router.post("/b", False, _responder("b"))
    router.options("/c", False, _responder("c"))
    assert sorted(router.allowed("*")) == ["GET", "OPTIONS", "POST"]


def test_allowed_empty_when_nothing_matches():
    router = Router()
    router.options("/hello", False, _responder("o"))
    assert router.allowed("/hello") == []


def test_path_must_start_with_slash():
    router = Router()
    with pytest.raises(ValueError):
        router.get("hello", False, _responder("x"))


def test_duplicate_route_conflicts():
    router = Router()
    router.get("/hello", False, _responder("x"))
    with pytest.raises(RouteConflict):
        router.get("/hello/", False, _responder("y"))


def test_trailing_slash_is_stripped():
    router = Router()
    router.get("/hello/", False, _responder("x"))
    assert router.lookup("GET", "/hello").params == {}


def test_root_route_is_stored_as_empty_path():
    router = Router()
    router.get("/", False, _responder("root"))
    found = router.lookup(Method.GET, "")
    assert found.value.upgrade is False


def test_lookup_extracts_params():
    router = Router()
    router.put("/:value", True, _responder("put"))
    found = router.lookup(Method.PUT, "/abc")
    assert found.params == {"value": "abc"}
    assert found.value.upgrade is True


def test_lookup_not_found_message():
    router = Router()
    router.get("/hello", False, _responder("x"))
    with pytest.raises(LookupError, match="^Cannot GET /nope$"):
        router.lookup(Method.GET, "/nope")
    with pytest.raises(LookupError, match="^Cannot POST /hello$"):
        router.lookup(Method.POST, "/hello")


def test_lookup_empty_path_reports_root():
    router = Router()
    with pytest.raises(LookupError, match="^Cannot GET /$"):
        router.lookup(Method.GET, "")


def test_handle_accepts_method_string():
    router = Router()
    router.handle("/x", False, "PATCH", _responder("x"))
    assert sorted(router.allowed("/x")) == ["OPTIONS", "PATCH"]


def test_handle_options_flag_and_global_options():
    router = Router()
    assert router.handle_options is True
    router.set_handle_options(False)
    assert router.handle_options is False
    handler = _responder("opts")
    result = router.global_options(True, handler)
    assert result is router
    assert router.options_handler == HandlerContainer(True, handler)


def test_copy_is_independent():
    router = Router()
    router.get("/a", False, _responder("a"))
    clone = router.copy()
    clone.get("/b", False, _responder("b"))
    clone.set_global_prefix("/api")
    assert router.allowed("/b") == []
    assert sorted(clone.allowed("/b")) == ["GET", "OPTIONS"]
    assert router.prefix == ""
    assert router.lookup("GET", "/a").value is clone.lookup("GET", "/a").value


@pytest.mark.asyncio
async def test_handler_error_becomes_response():
    async def failing(_req):
        raise not_found_error("missing")

    container = HandlerContainer(False, failing)
    response = await container.handle(_request())
    assert response.status_code == 404
    assert response.body == HttpBody.json(
        {"statusCode": 404, "message": "missing", "error": "Not Found"}
    )


@pytest.mark.asyncio
async def test_sync_handler_is_supported():
    container = HandlerContainer(False, lambda req: HttpResponse(201, {}, req.path))
    request = _request()
    request.path = "/p"
    response = await container.handle(request)
    assert response == HttpResponse(201, {}, HttpBody.text("/p"))


@pytest.mark.asyncio
async def test_handler_receives_request():
    seen = []

    async def handler(req):
        seen.append(req.method)
        raise HttpError(HttpResponse(418, {}, "teapot"))

    response = await HandlerContainer(False, handler).handle(_request("DELETE"))
    assert seen == ["DELETE"]
    assert response.status_code == 418