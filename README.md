# pluto

An asynchronous HTTP request router. It matches requests by method and
path, extracts path parameters, answers `OPTIONS` requests automatically,
applies a CORS policy, and turns handler results into raw responses with
encoded bodies. It has no dependencies outside the standard library.

## What it does not do

pluto does not open sockets or speak HTTP on the wire. There is no server
process and no command to start one: you build a `RawHttpRequest` from
whatever transport you use, pass it to `HttpServe.serve`, and send back the
`RawHttpResponse` it returns. It also has no template language of its own;
`render_view` works with any callable that writes text to a stream.

## Installation

Install the project directory with pip. The `test` extra adds pytest and
pytest-asyncio for running the test suite.

## Routing

Handlers are callables that take an `HttpRequest` and return an
`HttpResponse`, either directly or from a coroutine. To answer with an error
response, raise an `HttpError` that wraps one.

```python
from pluto.router import Router
from pluto.messages import HttpRequest, HttpResponse, HttpBody

router = Router()

async def hello(request: HttpRequest) -> HttpResponse:
    return HttpResponse(
        status_code=200,
        headers={},
        body=HttpBody.json({"statusCode": 200, "message": "Hello World from GET"}),
    )

async def put_value(request: HttpRequest) -> HttpResponse:
    return HttpResponse(200, {}, HttpBody.json({"paramValue": request.params.get("value")}))

router.get("/", False, hello)
router.put("/:value", False, put_value)

sorted(router.allowed("/"))  # ['GET', 'OPTIONS']
```

Route patterns, handled by `pluto.path_tree.PathTree`:

* `/users/:id` or `/users/{id}` binds one non-empty segment to `id`;
* `/files/*rest` or `/files/{*rest}` binds the rest of the path, slashes
  included; it must be the last segment.

Static segments are preferred over parameters, and parameters over
catch-alls. Registering a route twice, or naming a parameter differently at
the same position, raises `RouteConflict`; a path not starting with `/`
raises `ValueError`. Trailing slashes are dropped when registering.

Other `Router` methods:

* `set_global_prefix("/api")` puts a prefix in front of every path registered
  after it;
* `head`, `options`, `post`, `patch`, `delete` and `handle(path, upgrade,
  method, handler)` register handlers for other methods;
* `lookup(method, path)` returns a `RouteMatch` (`value`, `params`) or raises
  `LookupError` with a message such as `Cannot GET /missing`;
* `allowed(path)` lists the methods with a route at `path` (`"*"` for all),
  with `OPTIONS` added when any are found;
* `set_handle_options(False)` turns off automatic `OPTIONS` replies, and
  `global_options(upgrade, handler)` installs a handler for them;
* `copy()` returns an independent router sharing the same handlers.

`pluto.method.Method` holds request methods (`Method.GET`, `Method.POST`, …)
and accepts extension tokens; `Method.parse("")` raises `InvalidMethod`.
Methods compare equal to their string names.

## Serving requests

```python
import asyncio
from pluto.server import HttpServe
from pluto.messages import RawHttpRequest
from pluto.cors import Cors
from pluto.method import Method

app = HttpServe.new_with_router(router, "http_request")
app.use_cors(
    Cors()
    .allow_origin("*")
    .allow_methods([Method.POST, Method.PUT])
    .allow_headers(["Content-Type", "Authorization"])
    .max_age(3600)
)

request = RawHttpRequest(method="GET", url="/", headers=[], body=b"")
response = asyncio.run(app.serve(request))
response.status_code               # 200
response.headers["X-Powered-By"]   # 'Pluto'
response.headers["Content-Type"]   # 'application/json'
```

The query string is ignored when matching, and a trailing slash is
stripped. An unknown method answers `500`; an unmatched route answers `404`
with a JSON body such as
`{"error": "Not Found", "message": "Cannot GET /missing", "statusCode": 404}`.

An `OPTIONS` request for a path that has routes is answered with `204` and an
`Access-Control-Allow-Methods` header listing the allowed methods (unless the
CORS policy already set one), or by the `global_options` handler if one is
installed.

An app created with any name other than `"http_request_update"` is a query:
routes registered with `upgrade=True` answer it with a `500` response whose
`upgrade` flag is set, so the caller can retry through an app created with
`"http_request_update"`.

`Cors` also offers `any()` (origin `*`), `credentials(True)` and
`exposed_headers([...])`; `merge(response)` writes its headers into an
`HttpResponse` and does nothing when no origin is set.

## Request and response helpers

In `pluto.messages`:

* `HttpRequest.body_into_struct(factory)` parses the JSON body and passes it
  to `factory` (or returns it when no factory is given);
  `params_into_struct(factory)` does the same with the path parameters.
  Failures raise `HttpError` carrying a `400` response.
* `HttpBody.json`, `HttpBody.text` and `HttpBody.raw` build bodies;
  `to_bytes()` encodes them, JSON compactly with sorted keys. An
  `HttpResponse` given a plain `str`, `bytes` or JSON value as its body wraps
  it accordingly.
* `bad_request_error(error)`, `internal_server_error()` and
  `not_found_error(message)` return `HttpError`s with the predefined
  responses.

## Static files and views

`pluto.static_files.use_static_files(router, statics)` registers a `GET`
route at `/<name>` for every `StaticFile(name, content, mime)`; text and
JSON files are served as text, everything else as raw bytes.

`pluto.view.render_view(view, *args)` calls `view(out, *args)` with a text
stream and returns a `200` `text/html` response holding what it wrote.