"""Serving a set of static files as GET routes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pluto.messages import HttpBody, HttpRequest, HttpResponse
from pluto.router import Router


@dataclass(frozen=True)
class StaticFile:
    """A file to serve: its route name, its content and its MIME type."""

    name: str
    content: bytes
    mime: str

    def _is_textual(self) -> bool:
        essence = self.mime.split(";", 1)[0].strip().lower()
        main_type, _, subtype = essence.partition("/")
        subtype = subtype.split("+", 1)[0]
        return main_type == "text" or subtype == "json"


def _file_handler(file: StaticFile):
    async def handler(_request: HttpRequest) -> HttpResponse:
        if file._is_textual():
            body = HttpBody.text(file.content.decode("utf-8"))
        else:
            body = HttpBody.raw(file.content)
        return HttpResponse(200, {"Content-Type": file.mime}, body)

    return handler


def use_static_files(router: Router, statics: Iterable[StaticFile]) -> Router:
    """Register a GET route at "/<name>" for every file in ``statics``.

    Text and JSON files are served as text, everything else as raw bytes.
    """
    for file in statics:
        router.get(f"/{file.name}", False, _file_handler(file))
    return router