"""Rendering a template view into an HTML response."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any

from pluto.messages import HttpBody, HttpResponse


def render_view(view: Callable[..., Any], *args: Any) -> HttpResponse:
    """Render ``view`` into a 200 text/html response.

    ``view`` is called as ``view(out, *args)`` and writes its output as text
    to the stream ``out``.
    """
    buffer = io.StringIO()
    view(buffer, *args)
    return HttpResponse(
        200, {"Content-Type": "text/html"}, HttpBody.text(buffer.getvalue())
    )