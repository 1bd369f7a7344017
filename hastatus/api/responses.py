"""Response helpers for the image endpoints."""

from __future__ import annotations

import io

from aiohttp import web

from ..render.canvas import Canvas

PNG_CONTENT_TYPE = "image/png"


def encode_png(canvas: Canvas) -> bytes:
    """Encode a canvas as PNG; 1-bit canvases stay 1-bit in the file."""
    buffer = io.BytesIO()
    canvas.image.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue()


def image_response(body: bytes, cache_max_age: int) -> web.Response:
    return web.Response(
        body=body,
        content_type=PNG_CONTENT_TYPE,
        headers={"Cache-Control": f"public, max-age={cache_max_age}"},
    )


def text_error(message: str, status: int) -> web.Response:
    """Plain-text error body; image clients have no use for JSON here."""
    return web.Response(text=message, status=status, content_type="text/plain")
