from __future__ import annotations

from collections.abc import Callable
from io import BytesIO

import httpx
import pytest
from PIL import Image as PilImage

from imgsource.config import config


def _image_bytes(fmt: str, color: tuple[int, int, int] = (255, 0, 0)) -> bytes:
    img = PilImage.new("RGB", (16, 16), color)
    buf = BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture(autouse=True)
def _default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "MAX_REDIRECTS", 20)
    monkeypatch.setattr(config, "NATIVE_FETCH", False)


@pytest.fixture
def png_bytes() -> bytes:
    return _image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _image_bytes("JPEG", (0, 128, 255))


@pytest.fixture
def redirect_chain() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    """Build a transport serving ``hops`` redirects before a final response.

    Hop ``n`` lives at ``https://img.test/pic?hop=n``.
    """

    def build(
        hops: int,
        *,
        body: bytes = b"",
        status: int = 302,
        final_status: int = 200,
    ) -> tuple[httpx.MockTransport, list[httpx.Request]]:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            hop = int(request.url.params.get("hop", "0"))
            if hop < hops:
                return httpx.Response(
                    status,
                    headers={"Location": f"https://img.test/pic?hop={hop + 1}"},
                )
            return httpx.Response(final_status, content=body)

        return httpx.MockTransport(handler), requests

    return build
