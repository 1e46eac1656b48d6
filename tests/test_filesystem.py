from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

import httpx
import pytest

from imgsource.filesystem import exists, read_file, to_local_path


@pytest.mark.asyncio
async def test_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "a.png"
    path.write_bytes(b"x")

    assert await exists(path) is True
    assert await exists(str(path)) is True
    assert await exists(httpx.URL(path.as_uri())) is True
    assert await exists(urlparse(path.as_uri())) is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "location",
    [
        "definitely/not/here.png",
        "bad\x00path.png",
        "https://example.com/a.png",
        httpx.URL("https://example.com/a.png"),
        urlparse("https://example.com/a.png"),
        42,
        None,
    ],
)
async def test_missing_or_malformed_locations(location) -> None:
    assert await exists(location) is False


@pytest.mark.asyncio
async def test_read_file_returns_full_contents(tmp_path: Path) -> None:
    path = tmp_path / "big.bin"
    payload = bytes(range(256)) * 1024
    path.write_bytes(payload)

    assert await read_file(path) == payload


@pytest.mark.asyncio
async def test_read_file_does_not_swallow_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await read_file(tmp_path / "missing.png")


def test_to_local_path() -> None:
    assert to_local_path("a/b.png") == "a/b.png"
    assert to_local_path(Path("a/b.png")) == str(Path("a/b.png"))
    assert to_local_path(httpx.URL("file:///tmp/a%20b.png")) == "/tmp/a b.png"
    assert to_local_path(httpx.URL("https://example.com/a.png")) is None
    assert to_local_path(3) is None
