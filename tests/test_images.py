from __future__ import annotations

import httpx
from PIL import Image
import pytest

from conftest import FakeFetcher, make_image
from ojt_journal.pipeline.errors import AssetFetchError, ImageDecodeError
from ojt_journal.pipeline.images import (
    JPEG,
    PNG,
    FetchedAsset,
    HttpImageFetcher,
    ImageEmbedder,
    decode_as,
    decode_image,
    fit_to_box,
    sniff_format,
)


def test_sniff_format() -> None:
    assert sniff_format("https://cdn.example.com/a.jpg", "image/png") == PNG
    assert sniff_format("https://cdn.example.com/sig.PNG?token=abc", "") == PNG
    assert sniff_format("https://cdn.example.com/photo", "image/jpeg") == JPEG
    assert sniff_format("https://cdn.example.com/photo", None) == JPEG


def test_decode_retries_other_codec() -> None:
    png = make_image("PNG")
    assert decode_as(png, JPEG) is None
    image = decode_image(png, JPEG)
    assert image.fmt == PNG
    assert (image.width, image.height) == (40, 20)

    jpeg = make_image("JPEG")
    assert decode_image(jpeg, PNG).fmt == JPEG


def test_decode_failure_raises() -> None:
    with pytest.raises(ImageDecodeError):
        decode_image(b"definitely not an image", PNG, "https://x/y.png")


def test_fit_to_box_keeps_aspect_ratio() -> None:
    assert fit_to_box(400, 200, 100, 100) == (100, 50)
    assert fit_to_box(100, 400, 90, 16) == (4, 16)
    assert fit_to_box(10, 10, 100, 50) == (50, 50)
    assert fit_to_box(0, 10, 100, 50) == (0.0, 0.0)


def test_embedder_memoizes_per_url() -> None:
    fetcher = FakeFetcher()
    embedder = ImageEmbedder(fetcher)
    first = embedder.embed("https://cdn.example.com/sig.png")
    second = embedder.embed("https://cdn.example.com/sig.png")
    assert first is second
    assert fetcher.calls == ["https://cdn.example.com/sig.png"]


def test_embedder_isolates_failures() -> None:
    fetcher = FakeFetcher({"https://cdn.example.com/garbage.jpg": FetchedAsset(b"<html>oops</html>", "text/html")})
    embedder = ImageEmbedder(fetcher)
    assert embedder.embed("https://cdn.example.com/broken.png") is None
    assert embedder.embed("https://cdn.example.com/garbage.jpg") is None
    assert embedder.embed("https://cdn.example.com/ok.png") is not None
    assert embedder.embed(None) is None
    assert embedder.embed("https://cdn.example.com/broken.png") is None
    assert fetcher.calls.count("https://cdn.example.com/broken.png") == 1


def test_http_fetcher_reports_status_errors() -> None:
    png = make_image("PNG")

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/missing.png":
            return httpx.Response(404)
        if request.url.path == "/empty.png":
            return httpx.Response(200, content=b"")
        return httpx.Response(200, content=png, headers={"content-type": "image/png"})

    fetcher = HttpImageFetcher(transport=httpx.MockTransport(handler))
    asset = fetcher("https://cdn.example.com/sig.png")
    assert asset.content == png
    assert asset.content_type == "image/png"
    with pytest.raises(AssetFetchError):
        fetcher("https://cdn.example.com/missing.png")
    with pytest.raises(AssetFetchError):
        fetcher("https://cdn.example.com/empty.png")


def test_oversized_image_is_treated_as_unavailable(monkeypatch) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    huge = make_image("PNG", size=(100, 100))
    assert decode_as(huge, PNG) is None
    with pytest.raises(ImageDecodeError):
        decode_image(huge, PNG, "https://cdn.example.com/huge.png")

    fetcher = FakeFetcher({"https://cdn.example.com/huge.png": FetchedAsset(huge, "image/png")})
    embedder = ImageEmbedder(fetcher)
    assert embedder.embed("https://cdn.example.com/huge.png") is None
