from __future__ import annotations

from io import BytesIO

import fitz  # PyMuPDF
from PIL import Image
import pytest

from ojt_journal.pipeline.errors import AssetFetchError
from ojt_journal.pipeline.images import FetchedAsset
from ojt_journal.pipeline.metrics import embed_fonts

TEMPLATE_PAGES = 46
LETTER = (612, 792)


def make_template(pages: int = TEMPLATE_PAGES, size=LETTER) -> bytes:
    doc = fitz.open()
    for n in range(pages):
        page = doc.new_page(width=size[0], height=size[1])
        page.insert_text((40, 40), f"Template page {n + 1}")
    data = doc.tobytes()
    doc.close()
    return data


def make_image(fmt: str = "PNG", size=(40, 20), rgb=(200, 30, 30)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, rgb).save(buf, format=fmt)
    return buf.getvalue()


class FakeFetcher:
    """Serves images by URL; URLs containing ``broken`` fail, unknown ones return garbage."""

    def __init__(self, assets: dict | None = None) -> None:
        self.assets = assets or {}
        self.calls: list = []

    def __call__(self, url: str) -> FetchedAsset:
        self.calls.append(url)
        if "broken" in url:
            raise AssetFetchError(url, "HTTP 404")
        if url in self.assets:
            return self.assets[url]
        return FetchedAsset(make_image("PNG"), "image/png")


@pytest.fixture
def template_bytes() -> bytes:
    return make_template()


@pytest.fixture
def fonts():
    return embed_fonts()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()
