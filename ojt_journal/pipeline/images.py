"""Remote image acquisition and embedding.

Every picture in the journal (photos, signatures, evidence attachments,
certificates) goes through :class:`ImageEmbedder`. A failed fetch or decode is
logged and reported as ``None`` so the calling composer can draw the rest of
its layout without the picture.
"""
from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
import logging
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import urlparse

import httpx
from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..config import HTTP_TIMEOUT_SECONDS
from .errors import AssetError, AssetFetchError, ImageDecodeError

logger = logging.getLogger(__name__)

PNG = "PNG"
JPEG = "JPEG"


@dataclass(frozen=True)
class FetchedAsset:
    content: bytes
    content_type: str = ""


ImageFetcher = Callable[[str], FetchedAsset]


class HttpImageFetcher:
    def __init__(self, timeout: float = HTTP_TIMEOUT_SECONDS, transport: httpx.BaseTransport | None = None) -> None:
        self.timeout = timeout
        self.transport = transport

    def __call__(self, url: str) -> FetchedAsset:
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self.transport) as client:
                resp = client.get(url)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise AssetFetchError(url, str(exc)) from exc

        if not resp.content:
            raise AssetFetchError(url, "empty response body")
        return FetchedAsset(resp.content, resp.headers.get("content-type", ""))


@dataclass
class EmbeddedImage:
    image: Image.Image
    fmt: str

    @property
    def width(self) -> int:
        return self.image.size[0]

    @property
    def height(self) -> int:
        return self.image.size[1]

    def reader(self) -> ImageReader:
        return ImageReader(self.image)


def sniff_format(url: str, content_type: str | None) -> str:
    if "png" in (content_type or "").lower():
        return PNG
    if urlparse(url or "").path.lower().endswith(".png"):
        return PNG
    return JPEG


def decode_as(data: bytes, fmt: str) -> Optional[EmbeddedImage]:
    try:
        img = Image.open(BytesIO(data), formats=[fmt])
        img.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        return None
    if img.mode not in ("RGB", "RGBA", "L"):
        img = img.convert("RGBA")
    return EmbeddedImage(img, fmt)


def decode_image(data: bytes, primary: str, url: str = "") -> EmbeddedImage:
    fallback = JPEG if primary == PNG else PNG
    embedded = decode_as(data, primary) or decode_as(data, fallback)
    if embedded is None:
        raise ImageDecodeError(url, f"not decodable as {primary} or {fallback}")
    return embedded


def fit_to_box(width: float, height: float, box_w: float, box_h: float) -> Tuple[float, float]:
    if width <= 0 or height <= 0:
        return 0.0, 0.0
    scale = min(box_w / width, box_h / height)
    return width * scale, height * scale


class ImageEmbedder:
    """Fetches and decodes images once per URL for the duration of a run."""

    def __init__(self, fetcher: ImageFetcher | None = None) -> None:
        self.fetcher = fetcher or HttpImageFetcher()
        self._memo: Dict[str, Optional[EmbeddedImage]] = {}

    def embed(self, url: str | None) -> Optional[EmbeddedImage]:
        if not url:
            return None
        if url in self._memo:
            return self._memo[url]

        try:
            asset = self.fetcher(url)
            if not asset.content:
                raise AssetFetchError(url, "empty response body")
            result: Optional[EmbeddedImage] = decode_image(
                asset.content, sniff_format(url, asset.content_type), url
            )
        except AssetError as exc:
            logger.warning("Image unavailable (%s): %s", exc.url, exc.reason)
            result = None
        except OSError as exc:
            logger.warning("Image unavailable (%s): %s", url, exc)
            result = None

        self._memo[url] = result
        return result


def draw_fitted(
    canv: canvas.Canvas,
    image: EmbeddedImage,
    x: float,
    y: float,
    box_w: float,
    box_h: float,
) -> Tuple[float, float]:
    """Draw the image aspect-fit and centred inside the box whose bottom-left is (x, y)."""
    w, h = fit_to_box(image.width, image.height, box_w, box_h)
    canv.drawImage(image.reader(), x + (box_w - w) / 2, y + (box_h - h) / 2, width=w, height=h, mask="auto")
    return w, h
