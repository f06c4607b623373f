"""Font registration and advance-width measurement.

Every layout decision in the journal goes through :func:`advance_width`, so the
two faces used by the report are embedded once per run and shared by every
section composer.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from .errors import FontEmbeddingError

logger = logging.getLogger(__name__)

REGULAR_FACE_NAME = "Helvetica"
BOLD_FACE_NAME = "Helvetica-Bold"


@dataclass(frozen=True)
class FontFace:
    name: str
    path: Path | None = None


@dataclass(frozen=True)
class FontHandle:
    name: str


@dataclass(frozen=True)
class FontSet:
    regular: FontHandle
    bold: FontHandle


def embed(face: FontFace) -> FontHandle:
    if face.path is not None:
        if face.name not in pdfmetrics.getRegisteredFontNames():
            try:
                pdfmetrics.registerFont(TTFont(face.name, str(face.path)))
            except (TTFError, OSError) as exc:
                raise FontEmbeddingError(f"Cannot embed font {face.name} from {face.path}: {exc}") from exc
            logger.debug("Registered font %s from %s", face.name, face.path)
        return FontHandle(face.name)

    try:
        pdfmetrics.getFont(face.name)
    except KeyError as exc:
        raise FontEmbeddingError(f"Unknown font face: {face.name}") from exc
    return FontHandle(face.name)


def advance_width(handle: FontHandle, text: str, size: float) -> float:
    return pdfmetrics.stringWidth(text or "", handle.name, size)


def embed_fonts(regular: FontFace | None = None, bold: FontFace | None = None) -> FontSet:
    return FontSet(
        regular=embed(regular or FontFace(REGULAR_FACE_NAME)),
        bold=embed(bold or FontFace(BOLD_FACE_NAME)),
    )
