"""Template ownership, page allocation and overlay stamping.

The template is opened once per run with PyMuPDF and owned by a
:class:`PageAllocator`. Composers draw through reportlab canvases handed out
by :class:`PageHandle`; each canvas produces a one-page overlay that is
stamped onto its page when the document is serialized.
"""
from __future__ import annotations

from io import BytesIO
import logging
from pathlib import Path
from typing import Dict, List, Tuple

import fitz  # PyMuPDF
from reportlab.pdfgen import canvas

from .errors import CompositionError, TemplateError

logger = logging.getLogger(__name__)


class TemplateDocument:
    def __init__(self, doc: fitz.Document) -> None:
        if doc.page_count < 1:
            raise TemplateError("Template has no pages")
        self.doc = doc
        first = doc[0].rect
        self.page_size: Tuple[float, float] = (first.width, first.height)

    @classmethod
    def from_bytes(cls, data: bytes, expected_size: int | None = None) -> "TemplateDocument":
        if not data:
            raise TemplateError("Template is empty")
        if expected_size is not None and len(data) != expected_size:
            raise TemplateError(f"Template size mismatch: expected {expected_size} bytes, got {len(data)}")
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except (RuntimeError, ValueError) as exc:
            raise TemplateError(f"Template unreadable: {exc}") from exc
        return cls(doc)

    @classmethod
    def from_path(cls, path: Path, expected_size: int | None = None) -> "TemplateDocument":
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise TemplateError(f"Cannot read template {path}: {exc}") from exc
        return cls.from_bytes(data, expected_size=expected_size)

    @property
    def page_count(self) -> int:
        return self.doc.page_count


class PageHandle:
    IDLE = "idle"
    DRAWING = "drawing"
    DONE = "done"

    def __init__(self, index: int, width: float, height: float) -> None:
        self.index = index
        self.width = width
        self.height = height
        self.state = self.IDLE
        self._buf = BytesIO()
        self._canvas: canvas.Canvas | None = None

    @property
    def canvas(self) -> canvas.Canvas:
        if self.state == self.DONE:
            raise CompositionError(f"Page {self.index + 1} is already sealed")
        if self._canvas is None:
            self._canvas = canvas.Canvas(self._buf, pagesize=(self.width, self.height))
            self.state = self.DRAWING
        return self._canvas

    @property
    def is_drawn(self) -> bool:
        return self._canvas is not None

    def seal(self) -> None:
        self.state = self.DONE

    def overlay_bytes(self) -> bytes:
        if self._canvas is None:
            return b""
        self._canvas.showPage()
        self._canvas.save()
        return self._buf.getvalue()


class PageAllocator:
    def __init__(self, template: TemplateDocument) -> None:
        self.template = template
        self._handles: Dict[int, PageHandle] = {}

    @property
    def page_count(self) -> int:
        return self.template.page_count

    def page(self, index: int) -> PageHandle:
        if index < 0:
            raise ValueError(f"Page index must be non-negative, got {index}")
        if index in self._handles:
            return self._handles[index]

        doc = self.template.doc
        width, height = self.template.page_size
        added = 0
        while doc.page_count <= index:
            doc.new_page(-1, width=width, height=height)
            added += 1
        if added:
            logger.debug("Appended %d blank page(s) to reach page %d", added, index + 1)

        rect = doc[index].rect
        handle = PageHandle(index, rect.width, rect.height)
        self._handles[index] = handle
        return handle

    def append(self) -> PageHandle:
        return self.page(self.template.page_count)

    def seal_open(self) -> List[int]:
        sealed = []
        for index, handle in self._handles.items():
            if handle.state != PageHandle.DONE:
                handle.seal()
                sealed.append(index)
        return sealed

    def serialize(self) -> bytes:
        doc = self.template.doc
        stamped = 0
        try:
            for index in sorted(self._handles):
                handle = self._handles[index]
                if not handle.is_drawn:
                    continue
                handle.seal()
                with fitz.open(stream=handle.overlay_bytes(), filetype="pdf") as overlay:
                    page = doc[index]
                    page.show_pdf_page(page.rect, overlay, 0)
                stamped += 1
            data = doc.tobytes(garbage=3, deflate=True)
        except (RuntimeError, ValueError) as exc:
            raise CompositionError(f"Cannot serialize journal: {exc}") from exc
        logger.info("Serialized journal: %d pages, %d stamped", doc.page_count, stamped)
        return data
