from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from reportlab.pdfgen import canvas

from .images import EmbeddedImage, ImageEmbedder, draw_fitted
from .metrics import FontSet
from .pages import PageAllocator, PageHandle


@dataclass
class ComposeContext:
    """Services and run-wide values shared by every section composer."""

    allocator: PageAllocator
    fonts: FontSet
    images: ImageEmbedder
    style: dict
    student_name: str = ""
    student_email: str = ""
    today: date = field(default_factory=date.today)
    generated_at: datetime = field(default_factory=datetime.now)

    def page(self, index: int) -> PageHandle:
        return self.allocator.page(index)

    def canvas(self, index: int) -> canvas.Canvas:
        return self.allocator.page(index).canvas

    def draw_image(
        self,
        canv: canvas.Canvas,
        url: str | None,
        x: float,
        y: float,
        box_w: float,
        box_h: float,
    ) -> EmbeddedImage | None:
        """Fetch and draw an image fitted into a box; absent or broken images draw nothing."""
        image = self.images.embed(url)
        if image is not None:
            draw_fitted(canv, image, x, y, box_w, box_h)
        return image
