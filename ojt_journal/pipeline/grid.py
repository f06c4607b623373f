from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from reportlab.lib import colors
from reportlab.pdfgen import canvas

from .metrics import FontHandle, advance_width
from .text_layout import fit_font


@dataclass(frozen=True)
class GridGeometry:
    x: float
    top: float
    column_widths: Tuple[float, ...]
    header_height: float
    row_height: float
    row_count: int

    @property
    def width(self) -> float:
        return sum(self.column_widths)

    @property
    def bottom(self) -> float:
        return self.top - self.header_height - self.row_height * self.row_count

    def column_x(self, index: int) -> float:
        return self.x + sum(self.column_widths[:index])

    def row_top(self, row: int) -> float:
        return self.top - self.header_height - self.row_height * row

    def row_bottom(self, row: int) -> float:
        return self.row_top(row) - self.row_height

    def row_baseline(self, row: int, drop: float | None = None) -> float:
        """Baseline for cell text; by default roughly centred for 9pt text."""
        if drop is None:
            drop = self.row_height / 2 + 3
        return self.row_top(row) - drop


def draw_grid(
    canv: canvas.Canvas,
    origin: Tuple[float, float],
    column_widths: Sequence[float],
    row_height: float,
    row_count: int,
    header_height: float,
    header_labels: Optional[Sequence[str]] = None,
    header_font: FontHandle | None = None,
    header_size: float = 9,
    header_fill: colors.Color | None = None,
    header_drop: float | None = None,
    header_align: str = "left",
    line_color: colors.Color = colors.black,
    line_width: float = 1.0,
) -> GridGeometry:
    """
    Draw a bordered table: a header band, one rule under the header and under
    each of ``row_count`` rows, and ``len(column_widths) + 1`` vertical rules.

    ``origin`` is the top-left corner. Cell interiors are left to the caller.
    """
    x, top = origin
    geom = GridGeometry(x, top, tuple(float(w) for w in column_widths), header_height, row_height, row_count)
    bottom = geom.bottom

    canv.saveState()
    if header_fill is not None and header_height > 0:
        canv.setFillColor(header_fill)
        canv.rect(x, top - header_height, geom.width, header_height, stroke=0, fill=1)

    canv.setStrokeColor(line_color)
    canv.setLineWidth(line_width)
    canv.line(x, top, x + geom.width, top)
    if header_height > 0:
        canv.line(x, top - header_height, x + geom.width, top - header_height)
    for row in range(row_count):
        y = geom.row_bottom(row)
        canv.line(x, y, x + geom.width, y)
    for col in range(len(geom.column_widths) + 1):
        cx = geom.column_x(col)
        canv.line(cx, top, cx, bottom)
    canv.restoreState()

    if header_labels and header_font is not None:
        drop = header_drop if header_drop is not None else header_height * 0.7
        canv.setFillColor(colors.black)
        for col, label in enumerate(header_labels):
            if col >= len(geom.column_widths) or not label:
                continue
            cw = geom.column_widths[col]
            sz = fit_font(label, header_font, header_size, cw - 8)
            canv.setFont(header_font.name, sz)
            if header_align == "center":
                lx = geom.column_x(col) + (cw - advance_width(header_font, label, sz)) / 2
            else:
                lx = geom.column_x(col) + 5
            canv.drawString(lx, top - drop, label)

    return geom
