from __future__ import annotations

from typing import List, Sequence, TypeVar

from reportlab.pdfgen import canvas

from .metrics import FontHandle, advance_width

T = TypeVar("T")


def wrap_text(text: str, font: FontHandle, size: float, max_width: float) -> List[str]:
    """
    Greedy word wrap against a width budget.

    Empty input still yields one (empty) line so callers can reserve its space.
    A single word wider than the budget is kept whole on its own line.
    """
    words = (text or "").split()
    if not words:
        return [""]

    lines: List[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if advance_width(font, candidate, size) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        current = word

    if current:
        lines.append(current)
    return lines


def fit_font(text: str, font: FontHandle, base_size: float, max_width: float, min_size: float = 7.0) -> float:
    """Shrink the font until the text fits the cell, stopping at min_size."""
    size = float(base_size)
    while size > min_size:
        if advance_width(font, text, size) <= max_width:
            return size
        size -= 0.5
    return min_size


def draw_lines(
    canv: canvas.Canvas,
    lines: Sequence[str],
    x: float,
    y: float,
    font: FontHandle,
    size: float,
    pitch: float,
    underline: bool = False,
) -> float:
    """Draw lines top-down at a fixed pitch. Returns the baseline below the last line."""
    canv.setFont(font.name, size)
    yy = y
    for line in lines:
        canv.drawString(x, yy, line)
        if underline:
            width = advance_width(font, line, size)
            canv.setLineWidth(0.5)
            canv.line(x, yy - 2, x + width, yy - 2)
        yy -= pitch
    return yy


def draw_fitted_string(
    canv: canvas.Canvas,
    text: str,
    x: float,
    y: float,
    font: FontHandle,
    size: float,
    max_width: float,
) -> None:
    text = text or ""
    canv.setFont(font.name, fit_font(text, font, size, max_width))
    canv.drawString(x, y, text)


def draw_centred(canv: canvas.Canvas, text: str, x: float, width: float, y: float, font: FontHandle, size: float) -> None:
    canv.setFont(font.name, size)
    canv.drawString(x + (width - advance_width(font, text, size)) / 2, y, text)


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    if size <= 0:
        return [list(items)]
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def truncate(text: str, limit: int) -> str:
    text = text or ""
    if len(text) > limit:
        return text[:limit] + "..."
    return text
