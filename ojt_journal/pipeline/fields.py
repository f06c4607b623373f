"""Declarative "label: value" layouts.

Each page that shows labelled values builds a list of field descriptors and
hands it to :func:`render_fields`, instead of placing every label by hand.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from reportlab.lib import colors
from reportlab.pdfgen import canvas

from .metrics import FontSet, advance_width
from .style import color
from .text_layout import draw_lines, wrap_text

Accessor = Callable[[Any], Optional[str]]


@dataclass(frozen=True)
class ValueField:
    label: str
    accessor: Accessor
    label_x: float
    y: float
    max_width: float | None = None
    uppercase: bool = True
    value_x: float | None = None
    gap: float = 5.0
    size: float = 11
    pitch: float = 12
    default: str | None = None


@dataclass(frozen=True)
class RuleField:
    label: str
    label_x: float
    y: float
    rule_width: float
    gap: float = -2.0
    size: float = 11


@dataclass(frozen=True)
class LabelField:
    label: str
    label_x: float
    y: float
    size: float = 11


Field = Union[ValueField, RuleField, LabelField]


def _draw_label(canv: canvas.Canvas, fonts: FontSet, label: str, x: float, y: float, sz: float, ink) -> float:
    canv.setFillColor(ink)
    canv.setFont(fonts.bold.name, sz)
    canv.drawString(x, y, label)
    return advance_width(fonts.bold, label, sz)


def render_fields(
    canv: canvas.Canvas,
    fonts: FontSet,
    fields: Sequence[Field],
    record: Any,
    style: dict | None = None,
) -> None:
    style = style or {}
    label_ink = color(style, "rule_color", "#000000")
    value_ink = color(style, "value_color", "#000000")

    for field in fields:
        label_w = _draw_label(canv, fonts, field.label, field.label_x, field.y, field.size, label_ink)

        if isinstance(field, LabelField):
            continue

        if isinstance(field, RuleField):
            start = field.label_x + label_w + field.gap
            canv.setStrokeColor(label_ink)
            canv.setLineWidth(0.5)
            canv.line(start, field.y - 2, start + field.rule_width, field.y - 2)
            continue

        raw = field.accessor(record) if record is not None else None
        value = (raw or "").strip()
        if value:
            if field.uppercase:
                value = value.upper()
        elif field.default:
            value = field.default
        else:
            # Blank values draw the label only.
            continue

        x = field.value_x if field.value_x is not None else field.label_x + label_w + field.gap
        if field.max_width:
            lines = wrap_text(value, fonts.regular, field.size, field.max_width)
        else:
            lines = [value]
        canv.setFillColor(value_ink)
        canv.setStrokeColor(value_ink)
        draw_lines(canv, lines, x, field.y, fonts.regular, field.size, field.pitch, underline=True)
        canv.setFillColor(colors.black)
