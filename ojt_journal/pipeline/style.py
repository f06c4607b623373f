from __future__ import annotations

from reportlab.lib import colors


def _hex(value: str, default=colors.black) -> colors.Color:
    if not value:
        return default
    try:
        return colors.HexColor("#" + str(value).lstrip("#"))
    except ValueError:
        return default


def _s(style: dict, key: str, default):
    return style.get(key, default)


def color(style: dict, key: str, default: str = "#000000") -> colors.Color:
    return _hex(str(_s(style, key, default)))


def size(style: dict, key: str, default: float) -> float:
    return float(_s(style, key, default))
