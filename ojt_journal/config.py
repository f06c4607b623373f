from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import json


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"

# Zero-based page indices inside the journal template.
PERSONAL_INFO_PAGE = 3
HOST_ORG_PAGES: List[int] = [15, 16, 17]
DTR_FIRST_PAGE = 19
DTR_LAST_PAGE = 29
SUMMARY_PAGE = 30
FEEDBACK_PAGES: List[int] = [33, 34]
EVALUATION_FIRST_PAGE = 35
EVALUATION_PAGES_PER_FORM = 3
MAX_EVALUATION_FORMS = 3
CERTIFICATE_PAGES: List[int] = [44, 45]

# Rows per page for the list-backed sections.
DTR_ROWS_PER_PAGE = 10
TRAINING_SCHEDULE_ROWS = 11
SUMMARY_COMPANY_ROWS = 3
EVIDENCE_CARDS_PER_PAGE = 6
APPENDIX_ROWS_PER_PAGE = 10

HOURS_TOLERANCE = 0.01
HTTP_TIMEOUT_SECONDS = 20.0

HORIZONTAL_MARGIN = 40.0
VERTICAL_MARGIN = 50.0

JOURNAL_FILE_PREFIX = "OJT_Journal"

DEFAULT_STYLE: Dict[str, object] = {
    "text_color": "#1F1F1F",
    "value_color": "#000000",
    "muted_color": "#616161",
    "rule_color": "#000000",
    "header_fill": "#F7F2ED",
    "section_border_color": "#D1D1D1",
    "accent_color": "#F56E0F",
    "body_size": 10,
    "cell_size": 9,
}


def load_style_preset(path: Path | None = None) -> dict:
    style = dict(DEFAULT_STYLE)
    if path is None:
        return style
    with path.open("r", encoding="utf-8") as handle:
        style.update(json.load(handle))
    return style


def set_out_dir(path: Path) -> None:
    global OUT_DIR
    OUT_DIR = path
