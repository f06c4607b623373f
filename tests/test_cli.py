from __future__ import annotations

from datetime import datetime
import json
import tempfile
from pathlib import Path

import fitz  # PyMuPDF
from typer.testing import CliRunner

from conftest import TEMPLATE_PAGES, make_template
from ojt_journal import config
from ojt_journal.main import app
from ojt_journal.storage import journal_filename, journal_path, write_journal

runner = CliRunner()


def test_journal_filename_uses_epoch_millis() -> None:
    moment = datetime(2026, 10, 17, 9, 30)
    assert journal_filename(moment) == f"OJT_Journal_{int(moment.timestamp() * 1000)}.pdf"


def test_write_journal_creates_directories() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        target = Path(temp_dir) / "nested" / "journal.pdf"
        assert write_journal(b"%PDF-1.7", target) == target
        assert target.read_bytes() == b"%PDF-1.7"


def test_build_command_writes_journal() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        template = root / "template.pdf"
        template.write_bytes(make_template())
        data = root / "bundle.json"
        data.write_text(
            json.dumps({"student": {"name": "Juan Dela Cruz", "email": "juan@example.com"}}),
            encoding="utf-8",
        )
        previous = config.OUT_DIR
        try:
            result = runner.invoke(
                app, ["build", "--template", str(template), "--data", str(data), "--out", str(root / "out")]
            )
        finally:
            config.set_out_dir(previous)
        assert result.exit_code == 0, result.output
        outputs = list((root / "out").glob("OJT_Journal_*.pdf"))
        assert len(outputs) == 1
        with fitz.open(outputs[0]) as doc:
            assert doc.page_count == TEMPLATE_PAGES + 2


def test_build_command_fails_on_bad_template() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        template = root / "template.pdf"
        template.write_bytes(b"not a pdf")
        data = root / "bundle.json"
        data.write_text("{}", encoding="utf-8")
        previous = config.OUT_DIR
        try:
            result = runner.invoke(
                app, ["build", "--template", str(template), "--data", str(data), "--out", str(root / "out")]
            )
        finally:
            config.set_out_dir(previous)
        assert result.exit_code == 1
        assert not list((root / "out").glob("*.pdf"))


def test_profile_command_lists_missing_fields() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "profile.json"
        path.write_text(json.dumps({"first_name": "Juan", "last_name": "Dela Cruz"}), encoding="utf-8")
        result = runner.invoke(app, ["profile", str(path), "--email", "juan@school.edu"])
        assert result.exit_code == 0, result.output
        assert "Juan Dela Cruz" in result.output
        assert "juan@school.edu" in result.output
        assert "Missing:" in result.output
        assert "Religion" in result.output


def test_journal_path_does_not_touch_disk() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir) / "later"
        path = journal_path(base, datetime(2026, 10, 17, 9, 30))
        assert path.parent == base
        assert not base.exists()
