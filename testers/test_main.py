"""
End-to-end tests for the command line front end.
"""
import json
import logging
import shutil
import tempfile
from pathlib import Path

import pytest
from openpyxl import load_workbook

from report_checker.main import main


@pytest.fixture(autouse=True)
def restore_root_logger():
    # main() replaces the root handlers; put pytest's back afterwards
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def make_pdf(path: Path, content: str = "dummy"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode())


def build_tree(root: Path):
    make_pdf(root / "VZP" / "10751416_VZP_2025_11.pdf")
    make_pdf(root / "OZP" / "10751416_OZP_2025_11.pdf")
    make_pdf(root / "OZP" / "02604477_VZP_2025_11.pdf")   # misplaced
    make_pdf(root / "VZP" / "02604477_VZP_2025_10.pdf")   # other month


def write_roster(path: Path):
    path.write_text(json.dumps([
        {"name": "Alfa", "ico": "10751416", "insurers": ["VZP", "OZP"]},
        {"name": "Beta", "ico": "02604477"},
    ]), encoding='utf-8')


def test_scan_exit_codes(capsys):
    tmpdir = Path(tempfile.mkdtemp())
    try:
        reports = tmpdir / "reports"
        build_tree(reports)
        assert main(["scan", str(reports)]) == 0
        out = capsys.readouterr().out
        assert "Parsed files:      4" in out
        assert "Misplaced files:   1" in out

        make_pdf(reports / "VZP" / "readme.txt")
        assert main(["scan", str(reports)]) == 1
        assert "readme.txt" in capsys.readouterr().out
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


def test_check_writes_outputs(capsys):
    tmpdir = Path(tempfile.mkdtemp())
    try:
        reports = tmpdir / "reports"
        build_tree(reports)
        roster = tmpdir / "clients.json"
        write_roster(roster)
        excel = tmpdir / "missing.xlsx"
        summary = tmpdir / "summary.json"

        code = main(["check", str(reports), "--clients", str(roster), "--month", "Listopad",
                     "--year", "2025", "--excel", str(excel), "--json", str(summary)])
        assert code == 1
        out = capsys.readouterr().out
        assert "Missing reports:   1" in out
        assert "Beta [02604477]" in out

        wb = load_workbook(str(excel))
        assert wb["Missing Reports"].cell(row=2, column=1).value == "Beta"
        data = json.loads(summary.read_text(encoding='utf-8'))
        assert [c["report_generated"] for c in data["clients"]] == [True, False]
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


def test_check_bad_month_or_roster():
    tmpdir = Path(tempfile.mkdtemp())
    try:
        roster = tmpdir / "clients.json"
        write_roster(roster)
        assert main(["check", str(tmpdir), "--clients", str(roster), "--month", "13"]) == 2
        assert main(["check", str(tmpdir), "--clients", str(tmpdir / "none.json"),
                     "--month", "11"]) == 2
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


def test_organize_then_check_passes(capsys):
    tmpdir = Path(tempfile.mkdtemp())
    try:
        reports = tmpdir / "reports"
        build_tree(reports)
        roster = tmpdir / "clients.json"
        write_roster(roster)

        assert main(["organize", str(reports)]) == 0
        assert "DRY RUN" in capsys.readouterr().out
        assert (reports / "OZP" / "02604477_VZP_2025_11.pdf").exists()

        assert main(["organize", str(reports), "--execute"]) == 0
        assert (reports / "VZP" / "02604477_VZP_2025_11.pdf").exists()

        assert main(["check", str(reports), "--clients", str(roster),
                     "--month", "11", "--year", "2025"]) == 0
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)
