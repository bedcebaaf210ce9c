"""
Results output: Excel workbook and JSON summary of one check run.

Workbook sheets:
  - Missing Reports: clients without a complete set of reports
  - Errors:          files that could not be parsed
  - Misplaced Files: parsed files sitting in a folder of another insurer
"""

import datetime
import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from report_checker.matcher import available_insurers, ico_key, missing_insurers
from report_checker.models import Client, WalkResult

logger = logging.getLogger(__name__)


def _names(insurers) -> str:
    return ", ".join(sorted(str(i) for i in insurers))


def missing_rows(clients: Iterable[Client], walk_result: WalkResult,
                 year: int, month: int) -> List[list]:
    available = available_insurers(walk_result.parsed_file_names, year, month)
    rows = []
    for c in clients:
        if c.report_generated:
            continue
        have = available.get(ico_key(c.ico), frozenset())
        rows.append([c.name, c.ico, _names(c.required_insurers or ()), _names(have),
                     _names(missing_insurers(c, available))])
    return rows


def _write_sheet(ws, headers: list, widths: list, rows: List[list]):
    hdr_font = Font(name="Arial", bold=True, color="FFFFFF", size=11)
    hdr_fill = PatternFill("solid", fgColor="2F5496")
    hdr_align = Alignment(horizontal="center", vertical="center", wrap_text=True)
    thin = Side(style="thin", color="CCCCCC")
    brd = Border(top=thin, bottom=thin, left=thin, right=thin)

    for i, (h, w) in enumerate(zip(headers, widths), 1):
        c = ws.cell(row=1, column=i, value=h)
        c.font = hdr_font
        c.fill = hdr_fill
        c.alignment = hdr_align
        c.border = brd
        ws.column_dimensions[get_column_letter(i)].width = w
    ws.freeze_panes = "A2"

    for r, values in enumerate(rows, 2):
        for ci, value in enumerate(values, 1):
            ws.cell(row=r, column=ci, value=value).border = brd

    if rows:
        ws.auto_filter.ref = f"A1:{get_column_letter(len(headers))}{len(rows) + 1}"


def write_results_excel(excel_path: Union[str, Path], clients: Iterable[Client],
                        walk_result: WalkResult, year: int, month: int) -> Path:
    excel_path = Path(excel_path)
    clients = list(clients)

    wb = Workbook()
    ws = wb.active
    ws.title = "Missing Reports"
    missing = missing_rows(clients, walk_result, year, month)
    _write_sheet(ws, ["Client", "ICO", "Required Insurers", "Available Insurers",
                      "Missing Insurers"], [38, 12, 30, 30, 30], missing)

    _write_sheet(wb.create_sheet("Errors"), ["File", "Error"], [50, 80],
                 [[e.file_name, e.error_message] for e in walk_result.error_reports])

    misplaced = [[pf.file_path, str(pf.insurer), pf.parent_dir_name]
                 for pf in walk_result.parsed_file_names if pf.invalid_directory]
    _write_sheet(wb.create_sheet("Misplaced Files"), ["File", "Insurer", "Parent Folder"],
                 [80, 14, 30], misplaced)

    excel_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(excel_path))
    logger.info("Results Excel: %s (%d clients missing reports for %04d-%02d)",
                excel_path, len(missing), year, month)
    return excel_path


def write_summary_json(json_path: Union[str, Path], clients: Iterable[Client],
                       walk_result: WalkResult, year: int, month: int) -> Path:
    json_path = Path(json_path)
    clients = list(clients)
    available = available_insurers(walk_result.parsed_file_names, year, month)
    data = {
        "generated": datetime.datetime.now().isoformat(),
        "period": f"{year:04d}-{month:02d}",
        "clients": [
            {"name": c.name, "ico": c.ico, "report_generated": c.report_generated,
             "required_insurers": sorted(str(i) for i in c.required_insurers or ()),
             "missing_insurers": sorted(str(i) for i in missing_insurers(c, available))}
            for c in clients
        ],
        "errors": [
            {"file": e.file_name, "message": e.error_message,
             "kind": e.kind.value if e.kind else None}
            for e in walk_result.error_reports
        ],
        "misplaced": [
            {"file": pf.file_path, "insurer": str(pf.insurer), "parent": pf.parent_dir_name}
            for pf in walk_result.parsed_file_names if pf.invalid_directory
        ],
    }
    json_path.parent.mkdir(parents=True, exist_ok=True)
    json_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
    logger.info("Summary JSON: %s", json_path)
    return json_path
