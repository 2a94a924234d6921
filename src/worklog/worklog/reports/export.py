from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

import pandas as pd

from ..tasks.model import ExportRow
from .service import TrainerReport

EXPORT_COLUMNS = [
    ("date", "Date"),
    ("trainer_name", "Trainer"),
    ("js_id", "JS ID"),
    ("task_type", "Task Type"),
    ("custom_task_name", "Custom Task"),
    ("hours", "Hours"),
    ("start_time", "Start Time"),
    ("end_time", "End Time"),
    ("remarks", "Remarks"),
]

TRAINER_REPORT_COLUMNS = ["Date", "Trainer", "Task Type", "Remarks", "Hours", "Status"]


def export_table(rows: Iterable[ExportRow]) -> list[dict]:
    out: list[dict] = []
    for r in rows:
        data = r.to_dict()
        out.append({label: data[key] if data[key] is not None else "" for key, label in EXPORT_COLUMNS})
    return out


def trainer_report_table(report: TrainerReport, trainer_name: str) -> list[dict]:
    out: list[dict] = []
    for row in report.rows:
        t = row.task
        task_label = t.custom_task_name if t.custom_task_name else t.task_type
        out.append(
            {
                "Date": t.work_date.strftime("%Y-%m-%d"),
                "Trainer": trainer_name,
                "Task Type": task_label,
                "Remarks": t.remarks or "",
                "Hours": f"{t.hours:.1f}",
                "Status": row.daily_status.value.title() if row.daily_status.value.islower() else row.daily_status.value,
            }
        )
    return out


def to_csv_bytes(table: Sequence[dict], fieldnames: Sequence[str]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames))
    writer.writeheader()
    for row in table:
        writer.writerow(row)
    # BOM so Excel opens the file as UTF-8.
    return out.getvalue().encode("utf-8-sig")


def to_xlsx_bytes(table: Sequence[dict], fieldnames: Sequence[str], *, sheet_name: str = "Performance Report") -> bytes:
    df = pd.DataFrame(list(table), columns=list(fieldnames))
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()
