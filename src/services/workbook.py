"""
Excel export of the team analysis.
"""

import sys
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import PROFESSIONAL_SERVICES, SUPPORT_MAINTENANCE
from services.capacity import TeamAnalysis

MEMBER_HEADERS = ["Team Member", "Email", "Entries", "Hours", SUPPORT_MAINTENANCE, PROFESSIONAL_SERVICES]
MONTH_HEADERS = ["Month", "Entries", "Hours", SUPPORT_MAINTENANCE, PROFESSIONAL_SERVICES]
CAPACITY_ROWS = [
    ("Months analyzed", "months_analyzed"),
    ("Expected hours", "expected_hours"),
    ("Actual hours", "actual_hours"),
    ("Utilization %", "utilization_rate"),
    ("Remaining capacity", "remaining_capacity"),
    ("Average hours/month", "avg_monthly_hours"),
]


def write_headers(ws, headers: list[str]):
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)


def write_members_sheet(ws, analysis: TeamAnalysis):
    """
    One row per team member, heaviest first, with a SUM total row.
    """
    write_headers(ws, MEMBER_HEADERS)

    members = analysis.members_by_hours()
    for row_idx, (name, member) in enumerate(members, start=2):
        row_data = [
            name,
            member.email,
            member.entries,
            round(member.hours, 2),
            round(member.hours_for(SUPPORT_MAINTENANCE), 2),
            round(member.hours_for(PROFESSIONAL_SERVICES), 2),
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    total_row = len(members) + 2
    last_data_row = total_row - 1
    ws.cell(row=total_row, column=1, value="Total").font = Font(bold=True)
    for col_idx in range(3, len(MEMBER_HEADERS) + 1):
        col_letter = get_column_letter(col_idx)
        ws.cell(row=total_row, column=col_idx, value=f"=SUM({col_letter}2:{col_letter}{last_data_row})")


def write_months_sheet(ws, analysis: TeamAnalysis):
    write_headers(ws, MONTH_HEADERS)

    for row_idx, month_key in enumerate(sorted(analysis.by_month), start=2):
        month = analysis.by_month[month_key]
        row_data = [
            month_key,
            month.entries,
            round(month.hours, 2),
            round(month.hours_for(SUPPORT_MAINTENANCE), 2),
            round(month.hours_for(PROFESSIONAL_SERVICES), 2),
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def write_capacity_sheet(ws, analysis: TeamAnalysis):
    capacity = analysis.capacity.model_dump()
    capacity["months_analyzed"] = analysis.months_analyzed

    for row_idx, (label, key) in enumerate(CAPACITY_ROWS, start=1):
        ws.cell(row=row_idx, column=1, value=label).font = Font(bold=True)
        value = capacity[key]
        ws.cell(row=row_idx, column=2, value=round(value, 2) if isinstance(value, float) else value)


def create_analysis_workbook(analysis: TeamAnalysis, output_path: Path):
    """
    Save the analysis as an Excel workbook.

    Sheet 1: "Capacity" - SOW utilization figures
    Sheet 2: "Team Members" - hours per member and work type
    Sheet 3: "Monthly" - hours per month and work type
    """
    wb = Workbook()

    ws_capacity = wb.active
    ws_capacity.title = "Capacity"
    write_capacity_sheet(ws_capacity, analysis)

    write_members_sheet(wb.create_sheet(title="Team Members"), analysis)
    write_months_sheet(wb.create_sheet(title="Monthly"), analysis)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    print(f"Saved Excel report to: {output_path}", file=sys.stderr)
