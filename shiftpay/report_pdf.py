from __future__ import annotations

from collections import defaultdict
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    HRFlowable,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from .models import PayrollResult, PayrollSummaryItem

BASE_TABLE_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
    ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 8),
    ("LEFTPADDING", (0, 0), (-1, -1), 5),
    ("RIGHTPADDING", (0, 0), (-1, -1), 5),
    ("TOPPADDING", (0, 0), (-1, -1), 3),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
]


def _money(value: float) -> str:
    return f"${value:,.2f}"


def _fmt_date(value: date) -> str:
    return value.strftime("%b %d")


def _date_list(count: int, dates: Sequence[date]) -> str:
    if not count:
        return "0"
    return f"{count} ({', '.join(_fmt_date(d) for d in dates)})"


def _period_label(result: PayrollResult) -> str:
    return f"{result.period_start.strftime('%b %d')} - {result.period_end.strftime('%b %d, %Y')}"


def _table(rows: List[List[Any]], col_widths: List[float], extra_style: List[tuple] | None = None) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle(BASE_TABLE_STYLE + (extra_style or [])))
    return table


def _company_summary(result: PayrollResult) -> Table:
    totals = result.totals
    rows = [
        ["Metric", "Total"],
        ["Employees", str(totals.employee_count)],
        ["Weeks in period", str(result.weeks_in_period)],
        ["Scheduled hours", f"{totals.scheduled_hours:.1f}h"],
        ["Actual hours", f"{totals.actual_hours:.1f}h"],
        ["Overtime hours", f"{totals.overtime_hours:.1f}h"],
        ["Extra shifts", str(totals.extra_shifts)],
        ["Missing shifts", str(totals.missing_shifts)],
        ["Overtime pay", _money(totals.overtime_pay)],
        ["Total amount", _money(totals.total_amount)],
    ]
    return _table(rows, [2.5 * inch, 1.6 * inch], [("ALIGN", (1, 1), (-1, -1), "RIGHT")])


def _location_rollup(result: PayrollResult) -> Table:
    rows = [["Location", "Shifts", "Hours", "Amount"]]
    for location in result.location_summary:
        rows.append(
            [
                location.location_name,
                str(location.shift_count),
                f"{location.total_hours:.1f}",
                _money(location.total_amount),
            ]
        )
    return _table(rows, [3.0 * inch, 1.0 * inch, 1.0 * inch, 1.4 * inch], [("ALIGN", (1, 1), (-1, -1), "RIGHT")])


def _employee_table(items: List[PayrollSummaryItem], body_style: ParagraphStyle) -> Table:
    rows: List[List[Any]] = [
        ["Employee", "Role", "Days\nworked", "Conf.\ndays", "Extra\nshifts", "Missing", "Vacation", "Medical", "Sched.\nhrs", "Actual\nhrs", "OT\npay", "Amount"]
    ]
    for item in items:
        rows.append(
            [
                Paragraph(escape(item.employee_name or item.employee_id), body_style),
                item.role,
                str(item.days_worked),
                str(item.days_confirmed),
                Paragraph(_date_list(item.extra_shifts, item.extra_shift_dates), body_style),
                Paragraph(_date_list(len(item.unexcused_missed_dates), item.unexcused_missed_dates), body_style),
                str(item.vacation_days),
                str(item.medical_days),
                f"{item.scheduled_hours:.1f}",
                f"{item.actual_hours:.1f}",
                _money(item.overtime_pay),
                _money(item.total_amount),
            ]
        )
    rows.append(
        [
            "TOTAL",
            "",
            str(sum(i.days_worked for i in items)),
            str(sum(i.days_confirmed for i in items)),
            str(sum(i.extra_shifts for i in items)),
            str(sum(len(i.unexcused_missed_dates) for i in items)),
            str(sum(i.vacation_days for i in items)),
            str(sum(i.medical_days for i in items)),
            f"{sum(i.scheduled_hours for i in items):.1f}",
            f"{sum(i.actual_hours for i in items):.1f}",
            _money(sum(i.overtime_pay for i in items)),
            _money(sum(i.total_amount for i in items)),
        ]
    )
    widths = [1.6, 0.9, 0.55, 0.5, 1.3, 1.3, 0.6, 0.6, 0.55, 0.55, 0.7, 0.8]
    return _table(
        rows,
        [w * inch for w in widths],
        [
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ("BACKGROUND", (0, -1), (-1, -1), colors.whitesmoke),
            ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
        ],
    )


def export_payroll_report_pdf(result: PayrollResult, output_path: Path) -> Path:
    styles = getSampleStyleSheet()
    header_style = ParagraphStyle("report_header", parent=styles["Heading3"], fontSize=11)
    body_style = ParagraphStyle("report_body", parent=styles["Normal"], fontSize=8)
    period = _period_label(result)

    story: List[Any] = [Paragraph("Payroll Summary Report", styles["Title"]), Paragraph(period, styles["Normal"])]
    story.append(HRFlowable(width="100%"))
    story.append(Spacer(1, 8))
    story.append(Paragraph("Company-Wide Summary", header_style))
    story.append(_company_summary(result))
    story.append(Spacer(1, 12))
    story.append(Paragraph("Location Totals", header_style))
    story.append(_location_rollup(result))

    location_names: Dict[str, str] = {loc.location_id: loc.location_name for loc in result.location_summary}
    by_location: Dict[str, List[PayrollSummaryItem]] = defaultdict(list)
    for item in result.summary:
        home = item.home_location_id
        by_location[location_names.get(home, home) if home else "Unassigned"].append(item)

    for name in sorted(by_location):
        items = by_location[name]
        story.append(PageBreak())
        plural = "" if len(items) == 1 else "s"
        story.append(Paragraph(escape(f"{name} - {len(items)} employee{plural}"), header_style))
        story.append(Paragraph(period, body_style))
        story.append(Spacer(1, 6))
        story.append(_employee_table(items, body_style))

    anomaly_rows: List[List[Any]] = [["Employee", "Issue"]]
    for item in result.summary:
        for anomaly in item.anomalies:
            anomaly_rows.append([item.employee_name or item.employee_id, anomaly])
    if len(anomaly_rows) > 1:
        story.append(PageBreak())
        story.append(Paragraph("Anomalies", header_style))
        story.append(_table(anomaly_rows, [2.5 * inch, 5.5 * inch]))

    cross_rows: List[List[Any]] = [["Employee", "Date", "Worked at"]]
    for item in result.summary:
        for shift in item.cross_location_shifts:
            cross_rows.append([item.employee_name or item.employee_id, shift.shift_date.strftime("%b %d, %Y"), shift.location_name])
    if len(cross_rows) > 1:
        story.append(PageBreak())
        story.append(Paragraph("Cross-Location Work", header_style))
        story.append(_table(cross_rows, [2.5 * inch, 1.5 * inch, 3.0 * inch]))

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(letter),
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
        title="Payroll Summary Report",
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc.build(story)
    return output_path
