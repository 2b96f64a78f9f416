"""Tabular exports shared by the dashboard table and the reports page."""
from datetime import datetime
from decimal import Decimal
from io import BytesIO, StringIO
import csv
from typing import Any, Dict, List, Mapping, Optional, Sequence

from django.core.exceptions import ValidationError
from django.http import HttpResponse
from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Font
from reportlab.lib.pagesizes import landscape, letter
from reportlab.pdfgen import canvas

FORMATS = ('pdf', 'csv', 'xlsx')

CONTENT_TYPES = {
    'pdf': 'application/pdf',
    'csv': 'text/csv; charset=utf-8',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
}


def _plain(v: Any) -> Any:
    if isinstance(v, Decimal):
        return float(v)
    if isinstance(v, datetime):
        return v.strftime('%Y-%m-%d %H:%M')
    return v


def render_csv(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> bytes:
    sio = StringIO()
    writer = csv.writer(sio)
    writer.writerow(headers)
    for r in rows:
        writer.writerow(['' if v is None else _plain(v) for v in r])
    # BOM so spreadsheet apps detect utf-8
    return sio.getvalue().encode('utf-8-sig')


def render_xlsx(headers: Sequence[str], rows: Sequence[Sequence[Any]], sheet_title: str = 'report') -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title[:31]
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for r in rows:
        ws.append([_plain(v) for v in r])
    buf = BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf.getvalue()


def _filters_line(filters: Optional[Mapping[str, Any]]) -> str:
    parts = [f'{k}: {v}' for k, v in (filters or {}).items() if v not in (None, '', 'all')]
    return 'Filters: ' + (', '.join(parts) if parts else 'none')


def render_pdf(
    title: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    summary: Optional[Mapping[str, Any]] = None,
    filters: Optional[Mapping[str, Any]] = None,
    breakdowns: Optional[Mapping[str, Mapping[str, int]]] = None,
) -> bytes:
    """Landscape report: header block, executive summary, breakdowns, table.

    Rows are paginated; every page carries a page-number footer.
    """
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=landscape(letter))
    width, height = landscape(letter)
    x0 = 36
    row_h = 12
    page = [1]

    def footer():
        c.setFont('Helvetica', 7)
        c.drawRightString(width - x0, 18, f'Page {page[0]}')

    def new_page():
        footer()
        c.showPage()
        page[0] += 1
        return height - 36

    c.setFont('Helvetica-Bold', 14)
    c.drawString(x0, height - 36, title)
    c.setFont('Helvetica', 8)
    c.drawString(x0, height - 50, f'Generated: {timezone.localtime():%Y-%m-%d %H:%M}')
    c.drawString(x0, height - 62, _filters_line(filters))
    y = height - 84

    if summary:
        c.setFont('Helvetica-Bold', 10)
        c.drawString(x0, y, 'Executive Summary')
        y -= row_h + 2
        c.setFont('Helvetica', 8)
        for label, value in summary.items():
            c.drawString(x0 + 8, y, f'{label}: {value}')
            y -= row_h

    for name, counts in (breakdowns or {}).items():
        if y < 80:
            y = new_page()
        y -= 4
        c.setFont('Helvetica-Bold', 10)
        c.drawString(x0, y, name)
        y -= row_h + 2
        c.setFont('Helvetica', 8)
        for label, value in counts.items():
            if y < 36:
                y = new_page()
                c.setFont('Helvetica', 8)
            c.drawString(x0 + 8, y, f'{label}: {value}')
            y -= row_h

    col_w = (width - 2 * x0) / len(headers) if headers else (width - 2 * x0)

    def header_row(y):
        c.setFont('Helvetica-Bold', 8)
        for i, h in enumerate(headers):
            c.drawString(x0 + i * col_w, y, str(h)[:24])
        c.line(x0, y - 3, width - x0, y - 3)
        c.setFont('Helvetica', 8)
        return y - row_h - 2

    if y < 80:
        y = new_page()
    y = header_row(y - 8)
    for r in rows:
        if y < 36:
            y = header_row(new_page())
        for i in range(len(headers)):
            v = r[i] if i < len(r) else ''
            c.drawString(x0 + i * col_w, y, ('' if v is None else str(_plain(v)))[:40])
        y -= row_h

    footer()
    c.showPage()
    c.save()
    return buf.getvalue()


def export_response(
    export_format: str,
    basename: str,
    headers: Sequence[str],
    rows: List[Sequence[Any]],
    title: str = '',
    summary: Optional[Dict[str, Any]] = None,
    filters: Optional[Dict[str, Any]] = None,
    breakdowns: Optional[Dict[str, Dict[str, int]]] = None,
) -> HttpResponse:
    export_format = (export_format or 'pdf').lower()
    if export_format not in FORMATS:
        raise ValidationError({'format': f'Unsupported export format {export_format!r}.'})

    if export_format == 'xlsx':
        data = render_xlsx(headers, rows, sheet_title=basename)
    elif export_format == 'csv':
        data = render_csv(headers, rows)
    else:
        data = render_pdf(title or basename, headers, rows, summary=summary, filters=filters, breakdowns=breakdowns)

    filename = f'{basename}_{timezone.localdate():%Y-%m-%d}.{export_format}'
    resp = HttpResponse(data, content_type=CONTENT_TYPES[export_format])
    resp['Content-Disposition'] = f'attachment; filename="{filename}"'
    return resp
