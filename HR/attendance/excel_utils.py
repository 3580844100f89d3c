"""
Import/Export Utilities for Attendance (CSV and Excel)
"""
import io
from io import BytesIO

import pandas as pd
from django.core.exceptions import ValidationError
from django.http import HttpResponse
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from HR.attendance.metrics import to_local

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

EXPORT_COLUMNS = [
    'employee_code',
    'employee_id',
    'date',
    'status',
    'check_in_time',
    'check_out_time',
    'total_work_minutes',
    'late_minutes',
    'overtime_minutes',
    'shift_name',
    'notes',
]

IMPORT_COLUMNS = [
    'employee_code',
    'employee_email',
    'date',
    'check_in_time',
    'check_out_time',
    'shift_name',
    'notes',
]


def _format_moment(value):
    return to_local(value).strftime('%Y-%m-%d %H:%M:%S') if value else ''


def export_rows(days):
    """Flatten AttendanceDay rows into EXPORT_COLUMNS order."""
    for day in days:
        yield [
            day.employee.employee_code,
            day.employee_id,
            day.date.isoformat(),
            day.status,
            _format_moment(day.check_in_time),
            _format_moment(day.check_out_time),
            day.total_work_minutes,
            day.late_minutes,
            day.overtime_minutes,
            day.work_shift.name if day.work_shift else '',
            day.notes or '',
        ]


def export_to_csv(days, filename):
    df = pd.DataFrame(list(export_rows(days)), columns=EXPORT_COLUMNS)

    response = HttpResponse(df.to_csv(index=False), content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename={filename}.csv'
    return response


def _write_header(ws, headers, width=20):
    header_fill = PatternFill(start_color='DDEBF7', end_color='DDEBF7', fill_type='solid')
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)
        cell.fill = header_fill
        ws.column_dimensions[cell.column_letter].width = width


def _xlsx_response(wb, filename):
    output = BytesIO()
    wb.save(output)
    output.seek(0)

    response = HttpResponse(output.read(), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename={filename}.xlsx'
    return response


def export_to_excel(days, filename):
    wb = Workbook()
    ws = wb.active
    ws.title = 'Attendance'

    _write_header(ws, EXPORT_COLUMNS)
    for row_idx, values in enumerate(export_rows(days), start=2):
        for col_idx, value in enumerate(values, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    return _xlsx_response(wb, filename)


def create_import_template():
    """Excel template with the import columns and one example row."""
    wb = Workbook()
    ws = wb.active
    ws.title = 'Attendance Import'

    _write_header(ws, IMPORT_COLUMNS)

    example = ['EMP001', '', '2025-01-15', '09:05', '17:30', '', 'Example entry']
    for col_idx, value in enumerate(example, start=1):
        ws.cell(row=2, column=col_idx, value=value)

    return _xlsx_response(wb, 'Attendance_Import_Template')


def _cell(value):
    """NaN -> None, pandas Timestamp -> datetime; anything else unchanged."""
    if pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def read_table(uploaded_file):
    """
    Read an uploaded CSV or Excel file into a DataFrame.

    Blank lines are skipped. Line numbers count the remaining lines,
    header included, so the first data row is line 2.

    Returns:
        (headers, rows) where headers are normalized names and rows is a
        list of (line_number, values)

    Raises:
        ValidationError: For unsupported or unreadable files
    """
    name = (getattr(uploaded_file, 'name', '') or '').lower()
    if not name.endswith(('.csv', '.xlsx')):
        raise ValidationError('Invalid file format. Please upload a .csv or .xlsx file')

    content = io.BytesIO(uploaded_file.read())
    try:
        if name.endswith('.xlsx'):
            df = pd.read_excel(content, engine='openpyxl')
        else:
            df = pd.read_csv(content, dtype=str, encoding='utf-8-sig', skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        return [], []
    except UnicodeDecodeError:
        raise ValidationError('CSV file must be UTF-8 encoded')
    except (ValueError, pd.errors.ParserError) as e:
        raise ValidationError(f'Could not read file: {e}')

    # Clean column names: 'Employee Code', 'employeeCode', 'employee_code' -> 'employeecode'
    df.columns = df.columns.astype(str).str.strip().str.lower().str.replace(r'[^a-z0-9]', '', regex=True)
    df = df.dropna(how='all')

    headers = list(df.columns)
    rows = [
        (line_number, [_cell(value) for value in values])
        for line_number, values in enumerate(df.itertuples(index=False, name=None), start=2)
    ]
    return headers, rows
