"""
Attendance metric computation.

All arithmetic happens on naive local datetimes (settings.TIME_ZONE) so that
shift times, which are wall-clock times, line up with check-in/out moments.

Rules:
- no check-in or no shift: ABSENT
- checked in only: LATE when check-in is later than shift start + grace
  (late minutes counted from shift start), otherwise PRESENT
- checked out: total = out - in - break; HALF_DAY below the half-day
  threshold; overtime = total - planned shift minutes when positive
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from django.conf import settings
from django.utils import timezone

from HR.attendance.models import AttendanceStatus

DEFAULTS = {
    'GRACE_MINUTES': 30,
    'BREAK_MINUTES': 0,
    'HALF_DAY_MINUTES': 240,
    'EARLY_CHECK_IN_MINUTES': 30,
    'WEEKLY_OFF_DAYS': (5,),
}


def attendance_setting(name):
    return getattr(settings, 'HRM_ATTENDANCE', {}).get(name, DEFAULTS[name])


def is_weekly_off(day: date) -> bool:
    """Saturday by default (Python weekday 5)."""
    return day.weekday() in attendance_setting('WEEKLY_OFF_DAYS')


def to_local(value: datetime) -> datetime:
    """Aware datetime -> naive wall-clock time in the configured zone."""
    if timezone.is_naive(value):
        return value
    return timezone.localtime(value).replace(tzinfo=None)


def diff_minutes(later: datetime, earlier: datetime) -> int:
    return max(0, int((later - earlier).total_seconds() / 60 + 0.5))


@dataclass
class ShiftWindow:
    start: datetime
    end: datetime

    @property
    def planned_minutes(self):
        return diff_minutes(self.end, self.start)


@dataclass
class AttendanceMetrics:
    status: str
    late_minutes: int = 0
    total_work_minutes: int = 0
    overtime_minutes: int = 0


def resolve_shift_window(moment: datetime, start_time, end_time) -> ShiftWindow:
    """
    Shift window that moment belongs to.

    An end time at or before the start time means the shift ends on the next
    day. Before today's start of an overnight shift, yesterday's window is
    used when moment still falls inside it.
    """
    start = datetime.combine(moment.date(), start_time)
    end = datetime.combine(moment.date(), end_time)

    overnight = end <= start
    if overnight:
        end += timedelta(days=1)

    if overnight and moment < start:
        previous = ShiftWindow(start - timedelta(days=1), end - timedelta(days=1))
        if previous.start <= moment <= previous.end:
            return previous

    return ShiftWindow(start, end)


def compute_metrics(check_in=None, check_out=None, shift=None,
                    grace_minutes=None, break_minutes=None, half_day_minutes=None) -> AttendanceMetrics:
    """
    Args:
        check_in / check_out: aware or naive-local datetimes, or None
        shift: WorkShift (anything with start_time / end_time), or None
    """
    if grace_minutes is None:
        grace_minutes = attendance_setting('GRACE_MINUTES')
    if break_minutes is None:
        break_minutes = attendance_setting('BREAK_MINUTES')
    if half_day_minutes is None:
        half_day_minutes = attendance_setting('HALF_DAY_MINUTES')

    if check_in is None or shift is None:
        return AttendanceMetrics(status=AttendanceStatus.ABSENT)

    check_in = to_local(check_in)
    window = resolve_shift_window(check_in, shift.start_time, shift.end_time)

    late_minutes = 0
    if check_in > window.start + timedelta(minutes=grace_minutes):
        late_minutes = diff_minutes(check_in, window.start)

    status = AttendanceStatus.LATE if late_minutes else AttendanceStatus.PRESENT

    if check_out is None:
        return AttendanceMetrics(status=status, late_minutes=late_minutes)

    check_out = to_local(check_out)
    total = max(0, diff_minutes(check_out, check_in) - break_minutes)
    planned = window.planned_minutes - break_minutes

    if total < half_day_minutes:
        status = AttendanceStatus.HALF_DAY

    overtime = total - planned if planned > 0 and total > planned else 0

    return AttendanceMetrics(
        status=status,
        late_minutes=late_minutes,
        total_work_minutes=total,
        overtime_minutes=overtime,
    )
