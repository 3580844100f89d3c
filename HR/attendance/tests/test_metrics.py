from datetime import date, datetime, time

from django.test import SimpleTestCase

from HR.attendance.metrics import compute_metrics, diff_minutes, is_weekly_off, resolve_shift_window
from HR.attendance.models import AttendanceStatus
from HR.work_structures.models import WorkShift

DAY = WorkShift(name='Day', start_time=time(9, 0), end_time=time(17, 0))
NIGHT = WorkShift(name='Night', start_time=time(22, 0), end_time=time(6, 0))


def at(day, hour, minute=0):
    return datetime(2025, 1, day, hour, minute)


class ComputeMetricsTest(SimpleTestCase):

    def test_no_check_in_is_absent(self):
        self.assertEqual(compute_metrics(None, None, DAY).status, AttendanceStatus.ABSENT)

    def test_no_shift_is_absent(self):
        self.assertEqual(compute_metrics(at(15, 9), None, None).status, AttendanceStatus.ABSENT)

    def test_within_grace_is_present(self):
        metrics = compute_metrics(at(15, 9, 30), None, DAY)
        self.assertEqual(metrics.status, AttendanceStatus.PRESENT)
        self.assertEqual(metrics.late_minutes, 0)

    def test_late_minutes_count_from_shift_start(self):
        metrics = compute_metrics(at(15, 9, 45), None, DAY)
        self.assertEqual(metrics.status, AttendanceStatus.LATE)
        self.assertEqual(metrics.late_minutes, 45)

    def test_full_day_with_overtime(self):
        metrics = compute_metrics(at(15, 9), at(15, 18), DAY)
        self.assertEqual(metrics.status, AttendanceStatus.PRESENT)
        self.assertEqual(metrics.total_work_minutes, 540)
        self.assertEqual(metrics.overtime_minutes, 60)

    def test_short_day_is_half_day(self):
        metrics = compute_metrics(at(15, 9), at(15, 12), DAY)
        self.assertEqual(metrics.status, AttendanceStatus.HALF_DAY)
        self.assertEqual(metrics.total_work_minutes, 180)
        self.assertEqual(metrics.overtime_minutes, 0)

    def test_break_is_deducted(self):
        metrics = compute_metrics(at(15, 9), at(15, 17), DAY, break_minutes=60)
        self.assertEqual(metrics.total_work_minutes, 420)
        self.assertEqual(metrics.overtime_minutes, 0)

    def test_overnight_shift(self):
        metrics = compute_metrics(at(15, 22, 10), at(16, 6, 10), NIGHT)
        self.assertEqual(metrics.status, AttendanceStatus.PRESENT)
        self.assertEqual(metrics.total_work_minutes, 480)
        self.assertEqual(metrics.overtime_minutes, 0)


class ShiftWindowTest(SimpleTestCase):

    def test_day_shift(self):
        window = resolve_shift_window(at(15, 8), DAY.start_time, DAY.end_time)
        self.assertEqual(window.start, at(15, 9))
        self.assertEqual(window.planned_minutes, 480)

    def test_after_midnight_belongs_to_previous_night(self):
        window = resolve_shift_window(at(16, 3), NIGHT.start_time, NIGHT.end_time)
        self.assertEqual(window.start, at(15, 22))
        self.assertEqual(window.end, at(16, 6))

    def test_evening_before_night_shift(self):
        window = resolve_shift_window(at(16, 21, 45), NIGHT.start_time, NIGHT.end_time)
        self.assertEqual(window.start, at(16, 22))


class HelpersTest(SimpleTestCase):

    def test_diff_minutes_rounds_half_up(self):
        self.assertEqual(diff_minutes(datetime(2025, 1, 15, 9, 1, 30), at(15, 9)), 2)
        self.assertEqual(diff_minutes(datetime(2025, 1, 15, 9, 1, 29), at(15, 9)), 1)

    def test_diff_minutes_never_negative(self):
        self.assertEqual(diff_minutes(at(15, 8), at(15, 9)), 0)

    def test_saturday_is_weekly_off(self):
        self.assertTrue(is_weekly_off(date(2025, 1, 18)))
        self.assertFalse(is_weekly_off(date(2025, 1, 17)))
