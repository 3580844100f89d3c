from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass
class CheckInOutDTO:
    """
    DTO for check-in / check-out.

    employee_id is honoured only for company-level callers; everyone else
    acts on their own employee record.
    """
    employee_id: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: str = ''


@dataclass
class ManualAttendanceDTO:
    """DTO for creating (or overwriting) an attendance day by an HR admin"""
    employee_id: int
    date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    shift_id: Optional[int] = None
    status: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class AttendanceUpdateDTO:
    """DTO for updating an attendance day; None keeps the stored value"""
    attendance_id: int  # Primary Key
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: Optional[str] = None
    notes: Optional[str] = None
