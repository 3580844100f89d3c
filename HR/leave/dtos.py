from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class LeaveTypeCreateDTO:
    """DTO for creating a leave type in the caller's company"""
    name: str
    code: Optional[str] = None
    description: str = ''
    is_active: bool = True


@dataclass
class LeaveTypeUpdateDTO:
    """DTO for updating an existing leave type"""
    leave_type_id: int  # Primary Key
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


@dataclass
class LeaveRequestCreateDTO:
    """
    DTO for submitting a leave request.

    employee_id is only accepted from company-level users filing on behalf
    of an employee.
    """
    leave_type_id: int
    start_date: date
    end_date: date
    reason: str
    employee_id: Optional[int] = None


@dataclass
class LeaveReviewDTO:
    """DTO for approving or rejecting a request"""
    request_id: int  # Primary Key
    review_note: str = ''
