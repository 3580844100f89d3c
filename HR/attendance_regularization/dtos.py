from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass
class RegularizationCreateDTO:
    """
    DTO for filing a regularization.

    employee_id is only accepted from company-level users filing on behalf
    of an employee.
    """
    date: date
    request_type: str
    reason: str
    requested_check_in_time: Optional[time] = None
    requested_check_out_time: Optional[time] = None
    employee_id: Optional[int] = None


@dataclass
class RegularizationReviewDTO:
    """DTO for approving or rejecting a regularization"""
    regularization_id: int  # Primary Key
    review_note: str = ''
