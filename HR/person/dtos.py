"""
Data Transfer Objects for the Employee domain
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional


@dataclass
class EmployeeCreateDTO:
    """DTO for creating an employee together with its login user"""
    email: str
    password: str
    first_name: str
    last_name: str
    middle_name: str = ''
    employee_code: Optional[str] = None
    department_id: Optional[int] = None
    designation_id: Optional[int] = None
    work_shift_id: Optional[int] = None
    employment_type: str = 'full_time'
    gender: str = ''
    date_of_birth: Optional[date] = None
    join_date: Optional[date] = None
    probation_end: Optional[date] = None
    work_email: str = ''
    personal_email: str = ''
    phone: str = ''
    address: str = ''
    emergency_contact_name: str = ''
    emergency_contact_phone: str = ''
    base_salary: Optional[Decimal] = None
    image_url: str = ''
    image: Any = None  # uploaded photo


@dataclass
class EmployeeUpdateDTO:
    """
    DTO for updating an employee.

    None means "leave unchanged"; placement ids are cleared by sending 0.
    """
    employee_id: int  # Primary Key
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    department_id: Optional[int] = None
    designation_id: Optional[int] = None
    work_shift_id: Optional[int] = None
    employment_type: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    join_date: Optional[date] = None
    probation_end: Optional[date] = None
    work_email: Optional[str] = None
    personal_email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    base_salary: Optional[Decimal] = None
    image_url: Optional[str] = None
    image: Any = None


@dataclass
class EmployeeStatusUpdateDTO:
    employee_id: int
    status: str
