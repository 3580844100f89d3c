from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass
class DepartmentCreateDTO:
    """DTO for creating a department in the caller's company"""
    name: str
    code: Optional[str] = None
    description: str = ''
    is_active: bool = True


@dataclass
class DepartmentUpdateDTO:
    """DTO for updating an existing department"""
    department_id: int  # Primary Key
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


@dataclass
class DesignationCreateDTO:
    """DTO for creating a designation in the caller's company"""
    name: str
    code: Optional[str] = None
    description: str = ''
    is_active: bool = True


@dataclass
class DesignationUpdateDTO:
    """DTO for updating an existing designation"""
    designation_id: int  # Primary Key
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


@dataclass
class WorkShiftCreateDTO:
    """DTO for creating a work shift"""
    name: str
    start_time: time
    end_time: time
    code: Optional[str] = None
    description: str = ''
    is_active: bool = True


@dataclass
class WorkShiftUpdateDTO:
    """DTO for updating a work shift"""
    work_shift_id: int  # Primary Key
    name: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    code: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
