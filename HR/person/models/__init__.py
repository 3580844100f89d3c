"""
Person Domain Models

Models:
- Employee: employment record linked one-to-one to a login user
"""

from .employee import Employee, EmployeeStatus, EmploymentType, Gender

__all__ = [
    'Employee',
    'EmployeeStatus',
    'EmploymentType',
    'Gender',
]
