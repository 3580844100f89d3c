from dataclasses import dataclass
from typing import Optional


@dataclass
class SuperAdminCreateDTO:
    """DTO for bootstrapping the super admin account"""
    email: str
    password: str
    name: str = ''
    phone_number: str = ''


@dataclass
class ChangePasswordDTO:
    """DTO for a user changing their own password"""
    current_password: str
    new_password: str


@dataclass
class UserCreateDTO:
    """DTO for a super admin creating a user of any role"""
    email: str
    password: str
    role: str
    name: str = ''
    phone_number: str = ''
    company_id: Optional[int] = None
    is_active: bool = True


@dataclass
class UserUpdateDTO:
    """DTO for a super admin updating a user (company cannot change)"""
    user_id: int  # Primary Key
    email: Optional[str] = None
    name: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None


@dataclass
class CompanyUserCreateDTO:
    """DTO for a company admin creating a user inside their own company"""
    email: str
    password: str
    role: str = 'employee'
    name: str = ''
    phone_number: str = ''
    is_active: bool = True


@dataclass
class CompanyUserUpdateDTO:
    """DTO for a company admin updating a user of their own company"""
    user_id: int  # Primary Key
    name: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None
