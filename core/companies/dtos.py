from dataclasses import dataclass
from datetime import date
from typing import Any, Optional


@dataclass
class CompanyWithAdminCreateDTO:
    """DTO for creating a company together with its first company admin"""
    company_name: str
    admin_email: str
    admin_password: str
    admin_name: str = ''
    admin_phone: str = ''
    company_code: Optional[str] = None
    logo_url: str = ''
    logo: Any = None  # uploaded image file
    industry: str = ''
    address: str = ''
    city: str = ''
    country: str = ''
    plan_expires_at: Optional[date] = None
    max_employees: Optional[int] = None


@dataclass
class CompanyUpdateDTO:
    """DTO for updating a company profile"""
    company_id: int  # Primary Key
    name: Optional[str] = None
    code: Optional[str] = None
    logo_url: Optional[str] = None
    logo: Any = None
    industry: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    plan_expires_at: Optional[date] = None
    max_employees: Optional[int] = None


@dataclass
class CompanyStatusUpdateDTO:
    """DTO for moving a company between active / suspended / archived"""
    company_id: int
    status: str
