from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class NoticeCreateDTO:
    """
    DTO for creating a notice.

    audiences holds dicts with audience_type plus the matching target key
    (department_id, designation_id, employee_id, work_shift_id or role).
    """
    title: str
    body: str
    priority: str = 'NORMAL'
    status: str = 'DRAFT'
    publish_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    is_company_wide: bool = True
    audiences: List[dict] = field(default_factory=list)


@dataclass
class NoticeUpdateDTO:
    """DTO for updating a notice; audiences, when given, replace the old ones"""
    notice_id: int  # Primary Key
    title: Optional[str] = None
    body: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    publish_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    is_company_wide: Optional[bool] = None
    audiences: Optional[List[dict]] = None
