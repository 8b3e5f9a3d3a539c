from typing import Optional
from pydantic import BaseModel

from app.schemas.common import UTCDatetime


class AdminCreate(BaseModel):
    email: Optional[str] = None
    company_name: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = None


class AdminLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminResponse(BaseModel):
    id: int
    email: str
    company_name: str
    role: str
    created_at: Optional[UTCDatetime] = None

    class Config:
        from_attributes = True


class PermissionsResponse(BaseModel):
    role: str
    role_name: str
    role_level: int
    can_access_management_dashboard: bool
    can_use_messaging_center: bool
    can_access_accounts: bool
    can_manage_global_admins: bool
    can_delete: bool
    can_create_auction: bool
    has_global_view: bool
    auctions_label: str
