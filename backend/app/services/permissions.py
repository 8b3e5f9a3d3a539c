"""
Role -> capability lookup.

Every role check in the API goes through get_permissions(); routes never
compare role strings themselves. Only product_owner and global_admin are
true admins. internal_user is a buyer: it can run its own auctions but sees
nothing beyond them. Unknown roles get NO_PERMISSIONS.
"""
from dataclasses import asdict, dataclass
from typing import Optional

from app.models.admin import AdminRole


@dataclass(frozen=True)
class Permissions:
    can_access_management_dashboard: bool = False
    can_use_messaging_center: bool = False
    can_access_accounts: bool = False
    can_manage_global_admins: bool = False
    can_delete: bool = False
    can_create_auction: bool = False
    has_global_view: bool = False

    @property
    def auctions_label(self) -> str:
        return "All Auctions" if self.has_global_view else "My Auctions"

    def as_dict(self) -> dict:
        return {**asdict(self), "auctions_label": self.auctions_label}


NO_PERMISSIONS = Permissions()

_CAPABILITIES: dict[str, Permissions] = {
    AdminRole.PRODUCT_OWNER: Permissions(
        can_access_management_dashboard=True,
        can_use_messaging_center=True,
        can_access_accounts=True,
        can_manage_global_admins=True,
        can_delete=True,
        can_create_auction=True,
        has_global_view=True,
    ),
    AdminRole.GLOBAL_ADMIN: Permissions(
        can_access_management_dashboard=True,
        can_use_messaging_center=True,
        can_access_accounts=True,
        can_create_auction=True,
        has_global_view=True,
    ),
    AdminRole.INTERNAL_USER: Permissions(can_create_auction=True),
    AdminRole.EXTERNAL_GUEST: NO_PERMISSIONS,
}

_ROLE_NAMES = {
    AdminRole.PRODUCT_OWNER: "Product Owner",
    AdminRole.GLOBAL_ADMIN: "Global Administrator",
    AdminRole.INTERNAL_USER: "Internal User",
    AdminRole.EXTERNAL_GUEST: "External Guest",
}

_ROLE_LEVELS = {
    AdminRole.PRODUCT_OWNER: 4,
    AdminRole.GLOBAL_ADMIN: 3,
    AdminRole.INTERNAL_USER: 2,
    AdminRole.EXTERNAL_GUEST: 1,
}

PRIVILEGED_ROLES = (AdminRole.PRODUCT_OWNER, AdminRole.GLOBAL_ADMIN)


def get_permissions(role: Optional[str]) -> Permissions:
    return _CAPABILITIES.get((role or "").strip(), NO_PERMISSIONS)


def is_known_role(role: Optional[str]) -> bool:
    return (role or "").strip() in _CAPABILITIES


def role_name(role: Optional[str]) -> str:
    return _ROLE_NAMES.get((role or "").strip(), "Unknown")


def role_level(role: Optional[str]) -> int:
    return _ROLE_LEVELS.get((role or "").strip(), 0)
