"""Admin accounts: signup, login and capability lookup."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.api.deps import find_admin, get_actor
from app.database import get_db
from app.models.admin import Admin
from app.schemas.admin import AdminCreate, AdminLogin, AdminResponse, PermissionsResponse
from app.services.permissions import (
    PRIVILEGED_ROLES,
    get_permissions,
    is_known_role,
    role_level,
    role_name,
)
from app.utils import normalize_email

router = APIRouter(prefix="/api", tags=["admins"])
logger = logging.getLogger(__name__)


@router.get("/admins", response_model=list[AdminResponse])
def list_admins(db: Session = Depends(get_db)):
    return db.query(Admin).order_by(Admin.created_at.desc(), Admin.id.desc()).all()


@router.post("/admins", response_model=AdminResponse, status_code=201)
def create_admin(
    payload: AdminCreate,
    response: Response,
    actor: Optional[Admin] = Depends(get_actor),
    db: Session = Depends(get_db),
):
    """Sign up an account. Returns the existing account (200) when the email is taken."""
    email = normalize_email(payload.email)
    company_name = (payload.company_name or "").strip()
    role = (payload.role or "").strip()
    if not email or not company_name or not role:
        raise HTTPException(status_code=400, detail="email, company_name, and role are required")
    if not is_known_role(role):
        raise HTTPException(status_code=400, detail=f"Unknown role '{role}'")

    existing = find_admin(db, email)
    if existing:
        response.status_code = 200
        return existing

    if role in PRIVILEGED_ROLES and not (actor and get_permissions(actor.role).can_manage_global_admins):
        raise HTTPException(status_code=403, detail="Only the Product Owner can create administrator accounts")

    admin = Admin(email=email, company_name=company_name, role=role)
    if payload.password:
        admin.set_password(payload.password)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Created %s account %s", role, email)
    return admin


@router.post("/admin/login", response_model=AdminResponse)
def login(payload: AdminLogin, db: Session = Depends(get_db)):
    if not normalize_email(payload.email):
        raise HTTPException(status_code=400, detail="email is required")
    admin = find_admin(db, payload.email)
    if not admin or not admin.check_password(payload.password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return admin


@router.get("/admins/{admin_id}/permissions", response_model=PermissionsResponse)
def admin_permissions(admin_id: int, db: Session = Depends(get_db)):
    admin = db.query(Admin).filter(Admin.id == admin_id).first()
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")
    return PermissionsResponse(
        role=admin.role,
        role_name=role_name(admin.role),
        role_level=role_level(admin.role),
        **get_permissions(admin.role).as_dict(),
    )
