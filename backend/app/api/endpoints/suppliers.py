from fastapi import APIRouter, Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.supplier import Supplier
from app.schemas.supplier import SupplierResponse

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.get("", response_model=list[SupplierResponse])
def list_suppliers(q: str | None = None, db: Session = Depends(get_db)):
    """Supplier directory, most recently invited first. q searches email, company and contact."""
    query = db.query(Supplier)
    term = (q or "").strip()
    if term:
        like = f"%{term}%"
        query = query.filter(
            or_(
                Supplier.contact_email.ilike(like),
                Supplier.company_name.ilike(like),
                Supplier.contact_name.ilike(like),
            )
        )
    return query.order_by(Supplier.last_used.desc()).all()
