from sqlalchemy import Column, String, DateTime

from app.models.base import Base
from app.utils import utcnow


class Supplier(Base):
    """Directory of vendor contacts, refreshed every time one is invited."""
    __tablename__ = "suppliers"

    contact_email = Column(String(256), primary_key=True)
    contact_name = Column(String(256), nullable=True)
    company_name = Column(String(256), nullable=False)
    last_used = Column(DateTime(timezone=True), default=utcnow, nullable=False)
