from sqlalchemy import Column, Integer, String, DateTime
from werkzeug.security import generate_password_hash, check_password_hash

from app.models.base import Base
from app.utils import utcnow


class AdminRole:
    PRODUCT_OWNER = "product_owner"
    GLOBAL_ADMIN = "global_admin"
    INTERNAL_USER = "internal_user"
    EXTERNAL_GUEST = "external_guest"

    ALL = (PRODUCT_OWNER, GLOBAL_ADMIN, INTERNAL_USER, EXTERNAL_GUEST)


class Admin(Base):
    """Portal account. Role is fixed at creation; there is no update path."""
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(256), unique=True, nullable=False, index=True)  # stored lower-cased
    company_name = Column(String(256), nullable=False)
    role = Column(String(50), nullable=False, default=AdminRole.INTERNAL_USER)
    password_hash = Column(String(512), nullable=True)  # None for accounts created without a password
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str | None) -> bool:
        if not self.password_hash:
            return True
        return check_password_hash(self.password_hash, password or "")
