from sqlalchemy import Column, DateTime, Integer, String

from berry_admin.database import Base
from berry_admin.models.admin import utcnow


class GuestSubmission(Base):
    """Instagram handle / email left by a visitor who scanned a venue QR code."""

    __tablename__ = "guest_submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    instagram_id = Column(String(64), nullable=False)
    email = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
