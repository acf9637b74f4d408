from sqlalchemy import Column, DateTime, Integer, Numeric, String

from berry_admin.database import Base
from berry_admin.models.admin import utcnow


class Profile(Base):
    """Consumer account profile, written by the member-facing app."""

    __tablename__ = "profiles"

    user_id = Column(String(64), primary_key=True)
    email = Column(String(255), nullable=True)
    display_name = Column(String(128), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class UserStats(Base):
    __tablename__ = "user_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), unique=True, nullable=False, index=True)
    total_earned = Column(Numeric(10, 2), default=0, nullable=False)
    posts_submitted = Column(Integer, default=0, nullable=False)
    rewards_claimed = Column(Integer, default=0, nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)  # days
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
