"""User stats and guest submissions as seen from the admin dashboard."""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from berry_admin.errors import StorageError
from berry_admin.models.guest import GuestSubmission
from berry_admin.models.user import Profile, UserStats

logger = logging.getLogger(__name__)

STAT_FIELDS = ("total_earned", "posts_submitted", "rewards_claimed", "current_streak")


def list_users(db: Session) -> list[dict]:
    """Every profile joined with its stats row; users without stats report zeros."""
    try:
        rows = db.query(Profile, UserStats).outerjoin(UserStats, UserStats.user_id == Profile.user_id).all()
    except SQLAlchemyError:
        logger.exception("Error fetching profiles and stats")
        raise StorageError("Failed to fetch users")
    users = []
    for profile, stats in rows:
        user = {"user_id": profile.user_id, "email": profile.email, "display_name": profile.display_name}
        if stats is None:
            user.update({field: 0 for field in STAT_FIELDS})
        else:
            user.update(
                total_earned=float(stats.total_earned or 0),
                posts_submitted=stats.posts_submitted or 0,
                rewards_claimed=stats.rewards_claimed or 0,
                current_streak=stats.current_streak or 0,
            )
        users.append(user)
    return users


def list_guest_submissions(db: Session) -> list[GuestSubmission]:
    try:
        return (
            db.query(GuestSubmission)
            .order_by(GuestSubmission.created_at.desc(), GuestSubmission.id.desc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Error fetching guest submissions")
        raise StorageError("Failed to fetch guest submissions")


def update_stats(db: Session, user_id: str, stats: dict) -> UserStats:
    """Overwrite the stats row for user_id, creating it on first edit. Last write wins."""
    try:
        row = db.query(UserStats).filter(UserStats.user_id == user_id).first()
        if row is None:
            row = UserStats(user_id=user_id)
            db.add(row)
        for field in STAT_FIELDS:
            setattr(row, field, stats[field])
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating stats for user %s", user_id)
        raise StorageError("Failed to update stats")
    db.refresh(row)
    return row
