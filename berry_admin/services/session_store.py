"""Opaque admin session tokens persisted in admin_sessions."""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from berry_admin.config import settings
from berry_admin.errors import StorageError
from berry_admin.models.admin import Admin, AdminSession, PasswordResetRequest, utcnow
from berry_admin.utils.auth import is_well_formed_token, new_session_token

logger = logging.getLogger(__name__)


def create_session(db: Session, admin_id: int) -> str:
    token = new_session_token()
    db.add(
        AdminSession(
            admin_id=admin_id,
            token=token,
            expires_at=utcnow() + timedelta(hours=settings.session_ttl_hours),
        )
    )
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Session creation failed for admin_id=%s", admin_id)
        raise StorageError("Failed to create session")
    return token


def validate_session(db: Session, token: Optional[str]) -> Optional[Admin]:
    """Return the owning admin, or None when the token is missing, malformed, unknown or expired."""
    if not is_well_formed_token(token):
        return None
    try:
        session = (
            db.query(AdminSession)
            .filter(AdminSession.token == token)
            .filter(AdminSession.expires_at > utcnow())
            .first()
        )
    except SQLAlchemyError:
        logger.exception("Session lookup failed")
        return None
    if not session:
        return None
    return session.admin


def delete_session(db: Session, token: Optional[str]) -> None:
    if not token:
        return
    try:
        db.query(AdminSession).filter(AdminSession.token == token).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Session delete failed")


def delete_sessions_for_admin(db: Session, admin_id: int) -> int:
    """Delete every session of one admin. Caller commits."""
    return (
        db.query(AdminSession)
        .filter(AdminSession.admin_id == admin_id)
        .delete(synchronize_session=False)
    )


def purge_expired(db: Session) -> tuple[int, int]:
    """Remove expired sessions and expired reset codes. Returns (sessions, resets)."""
    now = utcnow()
    try:
        sessions = db.query(AdminSession).filter(AdminSession.expires_at <= now).delete(synchronize_session=False)
        resets = (
            db.query(PasswordResetRequest)
            .filter(PasswordResetRequest.expires_at <= now)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Purge of expired sessions failed")
        raise StorageError("Failed to purge expired sessions")
    logger.info("Purged %d expired sessions and %d expired reset codes", sessions, resets)
    return sessions, resets
