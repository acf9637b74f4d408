"""Admin login, password reset and one-time bootstrap."""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from berry_admin.config import settings
from berry_admin.errors import AuthenticationError, AuthorizationError, StorageError, ValidationError
from berry_admin.models.admin import Admin, PasswordResetRequest, utcnow
from berry_admin.services.reset_delivery import deliver_reset_code
from berry_admin.services.session_store import create_session, delete_sessions_for_admin
from berry_admin.utils.auth import BCRYPT_MAX_PASSWORD_BYTES, hash_password, new_recovery_code, verify_password

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If the email exists, a reset code has been generated."


def admin_profile(admin: Admin) -> dict:
    return {"id": admin.id, "email": admin.email, "display_name": admin.display_name}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    try:
        return db.query(Admin).filter(Admin.email == normalize_email(email)).first()
    except SQLAlchemyError:
        logger.exception("Admin lookup failed")
        raise StorageError("Authentication failed")


def _check_password_length(password: str) -> None:
    if len(password) < settings.min_password_length:
        raise ValidationError(f"Password must be at least {settings.min_password_length} characters")
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")


def login(db: Session, email: str, password: str) -> tuple[str, Admin]:
    admin = get_admin_by_email(db, email)
    if not admin:
        logger.info("Login failed: unknown admin email")
        raise AuthenticationError("Invalid credentials")
    if not verify_password(password, admin.password_hash):
        logger.info("Login failed: wrong password for %s", admin.email)
        raise AuthenticationError("Invalid credentials")
    token = create_session(db, admin.id)
    logger.info("Admin %s logged in", admin.email)
    return token, admin


def request_reset(db: Session, email: str) -> Optional[str]:
    """
    Issue a recovery code for the admin with this email.
    Returns the raw code, or None when no such admin exists; callers must not
    let that difference reach the client.
    """
    admin = get_admin_by_email(db, email)
    if not admin:
        logger.info("Reset requested for unknown email")
        return None
    code = new_recovery_code()
    db.add(
        PasswordResetRequest(
            admin_id=admin.id,
            code_hash=hash_password(code),
            expires_at=utcnow() + timedelta(minutes=settings.reset_code_ttl_minutes),
        )
    )
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to store reset code for %s", admin.email)
        raise StorageError("Failed to create reset code")
    deliver_reset_code(admin.email, code)
    return code


def confirm_reset(db: Session, email: str, code: str, new_password: str) -> Admin:
    _check_password_length(new_password)
    admin = get_admin_by_email(db, email)
    if not admin:
        raise ValidationError("Invalid reset request")

    resets = (
        db.query(PasswordResetRequest)
        .filter(PasswordResetRequest.admin_id == admin.id)
        .filter(PasswordResetRequest.used_at.is_(None))
        .filter(PasswordResetRequest.expires_at > utcnow())
        .order_by(PasswordResetRequest.created_at.desc(), PasswordResetRequest.id.desc())
        .all()
    )
    if not resets:
        raise ValidationError("No valid reset code found. Please request a new one.")

    matched = next((r for r in resets if verify_password(code, r.code_hash)), None)
    if matched is None:
        logger.info("Invalid reset code for %s", admin.email)
        raise ValidationError("Invalid reset code")

    matched.used_at = utcnow()
    admin.password_hash = hash_password(new_password)
    try:
        dropped = delete_sessions_for_admin(db, admin.id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Password reset failed for %s", admin.email)
        raise StorageError("Failed to update password")
    logger.info("Password reset for %s, %d sessions invalidated", admin.email, dropped)
    return admin


def set_password(db: Session, email: str, new_password: str) -> Admin:
    """Operator override: replace the password without a recovery code."""
    _check_password_length(new_password)
    admin = get_admin_by_email(db, email)
    if not admin:
        raise ValidationError("Invalid reset request")
    admin.password_hash = hash_password(new_password)
    try:
        dropped = delete_sessions_for_admin(db, admin.id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Password update failed for %s", admin.email)
        raise StorageError("Failed to update password")
    logger.info("Password set for %s, %d sessions invalidated", admin.email, dropped)
    return admin


def create_admin(db: Session, email: str, password: str, display_name: Optional[str] = None) -> Admin:
    """Create the one and only admin. Refused once any admin exists."""
    _check_password_length(password)
    try:
        # count and insert share one transaction
        count = db.query(func.count(Admin.id)).scalar()
        if count:
            logger.warning("Admin creation blocked, an admin account already exists")
            raise AuthorizationError("Admin account already exists. Only one admin is allowed.")
        admin = Admin(
            email=normalize_email(email),
            password_hash=hash_password(password),
            display_name=display_name or "Admin",
        )
        db.add(admin)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Admin creation failed")
        raise StorageError("Failed to create admin")
    db.refresh(admin)
    logger.info("New admin created: %s", admin.email)
    return admin
