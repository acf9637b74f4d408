import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from berry_admin.config import settings
from berry_admin.database import get_db
from berry_admin.errors import AuthenticationError
from berry_admin.models.admin import Admin
from berry_admin.schemas import AUTH_ACTIONS, AdminProfile, auth_action_adapter, parse_action
from berry_admin.schemas.admin import (
    CreateAdminAction,
    LoginAction,
    LogoutAction,
    RequestResetAction,
    ResetPasswordAction,
    ValidateAction,
)
from berry_admin.services import admin_auth
from berry_admin.services.session_store import delete_session, validate_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])
security = HTTPBearer(auto_error=False)


def resolve_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    body: dict | None = None,
) -> Optional[str]:
    """Bearer header first, then the body ``token`` field, then the session cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    if body and isinstance(body.get("token"), str) and body["token"]:
        return body["token"]
    return request.cookies.get(settings.session_cookie_name) or None


def get_current_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> Admin:
    admin = validate_session(db, resolve_token(request, credentials))
    if not admin:
        raise AuthenticationError("Unauthorized")
    return admin


def _profile(admin: Admin) -> dict:
    return AdminProfile.model_validate(admin).model_dump()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


@router.post("/auth")
def admin_auth_action(
    request: Request,
    response: Response,
    body: Any = Body(None),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
):
    action = parse_action(auth_action_adapter, AUTH_ACTIONS, body)
    logger.info("Admin auth action: %s", action.action)

    if isinstance(action, LoginAction):
        token, admin = admin_auth.login(db, action.email, action.password)
        _set_session_cookie(response, token)
        return {"success": True, "token": token, "admin": _profile(admin)}

    if isinstance(action, ValidateAction):
        admin = validate_session(db, resolve_token(request, credentials, body))
        if not admin:
            return {"valid": False}
        return {"valid": True, "admin": _profile(admin)}

    if isinstance(action, LogoutAction):
        delete_session(db, resolve_token(request, credentials, body))
        _clear_session_cookie(response)
        return {"success": True}

    if isinstance(action, RequestResetAction):
        code = admin_auth.request_reset(db, action.email)
        result = {"success": True, "message": admin_auth.RESET_REQUESTED_MESSAGE}
        if code and settings.expose_reset_code:
            result["code"] = code
        return result

    if isinstance(action, ResetPasswordAction):
        admin_auth.confirm_reset(db, action.email, action.code, action.new_password)
        _clear_session_cookie(response)
        return {"success": True, "message": "Password has been reset. Please log in with your new password."}

    if isinstance(action, CreateAdminAction):
        admin = admin_auth.create_admin(db, action.email, action.password, action.display_name)
        return {"success": True, "admin": _profile(admin)}
