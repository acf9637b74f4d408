import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from berry_admin.database import get_db
from berry_admin.errors import ValidationError
from berry_admin.models.admin import Admin
from berry_admin.routers.auth import get_current_admin
from berry_admin.schemas import DATA_ACTIONS, GuestSubmissionResponse, UserSummary, data_action_adapter, parse_action
from berry_admin.schemas.data import GetGuestSubmissionsAction, GetUsersAction, UpdateStatsAction
from berry_admin.services.stats_service import list_guest_submissions, list_users, update_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin-data"])


async def read_json_body(request: Request, admin: Admin = Depends(get_current_admin)) -> Any:
    """Decode the body only once the caller holds a valid session."""
    try:
        return await request.json()
    except ValueError:
        raise ValidationError("Invalid JSON body")


@router.post("/data")
def admin_data_action(
    body: Any = Depends(read_json_body),
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    action = parse_action(data_action_adapter, DATA_ACTIONS, body)
    logger.info("Admin API action: %s (admin %s)", action.action, admin.email)

    if isinstance(action, GetUsersAction):
        return {"users": [UserSummary(**u).model_dump() for u in list_users(db)]}

    if isinstance(action, GetGuestSubmissionsAction):
        submissions = list_guest_submissions(db)
        return {"submissions": [GuestSubmissionResponse.model_validate(s).model_dump(mode="json") for s in submissions]}

    if isinstance(action, UpdateStatsAction):
        update_stats(db, action.user_id, action.stats.model_dump())
        return {"success": True}
