from berry_admin.schemas.actions import parse_action
from berry_admin.schemas.admin import AUTH_ACTIONS, AdminProfile, auth_action_adapter
from berry_admin.schemas.data import DATA_ACTIONS, GuestSubmissionResponse, UserSummary, data_action_adapter

__all__ = [
    "parse_action",
    "AUTH_ACTIONS", "AdminProfile", "auth_action_adapter",
    "DATA_ACTIONS", "GuestSubmissionResponse", "UserSummary", "data_action_adapter",
]
