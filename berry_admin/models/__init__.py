from berry_admin.database import Base
from berry_admin.models.admin import Admin, AdminSession, PasswordResetRequest
from berry_admin.models.user import Profile, UserStats
from berry_admin.models.guest import GuestSubmission

__all__ = ["Base", "Admin", "AdminSession", "PasswordResetRequest", "Profile", "UserStats", "GuestSubmission"]
