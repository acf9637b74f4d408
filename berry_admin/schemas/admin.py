from typing import Annotated, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Action(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    required_message: ClassVar[str] = "Invalid request"


class LoginAction(_Action):
    action: Literal["login"]
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    required_message: ClassVar[str] = "Email and password required"


class ValidateAction(_Action):
    action: Literal["validate"]
    token: Optional[str] = None


class LogoutAction(_Action):
    action: Literal["logout"]
    token: Optional[str] = None


class RequestResetAction(_Action):
    action: Literal["request-reset"]
    email: str = Field(..., min_length=1)

    required_message: ClassVar[str] = "Email required"


class ResetPasswordAction(_Action):
    action: Literal["reset-password"]
    email: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, alias="newPassword")

    required_message: ClassVar[str] = "Email, code, and new password required"


class CreateAdminAction(_Action):
    action: Literal["create"]
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    display_name: Optional[str] = Field(None, alias="displayName")

    required_message: ClassVar[str] = "Email and password required"


AUTH_ACTIONS = (LoginAction, ValidateAction, LogoutAction, RequestResetAction, ResetPasswordAction, CreateAdminAction)
AuthAction = Annotated[Union[AUTH_ACTIONS], Field(discriminator="action")]
auth_action_adapter = TypeAdapter(AuthAction)


class AdminProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    display_name: str
