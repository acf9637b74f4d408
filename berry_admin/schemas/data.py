from datetime import datetime
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Action(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    required_message: ClassVar[str] = "Invalid request"


class StatsPayload(BaseModel):
    total_earned: float = Field(..., ge=0)
    posts_submitted: int = Field(..., ge=0)
    rewards_claimed: int = Field(..., ge=0)
    current_streak: int = Field(..., ge=0)


class GetUsersAction(_Action):
    action: Literal["getUsers"]


class GetGuestSubmissionsAction(_Action):
    action: Literal["getGuestSubmissions"]


class UpdateStatsAction(_Action):
    action: Literal["updateStats"]
    user_id: str = Field(..., min_length=1, alias="userId")
    stats: StatsPayload

    required_message: ClassVar[str] = "User ID and stats required"


DATA_ACTIONS = (GetUsersAction, GetGuestSubmissionsAction, UpdateStatsAction)
DataAction = Annotated[Union[DATA_ACTIONS], Field(discriminator="action")]
data_action_adapter = TypeAdapter(DataAction)


class UserSummary(BaseModel):
    user_id: str
    email: str | None = None
    display_name: str | None = None
    total_earned: float = 0
    posts_submitted: int = 0
    rewards_claimed: int = 0
    current_streak: int = 0


class GuestSubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    instagram_id: str
    email: str
    created_at: datetime
