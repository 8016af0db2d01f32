from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.models.activity import ActivityType, ActivityStatus


class ActivityCreate(BaseModel):
    deal_id: UUID | None = None
    buying_party_id: UUID | None = None
    type: ActivityType
    title: str = Field(min_length=1)
    description: str | None = None
    status: ActivityStatus = ActivityStatus.PENDING
    assigned_to: str | None = None
    due_date: datetime | None = None

    model_config = ConfigDict(use_enum_values=True)


class ActivityUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: ActivityStatus | None = None
    assigned_to: str | None = None
    due_date: datetime | None = None

    model_config = ConfigDict(use_enum_values=True)


class ActivityResponse(BaseModel):
    """Activity item in a deal timeline"""
    id: UUID
    deal_id: UUID | None = None
    buying_party_id: UUID | None = None
    type: ActivityType
    title: str
    description: str | None = None
    status: ActivityStatus
    assigned_to: str | None = None
    due_date: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
