from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from app.models.deal import DealStage, health_band


class DealBase(BaseModel):
    company_name: str = Field(min_length=1)
    revenue: Decimal
    sde: Decimal | None = None
    valuation_min: Decimal | None = None
    valuation_max: Decimal | None = None
    sde_multiple: Decimal | None = None
    revenue_multiple: Decimal | None = None
    commission: Decimal | None = None
    stage: DealStage = DealStage.ONBOARDING
    priority: str = "medium"
    description: str | None = None
    notes: str | None = None
    next_step_days: int | None = None
    touches: int = 0
    age_in_stage: int = 0
    health_score: int = Field(default=85, ge=0, le=100)
    owner_id: str
    owner: str

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def check_valuation_range(self):
        if (
            self.valuation_min is not None
            and self.valuation_max is not None
            and self.valuation_min > self.valuation_max
        ):
            raise ValueError("valuation_min must not exceed valuation_max")
        return self


class DealCreate(DealBase):
    pass


class DealUpdate(BaseModel):
    company_name: str | None = Field(default=None, min_length=1)
    revenue: Decimal | None = None
    sde: Decimal | None = None
    valuation_min: Decimal | None = None
    valuation_max: Decimal | None = None
    sde_multiple: Decimal | None = None
    revenue_multiple: Decimal | None = None
    commission: Decimal | None = None
    stage: DealStage | None = None
    priority: str | None = None
    description: str | None = None
    notes: str | None = None
    next_step_days: int | None = None
    touches: int | None = None
    age_in_stage: int | None = None
    health_score: int | None = Field(default=None, ge=0, le=100)
    owner_id: str | None = None
    owner: str | None = None

    model_config = ConfigDict(use_enum_values=True)


class DealNotesUpdate(BaseModel):
    """Full replacement of a deal's free-text notes (autosave payload)"""
    notes: str


class DealResponse(DealBase):
    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    @computed_field
    @property
    def health_band(self) -> str:
        return health_band(self.health_score)
