from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, model_validator


class BuyingPartyBase(BaseModel):
    name: str = Field(min_length=1)
    target_acquisition_min: int | None = Field(default=None, ge=0, le=100)
    target_acquisition_max: int | None = Field(default=None, ge=0, le=100)
    budget_min: Decimal | None = None
    budget_max: Decimal | None = None
    timeline: str | None = None
    status: str = "evaluating"
    notes: str | None = None

    @model_validator(mode="after")
    def check_ranges(self):
        if (
            self.target_acquisition_min is not None
            and self.target_acquisition_max is not None
            and self.target_acquisition_min > self.target_acquisition_max
        ):
            raise ValueError("target_acquisition_min must not exceed target_acquisition_max")
        if (
            self.budget_min is not None
            and self.budget_max is not None
            and self.budget_min > self.budget_max
        ):
            raise ValueError("budget_min must not exceed budget_max")
        return self


class BuyingPartyCreate(BuyingPartyBase):
    pass


class BuyingPartyResponse(BuyingPartyBase):
    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
