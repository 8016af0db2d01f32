from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, field_validator

from app.models.deal_buyer_match import MatchStage
from app.schemas.buying_party import BuyingPartyResponse
from app.schemas.contact import ContactResponse
from app.services.checklist import validate_checklist


class DealBuyerMatchCreate(BaseModel):
    """Request to add a buying party to a deal"""
    deal_id: UUID
    buying_party_id: UUID
    target_acquisition: int | None = None
    budget: Decimal | None = None
    status: str = "interested"
    stage: MatchStage = MatchStage.NEW

    model_config = ConfigDict(use_enum_values=True)


class DealBuyerMatchUpdate(BaseModel):
    target_acquisition: int | None = None
    budget: Decimal | None = None
    status: str | None = None
    stage: MatchStage | None = None

    model_config = ConfigDict(use_enum_values=True)


class MatchChecklistUpdate(BaseModel):
    """Full replacement of a match's checklist, e.g. {"stages": "nda_sent,cim_sent"}"""
    stages: str

    @field_validator("stages")
    @classmethod
    def normalize_stages(cls, value: str) -> str:
        return validate_checklist(value)


class DealBuyerMatchResponse(BaseModel):
    id: UUID
    deal_id: UUID
    buying_party_id: UUID
    target_acquisition: int | None = None
    budget: Decimal | None = None
    status: str
    stage: MatchStage
    stages: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class BuyerMatchRow(BaseModel):
    """One row of a deal's buyer list"""
    match: DealBuyerMatchResponse
    party: BuyingPartyResponse
    contact: ContactResponse | None = None
