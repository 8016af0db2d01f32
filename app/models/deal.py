from datetime import datetime
from decimal import Decimal
import enum
from sqlalchemy import Text, DateTime, Integer, Numeric, CheckConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.db.base import Base


class DealStage(str, enum.Enum):
    ONBOARDING = "onboarding"
    VALUATION = "valuation"
    BUYER_MATCHING = "buyer_matching"
    DUE_DILIGENCE = "due_diligence"
    SOLD = "sold"


DEAL_STAGE_ORDER = [stage.value for stage in DealStage]

# Next stage in the pipeline; sold is terminal
DEAL_STAGE_PROGRESSION = {
    current: following for current, following in zip(DEAL_STAGE_ORDER, DEAL_STAGE_ORDER[1:])
}


def health_band(health_score: int) -> str:
    """Bucket a 0-100 health score the way the pipeline board colours it."""
    if health_score >= 70:
        return "healthy"
    if health_score >= 40:
        return "at_risk"
    return "critical"


class Deal(Base):
    __tablename__ = "deals"
    __table_args__ = (
        CheckConstraint("health_score >= 0 AND health_score <= 100", name="ck_deals_health_score"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    company_name: Mapped[str] = mapped_column(Text, nullable=False)
    revenue: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    sde: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    valuation_min: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    valuation_max: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    sde_multiple: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    revenue_multiple: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    commission: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    stage: Mapped[str] = mapped_column(Text, nullable=False, default=DealStage.ONBOARDING.value)
    priority: Mapped[str] = mapped_column(Text, nullable=False, default="medium")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    next_step_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    touches: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    age_in_stage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    health_score: Mapped[int] = mapped_column(Integer, nullable=False, default=85)
    owner_id: Mapped[str] = mapped_column(Text, nullable=False)
    owner: Mapped[str] = mapped_column(Text, nullable=False)  # owner email, for display
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    buyer_matches: Mapped[list["DealBuyerMatch"]] = relationship(
        "DealBuyerMatch", back_populates="deal", cascade="all, delete-orphan"
    )
    activities: Mapped[list["Activity"]] = relationship(
        "Activity", back_populates="deal", cascade="all, delete-orphan"
    )
    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="deal", cascade="all, delete-orphan"
    )
    contacts: Mapped[list["Contact"]] = relationship(
        "Contact", secondary="companies_contacts", back_populates="deals"
    )
