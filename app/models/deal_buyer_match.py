from datetime import datetime
from decimal import Decimal
import enum
from sqlalchemy import Text, DateTime, Integer, Numeric, ForeignKey, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.db.base import Base


class MatchStage(str, enum.Enum):
    NEW = "new"
    NDA_SENT = "nda_sent"
    NDA_SIGNED = "nda_signed"
    CIM_SENT = "cim_sent"
    CIM_VIEWED = "cim_viewed"
    INTRO_CALL = "intro_call"
    DILIGENCE = "diligence"
    IOI = "ioi"
    LOI = "loi"
    UNDER_CONTRACT = "under_contract"
    WON = "won"
    LOST = "lost"


MATCH_STAGE_ORDER = [stage.value for stage in MatchStage]


class DealBuyerMatch(Base):
    __tablename__ = "deal_buyer_matches"
    __table_args__ = (
        UniqueConstraint("deal_id", "buying_party_id", name="uq_deal_buyer_match"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    deal_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("deals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    buying_party_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("buying_parties.id", ondelete="CASCADE"), nullable=False
    )
    target_acquisition: Mapped[int | None] = mapped_column(Integer, nullable=True)
    budget: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="interested")
    stage: Mapped[str] = mapped_column(Text, nullable=False, default=MatchStage.NEW.value)
    stages: Mapped[str] = mapped_column(Text, nullable=False, default="")  # comma-joined checklist
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    deal: Mapped["Deal"] = relationship("Deal", back_populates="buyer_matches")
    buying_party: Mapped["BuyingParty"] = relationship("BuyingParty", back_populates="deal_matches")
