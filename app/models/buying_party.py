from datetime import datetime
from decimal import Decimal
from sqlalchemy import Text, DateTime, Integer, Numeric, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.db.base import Base


class BuyingParty(Base):
    __tablename__ = "buying_parties"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    target_acquisition_min: Mapped[int | None] = mapped_column(Integer, nullable=True)  # percent
    target_acquisition_max: Mapped[int | None] = mapped_column(Integer, nullable=True)  # percent
    budget_min: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    budget_max: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    timeline: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="evaluating")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    deal_matches: Mapped[list["DealBuyerMatch"]] = relationship(
        "DealBuyerMatch", back_populates="buying_party", cascade="all, delete-orphan"
    )
    contacts: Mapped[list["Contact"]] = relationship(
        "Contact", secondary="party_contacts", back_populates="buying_parties"
    )
