from sqlalchemy import Column, ForeignKey, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.db.base import Base


# Deal <-> Contact (sellers)
companies_contacts = Table(
    "companies_contacts",
    Base.metadata,
    Column("deal_id", Uuid(as_uuid=True), ForeignKey("deals.id", ondelete="CASCADE"), primary_key=True),
    Column("contact_id", Uuid(as_uuid=True), ForeignKey("contacts.id", ondelete="CASCADE"), primary_key=True),
)

# BuyingParty <-> Contact (buyers)
party_contacts = Table(
    "party_contacts",
    Base.metadata,
    Column("buying_party_id", Uuid(as_uuid=True), ForeignKey("buying_parties.id", ondelete="CASCADE"), primary_key=True),
    Column("contact_id", Uuid(as_uuid=True), ForeignKey("contacts.id", ondelete="CASCADE"), primary_key=True),
)


class Contact(Base):
    __tablename__ = "contacts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    deals: Mapped[list["Deal"]] = relationship(
        "Deal", secondary=companies_contacts, back_populates="contacts"
    )
    buying_parties: Mapped[list["BuyingParty"]] = relationship(
        "BuyingParty", secondary=party_contacts, back_populates="contacts"
    )
