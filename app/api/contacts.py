from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from app.db.session import get_db
from app.models import BuyingParty, Contact, Deal
from app.schemas import ContactCreate, ContactResponse
from app.schemas.contact import EntityType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


def to_response(contact: Contact, entity_id: UUID | None, entity_type: str | None) -> ContactResponse:
    return ContactResponse(
        id=contact.id,
        name=contact.name,
        role=contact.role,
        email=contact.email,
        phone=contact.phone,
        entity_id=entity_id,
        entity_type=entity_type,
    )


def get_entity_or_400(entity_id: UUID, entity_type: str, db: Session):
    model = Deal if entity_type == "deal" else BuyingParty
    entity = db.query(model).filter(model.id == entity_id).first()
    if not entity:
        label = "Deal" if entity_type == "deal" else "Buying party"
        raise HTTPException(status_code=400, detail=f"{label} not found")
    return entity


@router.post("", response_model=ContactResponse, status_code=201)
def create_contact(contact: ContactCreate, db: Session = Depends(get_db)):
    """Create a contact, linking it to a deal (seller) or buying party (buyer) when given"""
    db_contact = Contact(**contact.model_dump(exclude={"entity_id", "entity_type"}))

    if contact.entity_id is not None:
        entity = get_entity_or_400(contact.entity_id, contact.entity_type, db)
        entity.contacts.append(db_contact)

    db.add(db_contact)
    db.commit()
    db.refresh(db_contact)
    logger.info(f"Created contact {db_contact.id} for {contact.entity_type or 'no entity'}")
    return to_response(db_contact, contact.entity_id, contact.entity_type)


@router.get("", response_model=List[ContactResponse])
def list_contacts(
    entity_id: Optional[UUID] = None,
    entity_type: Optional[EntityType] = None,
    db: Session = Depends(get_db)
):
    """
    List contacts. With entity_id and entity_type, only the contacts linked to
    that deal or buying party are returned.
    """
    if entity_id is None:
        return [to_response(contact, None, None) for contact in db.query(Contact).all()]

    if entity_type is None:
        raise HTTPException(status_code=422, detail="entity_type is required with entity_id")

    entity = get_entity_or_400(entity_id, entity_type, db)
    return [to_response(contact, entity_id, entity_type) for contact in entity.contacts]
