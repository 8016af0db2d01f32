from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from app.db.session import get_db
from app.models import BuyingParty
from app.schemas import BuyingPartyCreate, BuyingPartyResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/buying-parties", tags=["buying-parties"])


@router.post("", response_model=BuyingPartyResponse, status_code=201)
def create_buying_party(party: BuyingPartyCreate, db: Session = Depends(get_db)):
    """Create a new buying party"""
    db_party = BuyingParty(**party.model_dump())
    db.add(db_party)
    db.commit()
    db.refresh(db_party)
    logger.info(f"Created buying party {db_party.id} ({db_party.name})")
    return db_party


@router.get("", response_model=List[BuyingPartyResponse])
def list_buying_parties(
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List buying parties, newest first"""
    query = db.query(BuyingParty)

    if status:
        query = query.filter(BuyingParty.status == status)

    return query.order_by(BuyingParty.created_at.desc()).offset(skip).limit(limit).all()


@router.get("/{party_id}", response_model=BuyingPartyResponse)
def get_buying_party(party_id: UUID, db: Session = Depends(get_db)):
    """Get a specific buying party by ID"""
    party = db.query(BuyingParty).filter(BuyingParty.id == party_id).first()
    if not party:
        raise HTTPException(status_code=404, detail="Buying party not found")
    return party


@router.delete("/{party_id}", status_code=204)
def delete_buying_party(party_id: UUID, db: Session = Depends(get_db)):
    """Delete a buying party and every match it has on any deal"""
    party = db.query(BuyingParty).filter(BuyingParty.id == party_id).first()
    if not party:
        raise HTTPException(status_code=404, detail="Buying party not found")

    db.delete(party)
    db.commit()
    logger.info(f"Deleted buying party {party_id}")
    return None
