from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from app.db.session import get_db
from app.models import BuyingParty, Deal, DealBuyerMatch
from app.schemas import DealBuyerMatchCreate, DealBuyerMatchResponse, DealBuyerMatchUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deal-buyer-matches", tags=["deal-buyer-matches"])


def get_match_or_404(match_id: UUID, db: Session) -> DealBuyerMatch:
    match = db.query(DealBuyerMatch).filter(DealBuyerMatch.id == match_id).first()
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    return match


@router.post("", response_model=DealBuyerMatchResponse, status_code=201)
def create_match(match: DealBuyerMatchCreate, db: Session = Depends(get_db)):
    """
    Add a buying party to a deal.
    A party can be matched to the same deal only once.
    """
    if not db.query(Deal).filter(Deal.id == match.deal_id).first():
        raise HTTPException(status_code=400, detail="Deal not found")
    if not db.query(BuyingParty).filter(BuyingParty.id == match.buying_party_id).first():
        raise HTTPException(status_code=400, detail="Buying party not found")

    existing = db.query(DealBuyerMatch).filter(
        DealBuyerMatch.deal_id == match.deal_id,
        DealBuyerMatch.buying_party_id == match.buying_party_id,
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="Buying party is already matched to this deal")

    db_match = DealBuyerMatch(**match.model_dump())
    db.add(db_match)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same pair
        db.rollback()
        raise HTTPException(status_code=409, detail="Buying party is already matched to this deal")
    db.refresh(db_match)

    logger.info(f"Matched buying party {match.buying_party_id} to deal {match.deal_id} as {db_match.id}")
    return db_match


@router.get("", response_model=List[DealBuyerMatchResponse])
def list_matches(
    deal_id: Optional[UUID] = None,
    buying_party_id: Optional[UUID] = None,
    db: Session = Depends(get_db)
):
    """List matches, optionally filtered by deal or buying party"""
    query = db.query(DealBuyerMatch)

    if deal_id:
        query = query.filter(DealBuyerMatch.deal_id == deal_id)
    if buying_party_id:
        query = query.filter(DealBuyerMatch.buying_party_id == buying_party_id)

    return query.order_by(DealBuyerMatch.created_at.asc()).all()


@router.patch("/{match_id}", response_model=DealBuyerMatchResponse)
def update_match(
    match_id: UUID,
    match_update: DealBuyerMatchUpdate,
    db: Session = Depends(get_db)
):
    """Update a match's stage, status, target acquisition or budget"""
    match = get_match_or_404(match_id, db)

    update_data = match_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field in ("status", "stage"):
            raise HTTPException(status_code=422, detail=f"{field} cannot be null")
        setattr(match, field, value)

    db.commit()
    db.refresh(match)
    logger.info(f"Updated match {match_id}: {sorted(update_data)}")
    return match


@router.delete("/{match_id}", status_code=204)
def delete_match(match_id: UUID, db: Session = Depends(get_db)):
    """Unmatch a buying party from a deal. There is no undo."""
    match = get_match_or_404(match_id, db)

    db.delete(match)
    db.commit()
    logger.info(f"Deleted match {match_id}")
    return None
