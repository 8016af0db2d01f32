from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from app.api.deal_buyer_matches import get_match_or_404
from app.db.session import get_db
from app.schemas import DealBuyerMatchResponse, MatchChecklistUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("/{match_id}", response_model=DealBuyerMatchResponse)
def get_match(match_id: UUID, db: Session = Depends(get_db)):
    """Get a single match, including its stage checklist"""
    return get_match_or_404(match_id, db)


@router.patch("/{match_id}", response_model=DealBuyerMatchResponse)
def update_match_checklist(
    match_id: UUID,
    checklist: MatchChecklistUpdate,
    db: Session = Depends(get_db)
):
    """
    Replace a match's checklist with the comma-joined keys sent by the client.
    The whole field is overwritten; the last write wins.
    """
    match = get_match_or_404(match_id, db)

    match.stages = checklist.stages
    db.commit()
    db.refresh(match)
    logger.info(f"Updated checklist for match {match_id}: {checklist.stages!r}")
    return match
