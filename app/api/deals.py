from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from app.db.session import get_db
from app.models import Activity, Deal, DealBuyerMatch, Document
from app.models.activity import ActivityStatus, ActivityType
from app.models.deal import DEAL_STAGE_PROGRESSION, DealStage
from app.models.deal_buyer_match import MATCH_STAGE_ORDER, MatchStage
from app.schemas import (
    BuyerMatchRow,
    DealCreate,
    DealNotesUpdate,
    DealResponse,
    DealUpdate,
    PinnedDocumentsResponse,
)
from app.services.checklist import parse_checklist
from app.services.pinned_documents import pinned_documents

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deals", tags=["deals"])


def get_deal_or_404(deal_id: UUID, db: Session) -> Deal:
    deal = db.query(Deal).filter(Deal.id == deal_id).first()
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")
    return deal


def build_buyer_rows(matches: list[DealBuyerMatch]) -> list[BuyerMatchRow]:
    """Pair each match with its buying party and the party's first contact"""
    rows = []
    for match in matches:
        party = match.buying_party
        contact = party.contacts[0] if party.contacts else None
        rows.append(
            BuyerMatchRow.model_validate(
                {
                    "match": match,
                    "party": party,
                    "contact": None if contact is None else {
                        "id": contact.id,
                        "name": contact.name,
                        "role": contact.role,
                        "email": contact.email,
                        "phone": contact.phone,
                        "entity_id": party.id,
                        "entity_type": "buying_party",
                    },
                },
                from_attributes=True,
            )
        )
    return rows


@router.post("", response_model=DealResponse, status_code=201)
def create_deal(deal: DealCreate, db: Session = Depends(get_db)):
    """Create a new deal"""
    db_deal = Deal(**deal.model_dump())
    db.add(db_deal)
    db.commit()
    db.refresh(db_deal)
    logger.info(f"Created deal {db_deal.id} ({db_deal.company_name})")
    return db_deal


@router.get("", response_model=List[DealResponse])
def list_deals(
    skip: int = 0,
    limit: int = 100,
    stage: Optional[DealStage] = None,
    owner_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List all deals with optional filters"""
    query = db.query(Deal)

    if stage:
        query = query.filter(Deal.stage == stage.value)
    if owner_id:
        query = query.filter(Deal.owner_id == owner_id)

    deals = query.order_by(Deal.created_at.desc()).offset(skip).limit(limit).all()
    return deals


@router.get("/{deal_id}", response_model=DealResponse)
def get_deal(deal_id: UUID, db: Session = Depends(get_db)):
    """Get a specific deal by ID"""
    return get_deal_or_404(deal_id, db)


@router.patch("/{deal_id}", response_model=DealResponse)
def update_deal(
    deal_id: UUID,
    deal_update: DealUpdate,
    db: Session = Depends(get_db)
):
    """Update a deal"""
    deal = get_deal_or_404(deal_id, db)

    update_data = deal_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(deal, field, value)

    if (
        deal.valuation_min is not None
        and deal.valuation_max is not None
        and deal.valuation_min > deal.valuation_max
    ):
        db.rollback()
        raise HTTPException(status_code=422, detail="valuation_min must not exceed valuation_max")

    db.commit()
    db.refresh(deal)
    logger.info(f"Updated deal {deal_id}: {sorted(update_data)}")
    return deal


@router.delete("/{deal_id}", status_code=204)
def delete_deal(deal_id: UUID, db: Session = Depends(get_db)):
    """Delete a deal along with its matches, activities and documents"""
    deal = get_deal_or_404(deal_id, db)

    db.delete(deal)
    db.commit()
    logger.info(f"Deleted deal {deal_id}")
    return None


@router.patch("/{deal_id}/notes", response_model=DealResponse)
def save_deal_notes(
    deal_id: UUID,
    notes_update: DealNotesUpdate,
    db: Session = Depends(get_db)
):
    """
    Replace a deal's notes with the full text sent by the client.
    Records a system activity so the deal timeline shows the edit.
    """
    deal = get_deal_or_404(deal_id, db)

    deal.notes = notes_update.notes
    db.add(
        Activity(
            deal_id=deal.id,
            type=ActivityType.SYSTEM.value,
            title="Notes updated",
            status=ActivityStatus.COMPLETED.value,
            completed_at=datetime.now(timezone.utc),
        )
    )
    db.commit()
    db.refresh(deal)
    logger.info(f"Saved notes for deal {deal_id} ({len(notes_update.notes)} chars)")
    return deal


@router.post("/{deal_id}/move-next", response_model=DealResponse)
def move_deal_to_next_stage(deal_id: UUID, db: Session = Depends(get_db)):
    """Move deal to the next stage in the pipeline"""
    deal = get_deal_or_404(deal_id, db)

    current_stage = deal.stage or DealStage.ONBOARDING.value
    next_stage = DEAL_STAGE_PROGRESSION.get(current_stage)

    if next_stage is None:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot move deal forward from stage: {current_stage}"
        )

    deal.stage = next_stage
    deal.age_in_stage = 0
    db.commit()
    db.refresh(deal)
    logger.info(f"Moved deal {deal_id} from {current_stage} to {next_stage}")
    return deal


@router.get("/{deal_id}/buyers", response_model=List[BuyerMatchRow])
def list_deal_buyers(deal_id: UUID, db: Session = Depends(get_db)):
    """List the buying parties matched to a deal, oldest match first"""
    get_deal_or_404(deal_id, db)

    matches = (
        db.query(DealBuyerMatch)
        .filter(DealBuyerMatch.deal_id == deal_id)
        .order_by(DealBuyerMatch.created_at.asc())
        .all()
    )
    return build_buyer_rows(matches)


@router.get("/{deal_id}/buyers-with-nda", response_model=List[BuyerMatchRow])
def list_deal_buyers_with_nda(deal_id: UUID, db: Session = Depends(get_db)):
    """
    List matched buyers that have signed an NDA, either ticked on the checklist
    or implied by a stage at or past nda_signed.
    """
    get_deal_or_404(deal_id, db)

    nda_index = MATCH_STAGE_ORDER.index(MatchStage.NDA_SIGNED.value)
    matches = (
        db.query(DealBuyerMatch)
        .filter(DealBuyerMatch.deal_id == deal_id)
        .order_by(DealBuyerMatch.created_at.asc())
        .all()
    )
    signed = [
        match for match in matches
        if MatchStage.NDA_SIGNED.value in parse_checklist(match.stages)
        or (
            match.stage != MatchStage.LOST.value
            and match.stage in MATCH_STAGE_ORDER
            and MATCH_STAGE_ORDER.index(match.stage) >= nda_index
        )
    ]
    return build_buyer_rows(signed)


@router.get("/{deal_id}/pinned-documents", response_model=PinnedDocumentsResponse)
def get_pinned_documents(deal_id: UUID, db: Session = Depends(get_db)):
    """Valuation sheet and deck, CIM and NDA for a deal"""
    get_deal_or_404(deal_id, db)

    documents = (
        db.query(Document)
        .filter(Document.deal_id == deal_id)
        .order_by(Document.created_at.desc())
        .all()
    )
    return PinnedDocumentsResponse.model_validate(pinned_documents(documents), from_attributes=True)
