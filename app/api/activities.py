from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from app.db.session import get_db
from app.models import Activity, Deal
from app.models.activity import ActivityStatus
from app.schemas import ActivityCreate, ActivityResponse, ActivityUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post("", response_model=ActivityResponse, status_code=201)
def create_activity(activity: ActivityCreate, db: Session = Depends(get_db)):
    """Add an entry to a deal's (or buying party's) timeline"""
    if activity.deal_id and not db.query(Deal).filter(Deal.id == activity.deal_id).first():
        raise HTTPException(status_code=400, detail="Deal not found")

    db_activity = Activity(**activity.model_dump())
    if db_activity.status == ActivityStatus.COMPLETED.value:
        db_activity.completed_at = datetime.now(timezone.utc)

    db.add(db_activity)
    db.commit()
    db.refresh(db_activity)
    logger.info(f"Created {db_activity.type} activity {db_activity.id} for deal {db_activity.deal_id}")
    return db_activity


@router.get("", response_model=List[ActivityResponse])
def list_activities(
    entity_id: Optional[UUID] = None,
    db: Session = Depends(get_db)
):
    """List activities, most recent first, optionally for one deal or buying party"""
    query = db.query(Activity)

    if entity_id:
        query = query.filter(
            (Activity.deal_id == entity_id) | (Activity.buying_party_id == entity_id)
        )

    return query.order_by(Activity.created_at.desc()).all()


@router.patch("/{activity_id}", response_model=ActivityResponse)
def update_activity(
    activity_id: UUID,
    activity_update: ActivityUpdate,
    db: Session = Depends(get_db)
):
    """Update an activity; completing it stamps completed_at"""
    activity = db.query(Activity).filter(Activity.id == activity_id).first()
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")

    update_data = activity_update.model_dump(exclude_unset=True)
    if "status" in update_data:
        if update_data["status"] is None:
            raise HTTPException(status_code=422, detail="status cannot be null")
        if update_data["status"] == ActivityStatus.COMPLETED.value:
            if activity.status != ActivityStatus.COMPLETED.value:
                activity.completed_at = datetime.now(timezone.utc)
        else:
            activity.completed_at = None

    for field, value in update_data.items():
        setattr(activity, field, value)

    db.commit()
    db.refresh(activity)
    logger.info(f"Updated activity {activity_id}: {sorted(update_data)}")
    return activity
