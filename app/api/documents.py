from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from app.db.session import get_db
from app.models import Deal, Document
from app.schemas import DocumentCreate, DocumentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DocumentResponse, status_code=201)
def create_document(document: DocumentCreate, db: Session = Depends(get_db)):
    """Register a document record (the file itself lives at url)"""
    if document.deal_id and not db.query(Deal).filter(Deal.id == document.deal_id).first():
        raise HTTPException(status_code=400, detail="Deal not found")

    db_document = Document(**document.model_dump())
    db.add(db_document)
    db.commit()
    db.refresh(db_document)
    logger.info(f"Registered document {db_document.id} ({db_document.name})")
    return db_document


@router.get("", response_model=List[DocumentResponse])
def list_documents(
    entity_id: Optional[UUID] = None,
    db: Session = Depends(get_db)
):
    """List documents, most recent first, optionally for one deal or buying party"""
    query = db.query(Document)

    if entity_id:
        query = query.filter(
            (Document.deal_id == entity_id) | (Document.buying_party_id == entity_id)
        )

    return query.order_by(Document.created_at.desc()).all()
