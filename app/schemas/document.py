from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.models.document import DocumentStatus, DocumentType


class DocumentBase(BaseModel):
    deal_id: UUID | None = None
    buying_party_id: UUID | None = None
    name: str = Field(min_length=1)
    status: DocumentStatus = DocumentStatus.DRAFT
    url: str | None = None
    doc_type: DocumentType | None = None

    model_config = ConfigDict(use_enum_values=True)


class DocumentCreate(DocumentBase):
    pass


class DocumentResponse(DocumentBase):
    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class PinnedDocumentsResponse(BaseModel):
    """The documents pinned at the top of a deal page; None when no document fits a slot"""
    valuation_excel: DocumentResponse | None = None
    valuation_ppt: DocumentResponse | None = None
    cim: DocumentResponse | None = None
    nda: DocumentResponse | None = None
