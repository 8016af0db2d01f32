from .deal import DealCreate, DealUpdate, DealNotesUpdate, DealResponse
from .buying_party import BuyingPartyCreate, BuyingPartyResponse
from .contact import ContactCreate, ContactResponse
from .deal_buyer_match import (
    DealBuyerMatchCreate,
    DealBuyerMatchUpdate,
    DealBuyerMatchResponse,
    MatchChecklistUpdate,
    BuyerMatchRow,
)
from .activity import ActivityCreate, ActivityUpdate, ActivityResponse
from .document import DocumentCreate, DocumentResponse, PinnedDocumentsResponse

__all__ = [
    "DealCreate",
    "DealUpdate",
    "DealNotesUpdate",
    "DealResponse",
    "BuyingPartyCreate",
    "BuyingPartyResponse",
    "ContactCreate",
    "ContactResponse",
    "DealBuyerMatchCreate",
    "DealBuyerMatchUpdate",
    "DealBuyerMatchResponse",
    "MatchChecklistUpdate",
    "BuyerMatchRow",
    "ActivityCreate",
    "ActivityUpdate",
    "ActivityResponse",
    "DocumentCreate",
    "DocumentResponse",
    "PinnedDocumentsResponse",
]
