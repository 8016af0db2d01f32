from .deal import Deal
from .buying_party import BuyingParty
from .contact import Contact
from .deal_buyer_match import DealBuyerMatch
from .activity import Activity
from .document import Document

__all__ = ["Deal", "BuyingParty", "Contact", "DealBuyerMatch", "Activity", "Document"]
