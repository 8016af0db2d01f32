"""
Pick the documents pinned on a deal page: valuation spreadsheet and deck,
CIM and NDA.

Documents tagged with an explicit ``doc_type`` always win their slot. Untagged
deals fall back to case-insensitive substring matching on the file name.
"""
import logging
from typing import Sequence

from app.models import Document
from app.models.document import DocumentType

logger = logging.getLogger(__name__)

PINNED_SLOTS = [doc_type.value for doc_type in DocumentType]


def _find_by_name(documents: Sequence[Document], *substrings: str) -> Document | None:
    """First document whose lowercased name contains every substring"""
    for document in documents:
        name = (document.name or "").lower()
        if all(s in name for s in substrings):
            return document
    return None


def _match_by_name(documents: Sequence[Document], slot: str) -> Document | None:
    if slot == DocumentType.VALUATION_EXCEL:
        return _find_by_name(documents, "valuation", ".xlsx")
    if slot == DocumentType.VALUATION_PPT:
        return _find_by_name(documents, "valuation", ".ppt")
    if slot == DocumentType.CIM:
        return _find_by_name(documents, "cim") or _find_by_name(
            documents, "confidential information memorandum"
        )
    if slot == DocumentType.NDA:
        return _find_by_name(documents, "nda") or _find_by_name(documents, "non-disclosure")
    return None


def pinned_documents(documents: Sequence[Document]) -> dict[str, Document | None]:
    """Map each pinned slot to the document that fills it, or None."""
    tagged = {}
    for document in documents:
        if document.doc_type and document.doc_type not in tagged:
            tagged[document.doc_type] = document

    pinned: dict[str, Document | None] = {}
    for slot in PINNED_SLOTS:
        if slot in tagged:
            pinned[slot] = tagged[slot]
        else:
            pinned[slot] = _match_by_name(documents, slot)
            if pinned[slot] is not None:
                logger.debug(f"Pinned {pinned[slot].name!r} as {slot} by file name")
    return pinned
