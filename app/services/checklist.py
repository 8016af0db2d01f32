"""
Match checklist encoding.

A match's ``stages`` column holds a set of completed milestone keys serialized
as a comma-joined string, e.g. ``"nda_sent,cim_sent"``. The set is independent
of the match's single ``stage`` value.
"""
from typing import Iterable

from app.models.deal_buyer_match import MATCH_STAGE_ORDER


class ChecklistError(ValueError):
    """Raised when a checklist contains keys outside the match stage vocabulary"""
    pass


def parse_checklist(raw: str | None) -> list[str]:
    """
    Split a stored checklist into its keys.

    Empty segments and surrounding whitespace are dropped and duplicates are
    collapsed, keeping the first occurrence.
    """
    if not raw:
        return []

    keys: list[str] = []
    for part in raw.split(","):
        key = part.strip()
        if key and key not in keys:
            keys.append(key)
    return keys


def serialize_checklist(keys: Iterable[str]) -> str:
    return ",".join(parse_checklist(",".join(keys)))


def validate_checklist(raw: str | None) -> str:
    """Normalize a checklist string, rejecting unknown milestone keys."""
    keys = parse_checklist(raw)
    unknown = [key for key in keys if key not in MATCH_STAGE_ORDER]
    if unknown:
        raise ChecklistError(f"Unknown checklist keys: {', '.join(unknown)}")
    return serialize_checklist(keys)


def toggle_checklist(raw: str | None, key: str, checked: bool) -> str:
    """
    Return the checklist with ``key`` added (checked) or removed (unchecked).

    Checking a present key or unchecking an absent one leaves the set as is.
    """
    keys = parse_checklist(raw)
    if checked:
        if key not in keys:
            keys.append(key)
    else:
        keys = [k for k in keys if k != key]
    return serialize_checklist(keys)
