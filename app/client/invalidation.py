"""
Which cached reads each mutation makes stale.

Every mutation the client performs is listed here with the key templates it
invalidates on success. Templates are tuples whose string parts may contain
``{name}`` placeholders; a mapping part holds parameter templates.
"""
import enum
from typing import Any, Mapping


class Mutation(str, enum.Enum):
    UPDATE_DEAL = "update_deal"
    DELETE_DEAL = "delete_deal"
    SAVE_NOTES = "save_notes"
    CREATE_ACTIVITY = "create_activity"
    UPDATE_ACTIVITY = "update_activity"
    CREATE_MATCH = "create_match"
    UPDATE_MATCH = "update_match"
    DELETE_MATCH = "delete_match"
    UPDATE_CHECKLIST = "update_checklist"
    CREATE_BUYING_PARTY = "create_buying_party"
    DELETE_BUYING_PARTIES = "delete_buying_parties"
    CREATE_CONTACT = "create_contact"


DEAL_DETAIL = ("/api/deals/{deal_id}",)
DEAL_LIST = ("/api/deals",)
DEAL_BUYERS = ("/api/deals", "{deal_id}", "buyers")
DEAL_BUYERS_WITH_NDA = ("/api/deals", "{deal_id}", "buyers-with-nda")
DEAL_ACTIVITIES = ("/api/activities", {"entity_id": "{deal_id}"})
MATCH_DETAIL = ("/api/matches", "{match_id}")
BUYING_PARTIES = ("/api/buying-parties",)
CONTACTS = ("/api/contacts",)

INVALIDATION_TABLE: dict[Mutation, list[tuple]] = {
    Mutation.UPDATE_DEAL: [DEAL_DETAIL, DEAL_LIST],
    Mutation.DELETE_DEAL: [DEAL_DETAIL, DEAL_LIST],
    Mutation.SAVE_NOTES: [DEAL_DETAIL, DEAL_ACTIVITIES],
    Mutation.CREATE_ACTIVITY: [DEAL_ACTIVITIES],
    Mutation.UPDATE_ACTIVITY: [DEAL_ACTIVITIES],
    Mutation.CREATE_MATCH: [DEAL_BUYERS, DEAL_BUYERS_WITH_NDA],
    Mutation.UPDATE_MATCH: [DEAL_BUYERS, DEAL_BUYERS_WITH_NDA, MATCH_DETAIL],
    Mutation.DELETE_MATCH: [DEAL_BUYERS, DEAL_BUYERS_WITH_NDA],
    Mutation.UPDATE_CHECKLIST: [MATCH_DETAIL, DEAL_BUYERS, DEAL_BUYERS_WITH_NDA],
    Mutation.CREATE_BUYING_PARTY: [BUYING_PARTIES],
    # Deleting a party deletes its matches, so every deal's buyer lists go stale
    Mutation.DELETE_BUYING_PARTIES: [BUYING_PARTIES, DEAL_LIST],
    Mutation.CREATE_CONTACT: [CONTACTS],
}


def _fill(part: Any, ids: dict[str, str]) -> Any:
    if isinstance(part, Mapping):
        return {key: _fill(value, ids) for key, value in part.items()}
    try:
        return part.format(**ids)
    except KeyError as e:
        raise ValueError(f"Missing id {e} for invalidation template {part!r}") from None


def keys_for(mutation: Mutation, **ids: Any) -> list[tuple]:
    """Concrete cache keys invalidated by a mutation, e.g. keys_for(Mutation.DELETE_MATCH, deal_id=...)"""
    values = {name: str(value) for name, value in ids.items()}
    return [tuple(_fill(part, values) for part in template) for template in INVALIDATION_TABLE[mutation]]
