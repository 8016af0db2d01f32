import logging
from typing import Any

from app.client.cache import QueryClient
from app.client.config import ClientSettings
from app.client.errors import FormValidationError
from app.client.invalidation import Mutation
from app.client.matches import BuyerMatchList
from app.client.notes import NotesAutosave
from app.models.activity import ActivityStatus, ActivityType

logger = logging.getLogger(__name__)

# Quick actions on a deal page and the timeline entry each one logs
ACTIVITY_TEMPLATES: dict[str, dict[str, str]] = {
    "email": {"type": "email", "title": "Email drafted", "status": "pending"},
    "meeting": {"type": "meeting", "title": "Meeting scheduled", "status": "pending"},
    "request_docs": {"type": "task", "title": "Requested documents", "status": "pending"},
    "send_cim": {"type": "document", "title": "CIM sent", "status": "completed"},
    "send_nda": {"type": "document", "title": "NDA sent", "status": "completed"},
    "buyer_outreach": {"type": "task", "title": "Buyer outreach logged", "status": "pending"},
    "note": {"type": "system", "title": "Internal note added", "status": "completed"},
}
DEFAULT_TEMPLATE = {"type": "task", "title": "Activity", "status": "pending"}


class DealWorkspace:
    """Everything the deal page reads and changes for one deal"""

    def __init__(self, client: QueryClient, deal_id: str, settings: ClientSettings | None = None):
        self.client = client
        self.deal_id = str(deal_id)
        self.settings = settings or client.api.settings
        self.buyers = BuyerMatchList(client, self.deal_id)

    @property
    def detail_key(self) -> tuple:
        return (f"/api/deals/{self.deal_id}",)

    @property
    def activities_key(self) -> tuple:
        return ("/api/activities", {"entity_id": self.deal_id})

    def deal(self) -> dict[str, Any]:
        return self.client.read(self.detail_key)

    def activities(self, activity_type: str | None = None) -> list[dict[str, Any]]:
        """Timeline entries, optionally only one type ("all" or None for every type)"""
        activities = self.client.read(self.activities_key)
        if activity_type in (None, "all"):
            return activities
        return [a for a in activities if a["type"] == activity_type]

    def contacts(self) -> list[dict[str, Any]]:
        return self.client.read(("/api/contacts", {"entity_id": self.deal_id, "entity_type": "deal"}))

    def buyers_with_nda(self) -> list[dict[str, Any]]:
        """Buyer rows cleared to receive the CIM"""
        return self.client.read(("/api/deals", self.deal_id, "buyers-with-nda"))

    def add_contact(self, **fields: Any) -> dict[str, Any]:
        """Add a seller-side contact to the deal"""
        if not (fields.get("name") or "").strip():
            raise FormValidationError("Contact name is required")
        if not (fields.get("role") or "").strip():
            raise FormValidationError("Contact role is required")

        payload = {**fields, "entity_id": self.deal_id, "entity_type": "deal"}
        contact = self.client.mutate(
            Mutation.CREATE_CONTACT,
            lambda: self.client.api.post("/api/contacts", json=payload),
        )
        logger.info(f"Added contact {contact['id']} to deal {self.deal_id}")
        return contact

    def documents(self) -> list[dict[str, Any]]:
        return self.client.read(("/api/documents", {"entity_id": self.deal_id}))

    def pinned_documents(self) -> dict[str, Any]:
        return self.client.read(("/api/deals", self.deal_id, "pinned-documents"))

    def update(self, **fields: Any) -> dict[str, Any]:
        if "company_name" in fields and not (fields["company_name"] or "").strip():
            raise FormValidationError("Company name is required")
        deal = self.client.mutate(
            Mutation.UPDATE_DEAL,
            lambda: self.client.api.patch(f"/api/deals/{self.deal_id}", json=fields),
            deal_id=self.deal_id,
        )
        logger.info(f"Updated deal {self.deal_id}")
        return deal

    def delete(self) -> None:
        self.client.mutate(
            Mutation.DELETE_DEAL,
            lambda: self.client.api.delete(f"/api/deals/{self.deal_id}"),
            deal_id=self.deal_id,
        )
        logger.info(f"Deleted deal {self.deal_id}")

    def save_notes(self, notes: str) -> dict[str, Any]:
        return self.client.mutate(
            Mutation.SAVE_NOTES,
            lambda: self.client.api.patch(f"/api/deals/{self.deal_id}/notes", json={"notes": notes}),
            deal_id=self.deal_id,
        )

    def notes_autosave(self, **kwargs: Any) -> NotesAutosave:
        """Debounced editor seeded with the deal's current notes"""
        return NotesAutosave(
            self.save_notes,
            server_value=self.deal().get("notes"),
            delay=kwargs.pop("delay", self.settings.notes_autosave_delay),
            **kwargs,
        )

    def add_activity(self, **fields: Any) -> dict[str, Any]:
        if not (fields.get("title") or "").strip():
            raise FormValidationError("Activity title is required")
        if fields.get("type", ActivityType.NOTE.value) not in {t.value for t in ActivityType}:
            raise FormValidationError(f"Unknown activity type: {fields['type']}")

        payload = {"type": ActivityType.NOTE.value, **fields, "deal_id": self.deal_id}
        activity = self.client.mutate(
            Mutation.CREATE_ACTIVITY,
            lambda: self.client.api.post("/api/activities", json=payload),
            deal_id=self.deal_id,
        )
        logger.info(f"Added {activity['type']} activity to deal {self.deal_id}")
        return activity

    def start_template(self, name: str) -> dict[str, Any]:
        """Log the timeline entry for a quick action"""
        return self.add_activity(**ACTIVITY_TEMPLATES.get(name, DEFAULT_TEMPLATE))

    def set_activity_status(self, activity_id: str, status: str) -> dict[str, Any]:
        return self.client.mutate(
            Mutation.UPDATE_ACTIVITY,
            lambda: self.client.api.patch(f"/api/activities/{activity_id}", json={"status": status}),
            deal_id=self.deal_id,
        )

    def complete_activity(self, activity_id: str) -> dict[str, Any]:
        return self.set_activity_status(activity_id, ActivityStatus.COMPLETED.value)
