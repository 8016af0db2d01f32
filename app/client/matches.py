"""
Buyer matching for a single deal: the buyer list, which parties can still be
added, creating and removing matches, and the per-match stage checklist.
"""
import logging
from typing import Any

from app.client.cache import QueryClient
from app.client.invalidation import DEAL_BUYERS, Mutation
from app.models.deal_buyer_match import MatchStage
from app.services.checklist import parse_checklist, toggle_checklist

logger = logging.getLogger(__name__)


class BuyerMatchList:
    """The buyers matched to one deal"""

    def __init__(self, client: QueryClient, deal_id: str):
        self.client = client
        self.deal_id = str(deal_id)
        self.pending_party_id: str | None = None

    @property
    def key(self) -> tuple:
        return tuple(part.format(deal_id=self.deal_id) for part in DEAL_BUYERS)

    def rows(self) -> list[dict[str, Any]]:
        """Rows of {match, party, contact}"""
        return self.client.read(self.key)

    def available_parties(self) -> list[dict[str, Any]]:
        """Buying parties not yet matched to this deal"""
        matched = {row["party"]["id"] for row in self.rows()}
        parties = self.client.read(("/api/buying-parties",))
        return [party for party in parties if party["id"] not in matched]

    def add(self, buying_party_id: str) -> dict[str, Any]:
        """Match a buying party to the deal as an interested, new buyer"""
        payload = {
            "deal_id": self.deal_id,
            "buying_party_id": str(buying_party_id),
            "status": "interested",
            "stage": MatchStage.NEW.value,
        }
        self.pending_party_id = str(buying_party_id)
        try:
            match = self.client.mutate(
                Mutation.CREATE_MATCH,
                lambda: self.client.api.post("/api/deal-buyer-matches", json=payload),
                deal_id=self.deal_id,
            )
        finally:
            self.pending_party_id = None
        logger.info(f"Matched buying party {buying_party_id} to deal {self.deal_id}")
        return match

    def remove(self, match_id: str) -> None:
        """Unmatch a buyer; other matches on the deal are untouched"""
        self.client.mutate(
            Mutation.DELETE_MATCH,
            lambda: self.client.api.delete(f"/api/deal-buyer-matches/{match_id}"),
            deal_id=self.deal_id,
        )
        logger.info(f"Removed match {match_id} from deal {self.deal_id}")

    def update(self, match_id: str, **fields: Any) -> dict[str, Any]:
        """Change a match's stage, status, target acquisition or budget"""
        return self.client.mutate(
            Mutation.UPDATE_MATCH,
            lambda: self.client.api.patch(f"/api/deal-buyer-matches/{match_id}", json=fields),
            deal_id=self.deal_id,
            match_id=match_id,
        )

    def checklist(self, match_id: str) -> "MatchChecklist":
        return MatchChecklist(self.client, match_id)


class MatchChecklist:
    """
    Stage checklist of one match.

    Each toggle reads the current checklist, adds or removes one key and
    PATCHes the whole field back. Nothing is updated optimistically: the
    cached value only changes after the server confirms and the match is
    refetched. Two clients toggling at once race and the last write wins.
    """

    def __init__(self, client: QueryClient, match_id: str):
        self.client = client
        self.match_id = str(match_id)
        self.pending = False

    @property
    def key(self) -> tuple:
        return ("/api/matches", self.match_id)

    def match(self) -> dict[str, Any]:
        return self.client.read(self.key)

    def items(self) -> list[str]:
        return parse_checklist(self.match().get("stages"))

    def is_checked(self, key: str) -> bool:
        return key in self.items()

    def toggle(self, key: str, checked: bool) -> str:
        """Check or uncheck one milestone; returns the server-confirmed checklist"""
        match = self.match()
        stages = toggle_checklist(match.get("stages"), key, checked)

        self.pending = True
        try:
            updated = self.client.mutate(
                Mutation.UPDATE_CHECKLIST,
                lambda: self.client.api.patch(f"/api/matches/{self.match_id}", json={"stages": stages}),
                match_id=self.match_id,
                deal_id=match["deal_id"],
            )
        finally:
            self.pending = False

        logger.info(f"{'Checked' if checked else 'Unchecked'} {key} on match {self.match_id}")
        return updated["stages"]
