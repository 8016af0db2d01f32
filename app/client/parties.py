import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from app.client.cache import QueryClient
from app.client.errors import ApiError, FormValidationError, UnauthorizedError
from app.client.invalidation import BUYING_PARTIES, Mutation, keys_for

logger = logging.getLogger(__name__)


@dataclass
class BulkDeleteResult:
    """Outcome of deleting several buying parties one by one"""

    requested: list[str]
    deleted: list[str] = field(default_factory=list)
    failed: dict[str, ApiError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def message(self) -> str:
        if self.failed:
            return f"Failed to delete {len(self.failed)} of {len(self.requested)} parties"
        count = len(self.deleted)
        return f"Deleted {count} buying {'party' if count == 1 else 'parties'}"


class BuyingPartyDirectory:
    def __init__(self, client: QueryClient):
        self.client = client

    def list(self) -> list[dict[str, Any]]:
        return self.client.read(BUYING_PARTIES)

    def create(self, **fields: Any) -> dict[str, Any]:
        if not (fields.get("name") or "").strip():
            raise FormValidationError("Party name is required")
        party = self.client.mutate(
            Mutation.CREATE_BUYING_PARTY,
            lambda: self.client.api.post("/api/buying-parties", json=fields),
        )
        logger.info(f"Created buying party {party['id']}")
        return party

    def delete_many(self, party_ids: Iterable[str]) -> BulkDeleteResult:
        """
        Delete each party independently, keeping going past failures.

        Parties that were deleted stay deleted; failed ones are untouched and
        reported by count. The list is invalidated whenever anything was
        deleted, even if other deletes failed. A 401 stops the batch.
        """
        result = BulkDeleteResult(requested=[str(party_id) for party_id in party_ids])

        for party_id in result.requested:
            try:
                self.client.api.delete(f"/api/buying-parties/{party_id}")
            except UnauthorizedError:
                raise
            except ApiError as e:
                logger.warning(f"Failed to delete buying party {party_id}: {e}")
                result.failed[party_id] = e
            else:
                result.deleted.append(party_id)

        if result.deleted:
            for key in keys_for(Mutation.DELETE_BUYING_PARTIES):
                self.client.cache.invalidate(key)

        logger.info(result.message)
        return result
