from .api import ApiClient
from .auth import AuthClient
from .cache import QueryCache, QueryClient
from .config import ClientSettings
from .deals import DealWorkspace
from .errors import ApiError, CRMClientError, FormValidationError, UnauthorizedError, error_message
from .invalidation import INVALIDATION_TABLE, Mutation, keys_for
from .matches import BuyerMatchList, MatchChecklist
from .notes import NotesAutosave
from .parties import BulkDeleteResult, BuyingPartyDirectory
from .session import FileSessionStore, Navigator, SessionContext, SessionStore

__all__ = [
    "ApiClient",
    "AuthClient",
    "QueryCache",
    "QueryClient",
    "ClientSettings",
    "DealWorkspace",
    "ApiError",
    "CRMClientError",
    "FormValidationError",
    "UnauthorizedError",
    "error_message",
    "INVALIDATION_TABLE",
    "Mutation",
    "keys_for",
    "BuyerMatchList",
    "MatchChecklist",
    "NotesAutosave",
    "BulkDeleteResult",
    "BuyingPartyDirectory",
    "FileSessionStore",
    "Navigator",
    "SessionContext",
    "SessionStore",
]
