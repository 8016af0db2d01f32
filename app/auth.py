from fastapi_clerk_auth import ClerkConfig, ClerkHTTPBearer

from app.db.database import settings

# Bearer tokens are issued by the identity provider; the API only verifies their signature
clerk_config = ClerkConfig(jwks_url=settings.clerk_jwks_url)
require_auth = ClerkHTTPBearer(config=clerk_config)
