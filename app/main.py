import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.auth import require_auth
from app.db.database import settings

# Import routers
from app.api import (
    activities,
    buying_parties,
    contacts,
    deal_buyer_matches,
    deals,
    documents,
    matches,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Deal Pipeline CRM",
    description="API for tracking brokered business sales: deals, buying parties and the matches between them",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    """
    Run on application startup.
    Schema changes are applied with Alembic (`alembic upgrade head`), not here.
    """
    # Import all models to ensure they're registered with Base
    from app.models import Deal, BuyingParty, Contact, DealBuyerMatch, Activity, Document  # noqa: F401

    logger.info("Deal Pipeline CRM API started")


# Include routers; every /api route requires a bearer token
protected = [Depends(require_auth)]
app.include_router(deals.router, prefix="/api", dependencies=protected)
app.include_router(buying_parties.router, prefix="/api", dependencies=protected)
app.include_router(deal_buyer_matches.router, prefix="/api", dependencies=protected)
app.include_router(matches.router, prefix="/api", dependencies=protected)
app.include_router(contacts.router, prefix="/api", dependencies=protected)
app.include_router(activities.router, prefix="/api", dependencies=protected)
app.include_router(documents.router, prefix="/api", dependencies=protected)


@app.get("/")
def read_root():
    return {
        "message": "Deal Pipeline CRM API",
        "status": "running",
        "version": "0.1.0",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
