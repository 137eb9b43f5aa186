"""
FibonRose - FastAPI Application

HTTP host for the Fibonacci trust & resource engine.

Architecture:
- Fibonacci Math → shared by every component
- Generative Units Ledger → staged overspending protection per entity + pathway
- Security Identity Engine → Fibonacci score → level, trust, risk profile
- Badge Registry → catalog credentials feeding the identity recompute
"""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .database import init_db
from .routers import fibonacci_router, units_router, identity_router
from .routers.dependencies import get_store
from .services.fibonacci import fibonacci
from .services.fibonacci.constants import GOLDEN_RATIO
from .services.ledger import SnapshotCache, TrustStore
from .models.trust import PathwayType

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database and snapshot cache on startup."""
    init_db()
    app.state.snapshot_cache = SnapshotCache()
    logger.info("FibonRose engine started")
    yield
    app.state.snapshot_cache = None

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="FibonRose Trust Engine",
    description="""
    FibonRose - Fibonacci-based trust, resource and protection engine

    ## Components
    1. **Fibonacci Math**: sequence, retracement/extension levels, golden ratio score
    2. **Generative Units**: resource ledger with gates at 38.2% / 50% / 61.8% and a block at 78.6%
    3. **Security Identity**: bounded trust score, security level, risk profile
    4. **Badge Registry**: catalog badges and certifications

    ## Key Principles
    - Every mutation fully commits or is fully rejected
    - A protection gate fires at most once per ledger entry
    - Security level is always a pure function of the current score
    - All alerts are visual/haptic accessible (Deaf-first)
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(fibonacci_router)
app.include_router(units_router)
app.include_router(identity_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "FibonRose Trust Engine",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/status")
async def service_status(store: TrustStore = Depends(get_store)):
    """Engine status: record counts and the shared constants."""
    return {
        "generative_units": store.count_units(),
        "security_identities": store.count_identities(),
        "fibonacci_sequence": [fibonacci(i) for i in range(10)],
        "golden_ratio": GOLDEN_RATIO,
        "pathways": [p.value for p in PathwayType],
    }


# For running with: python -m fibonrose.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
