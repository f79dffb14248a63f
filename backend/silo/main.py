"""
SILO Results API

FastAPI application for sports-results analytics: column mapping, rule
queries, dashboard KPIs, head-to-head comparison and champions.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from silo import __version__
from silo.config import settings
from silo.db.session import init_db, SessionLocal
from silo.api.v1.router import api_router
from silo.features.dataset.context import AppContext
from silo.features.dataset.repository import DatasetRepository, MappingRepository
from silo.features.mapping.synonyms import load_synonyms


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


def _restore_context(context: AppContext) -> None:
    """Reload the last stored dataset and mapping edits into memory."""
    db = SessionLocal()
    try:
        stored = DatasetRepository(db).get_latest()
        if stored is None:
            logger.info("No stored dataset")
            return
        context.load(
            stored.rows or [],
            file_name=stored.file_name,
            persisted_mapping=MappingRepository(db).load(),
            columns=stored.column_names or None,
        )
    finally:
        db.close()


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting SILO Results API...")
    init_db()
    logger.info("Database initialized")

    context = AppContext(synonyms=load_synonyms(settings.synonyms_file))
    _restore_context(context)
    app.state.context = context

    yield

    # Shutdown
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="SILO Results API",
    description="Column mapping, rule queries and head-to-head analytics for results spreadsheets",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
