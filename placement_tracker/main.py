"""
Placement Tracker - Main Application

FastAPI backend with:
- PostgreSQL for companies, profiles and roles
- MongoDB for interview experiences and questions
- JWT verification for tokens from the identity provider

Run: uvicorn placement_tracker.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from placement_tracker import __version__
from placement_tracker.api.routes import api_router
from placement_tracker.core.config import get_settings
from placement_tracker.core.errors import register_error_handlers
from placement_tracker.core.logging_config import configure_logging
from placement_tracker.db.mongodb import init_mongo_indexes, test_mongo_connection
from placement_tracker.db.postgres import test_postgres_connection

settings = get_settings()
configure_logging()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Placement Tracker",
    description="""
    Company recruitment drives for students and placement administrators.

    ## Features
    - **Companies**: Search, filter by status, sort by deadline/CTC/status
    - **Placement status**: Derived from registration, PPT, OA and interview times (IST)
    - **Editing**: Editors create and update companies from form state
    - **Interviews**: Signed-in users share experiences and questions

    ## Databases
    - PostgreSQL: companies, profiles, user roles
    - MongoDB: interview experiences, interview questions
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except Exception as e:
        # The API still serves company data without MongoDB
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    postgres_ok = test_postgres_connection()
    mongo_ok = test_mongo_connection()
    return {
        "status": "healthy" if postgres_ok and mongo_ok else "degraded",
        "postgres": "connected" if postgres_ok else "disconnected",
        "mongodb": "connected" if mongo_ok else "disconnected"
    }
