"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from placement_tracker.api.routes.company_routes import router as company_router
from placement_tracker.api.routes.interview_routes import router as interview_router
from placement_tracker.api.routes.meta_routes import router as meta_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(meta_router)
api_router.include_router(company_router)
api_router.include_router(interview_router)
