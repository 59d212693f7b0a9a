"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from portal.api.routes.auth_routes import router as auth_router
from portal.api.routes.profile_routes import router as profile_router
from portal.api.routes.job_routes import router as job_router
from portal.api.routes.application_routes import router as application_router
from portal.api.routes.forum_routes import router as forum_router
from portal.api.routes.ppt_routes import router as ppt_router
from portal.api.routes.event_routes import router as event_router
from portal.api.routes.placement_routes import router as placement_router
from portal.api.routes.notification_routes import router as notification_router
from portal.api.routes.dashboard_routes import router as dashboard_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(job_router)
api_router.include_router(application_router)
api_router.include_router(forum_router)
api_router.include_router(ppt_router)
api_router.include_router(event_router)
api_router.include_router(placement_router)
api_router.include_router(notification_router)
api_router.include_router(dashboard_router)
