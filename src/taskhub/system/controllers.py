"""
System Controllers
==================

Health check for load balancers and a service info root.
"""

from fastapi import APIRouter, Depends

from taskhub.shared.api.dependencies import get_app_settings
from taskhub.config import Settings
from taskhub.infrastructure.database import is_connected

router = APIRouter(tags=["System"])


@router.get("/health", responses={
    200: {
        "description": "Service is healthy",
        "content": {
            "application/json": {
                "example": {
                    "data": {
                        "status": "healthy",
                        "version": "1.0.0",
                        "environment": "production",
                        "checks": {"database": "connected"}
                    }
                }
            }
        }
    }
})
async def health_check(settings: Settings = Depends(get_app_settings)):
    """Health check endpoint for load balancers and orchestrators."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": {
            "database": "connected" if is_connected() else "disconnected",
        },
    }


@router.get("/")
async def root(settings: Settings = Depends(get_app_settings)):
    """Root endpoint with service information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }
