"""
System Routes
=============

Health check and service information endpoints.
"""

from taskhub.system.controllers import router as system_router

__all__ = ["system_router"]
