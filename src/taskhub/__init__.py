"""
TaskHub Service
===============

HTTP service core for the TaskHub users and tasks API.

Modules:
- config: Settings snapshot and startup validation
- core: Error taxonomy and exceptions
- shared: Response envelopes, error handlers, middleware, logging
- infrastructure: Database connection
- system: Health and service info routes
- app: Application factory
- main: Bootstrap sequence and process entry point
"""

__version__ = "1.0.0"
