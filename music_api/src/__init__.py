"""FastAPI service for the music catalog.

This package provides REST API endpoints for managing music styles
and looking up albums from the remote albums service.
"""

__version__ = "1.0.0"
