"""
API Handlers

Route handlers for the Inkpress API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from inkpress.api.handlers import (
    health_handler,
    post_handler,
    taxonomy_handler,
)

__all__ = [
    "health_handler",
    "post_handler",
    "taxonomy_handler",
]
