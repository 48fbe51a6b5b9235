"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from commerce_generate.api.generate import router as generate_router
from commerce_generate.api.health import router as health_router

__all__ = [
    "generate_router",
    "health_router",
]
