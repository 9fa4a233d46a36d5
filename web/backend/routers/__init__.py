"""API route handlers."""

from .candidates import router as candidates_router
from .profiles import router as profiles_router
from .positions import router as positions_router
