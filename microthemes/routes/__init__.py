"""HTTP routes."""
from microthemes.routes.api import router

__all__ = ["router"]
