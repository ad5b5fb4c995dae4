"""Request middleware."""
from microthemes.middleware.microsites import MicrositeMiddleware

__all__ = ["MicrositeMiddleware"]
