"""
Microsite Middleware for microthemes

Sets up theme selection for each request based on its path.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from microthemes.config import get_settings
from microthemes.services.microsite_resolver import MicrositeResolver
from microthemes.services.request_uri import RequestUri, signals_from_scope
from microthemes.services.theme_registry import ThemeRegistry


class MicrositeMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches a per-request theme registry to each request."""

    async def dispatch(self, request: Request, call_next):
        settings = get_settings()

        registry = ThemeRegistry(
            default_template=settings.default_theme,
            default_stylesheet=settings.default_stylesheet,
        )
        registry.register_theme_directory(settings.themes_root)

        # Path-based microsite lookup
        signals = signals_from_scope(request.scope, settings.site_url, settings.rewrite_index)
        resolver = MicrositeResolver(RequestUri(signals, settings.rewrite_index))
        resolver.set_template_sets_root_directory(settings.microsites_root)
        resolver.load(registry)

        # Attach to request state
        request.state.themes = registry
        request.state.microsites = resolver

        return await call_next(request)
