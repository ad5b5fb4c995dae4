"""
microthemes - Main Application

Serves a site whose microsites, addressed by the first path segment, render
with their own themes.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from microthemes.config import get_settings
from microthemes.routes import router
from microthemes.middleware import MicrositeMiddleware
from microthemes.services.theme_registry import ThemeRegistry

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Load custom themes based on the URL",
    version="1.0.0",
    debug=settings.debug
)

# Middleware stack (order matters - last added runs first)
app.add_middleware(MicrositeMiddleware)  # Selects the theme for each request
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)


@app.on_event("startup")
async def startup_event():
    """Report configured themes on startup."""
    current = get_settings()
    site_themes = ThemeRegistry(current.default_theme)
    site_themes.register_theme_directory(current.themes_root)
    microsites = ThemeRegistry(current.default_theme)
    microsites.register_theme_directory(current.microsites_root)

    print("microthemes starting...")
    print(f"Site themes ({current.themes_root}): {len(site_themes.search_themes())}")
    print(f"Microsites ({current.microsites_root}): {len(microsites.search_themes())}")
    for slug in microsites.search_themes():
        print(f"   • /{slug}/")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    print("microthemes shutting down...")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "microthemes.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
