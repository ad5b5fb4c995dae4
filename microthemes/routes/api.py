"""
API Routes for microthemes

Serves pages with the theme selected for the request, plus the admin theme
listing.
"""
from fastapi import APIRouter, Request, HTTPException
from fastapi.responses import HTMLResponse, FileResponse, Response

from microthemes.models.response import ThemeInfo, ThemeListResponse, ThemeSelection
from microthemes.services.theme_registry import ThemeRegistry

router = APIRouter()

FALLBACK_HTML = """
<!DOCTYPE html>
<html>
<head>
    <title>microthemes</title>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <link rel="stylesheet" href="/style.css">
</head>
<body>
    <div id="app">Theme not configured</div>
</body>
</html>
"""


def get_theme_registry(request: Request) -> ThemeRegistry:
    """Get the theme registry from request state or raise 500."""
    registry = getattr(request.state, 'themes', None)
    if registry is None:
        raise HTTPException(status_code=500, detail="Theme registry not initialized")
    return registry


def render_template(registry: ThemeRegistry) -> HTMLResponse:
    """Render the active template theme's index.html."""
    # Active template first, then the site's default theme
    for slug in (registry.get_template(), registry.default_template):
        theme = registry.get_theme(slug)
        if theme and theme.template_path.is_file():
            return HTMLResponse(content=theme.template_path.read_text(encoding="utf-8"))

    return HTMLResponse(content=FALLBACK_HTML)


@router.get("/", response_class=HTMLResponse)
async def serve_root(request: Request):
    """Serve the home page with the active theme."""
    return render_template(get_theme_registry(request))


@router.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "framework": "microthemes"
    }


@router.get("/api/themes", response_model=ThemeListResponse)
async def list_themes(request: Request):
    """List themes for the admin theme browser. Microsite themes are hidden."""
    registry = get_theme_registry(request)
    themes = registry.prepare_themes_for_listing()
    return ThemeListResponse(themes=[ThemeInfo.from_theme(theme) for theme in themes.values()])


@router.get("/api/theme", response_model=ThemeSelection)
async def current_theme(request: Request):
    """Get the theme selection for this request."""
    registry = get_theme_registry(request)
    resolver = getattr(request.state, 'microsites', None)

    microsite = None
    request_path = ""
    if resolver is not None:
        request_path = resolver.request_uri.path
        if resolver.is_microsite_request():
            microsite = resolver.get_microsite_name()

    return ThemeSelection(
        template=registry.get_template(),
        stylesheet=registry.get_stylesheet(),
        request_path=request_path,
        microsite=microsite
    )


@router.get("/style.css")
@router.get("/{prefix:path}/style.css")
async def serve_styles(request: Request, prefix: str = ""):
    """Serve the active stylesheet theme's styles.css.

    Also answers under a microsite prefix, e.g. /client-a/style.css.
    """
    registry = get_theme_registry(request)

    # Active stylesheet, then the configured default stylesheet and theme
    for slug in (registry.get_stylesheet(), registry.default_stylesheet, registry.default_template):
        theme = registry.get_theme(slug)
        if theme and theme.styles_path.is_file():
            return FileResponse(
                path=theme.styles_path,
                media_type="text/css"
            )

    # Return empty CSS if nothing exists
    return Response(content="/* No styles */", media_type="text/css")


@router.get("/{path:path}", response_class=HTMLResponse)
async def serve_catchall(request: Request, path: str):
    """Serve any other path with the active theme."""
    return render_template(get_theme_registry(request))
