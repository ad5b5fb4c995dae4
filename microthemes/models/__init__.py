"""Response models."""
from microthemes.models.response import ThemeInfo, ThemeListResponse, ThemeSelection

__all__ = ["ThemeInfo", "ThemeListResponse", "ThemeSelection"]
