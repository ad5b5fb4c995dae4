"""
microthemes Configuration
"""
from __future__ import annotations
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache

PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_name: str = "microthemes"
    debug: bool = True

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Configuration
    cors_origins: List[str] = ["*"]

    # Site Configuration
    # Base URL of the site; its path component is stripped from request paths
    site_url: str = "http://localhost:8000/"

    # Front controller token of path-info style URLs (e.g. /index.php/about)
    rewrite_index: str = "index.php"

    # Theme Configuration
    # - themes_root: regular site themes, listed in the admin theme browser
    # - microsites_root: one theme folder per microsite, selected by the
    #   first path segment and hidden from the theme browser
    themes_root: Path = PROJECT_ROOT / "themes"
    microsites_root: Path = PROJECT_ROOT / "microsites"
    default_theme: str = "default"
    default_stylesheet: str = ""  # Empty means same as default_theme

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
