"""
Response models for microthemes
"""
from __future__ import annotations
from typing import Optional, List
from pydantic import BaseModel, Field

from microthemes.services.theme_registry import Theme


class ThemeInfo(BaseModel):
    """A theme as shown in the admin theme browser."""

    slug: str = Field(..., description="Theme folder name")
    name: str = Field(..., description="Display name from theme.yaml, or the slug")
    description: str = Field("", description="Theme description")
    version: str = Field("", description="Theme version")
    author: str = Field("", description="Theme author")

    @classmethod
    def from_theme(cls, theme: Theme) -> ThemeInfo:
        return cls(
            slug=theme.slug,
            name=theme.name,
            description=theme.description,
            version=theme.version,
            author=theme.author,
        )


class ThemeListResponse(BaseModel):
    """Themes available for selection, microsite themes excluded."""

    themes: List[ThemeInfo] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "themes": [
                    {"slug": "default", "name": "Default", "description": "", "version": "1.0", "author": ""}
                ]
            }
        }


class ThemeSelection(BaseModel):
    """Theme selection for the current request."""

    template: str = Field(..., description="Theme providing the HTML template")
    stylesheet: str = Field(..., description="Theme providing styles.css")
    request_path: str = Field("", description="Normalized request path")
    microsite: Optional[str] = Field(None, description="Matched microsite, if any")

    class Config:
        json_schema_extra = {
            "example": {
                "template": "client-a",
                "stylesheet": "client-a",
                "request_path": "client-a/about",
                "microsite": "client-a"
            }
        }

