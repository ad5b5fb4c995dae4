"""
Theme Registry for microthemes

The rendering layer: knows where themes live, discovers them, and decides
which theme renders the current request. Selection and listing go through
named filter hooks so other components can override them per request.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass
import yaml

TEMPLATE_HOOK = "template"
STYLESHEET_HOOK = "stylesheet"
THEMES_LISTING_HOOK = "themes_listing"

THEME_METADATA_FILE = "theme.yaml"


@dataclass
class Theme:
    """Represents a theme folder."""
    slug: str
    path: Path
    name: str
    description: str = ""
    version: str = ""
    author: str = ""

    @property
    def template_path(self) -> Path:
        """Path to the theme's HTML template."""
        return self.path / "index.html"

    @property
    def styles_path(self) -> Path:
        """Path to the theme's styles.css file."""
        return self.path / "styles.css"


def load_theme(path: Path) -> Theme:
    """Load a theme from its folder, reading theme.yaml when present."""
    slug = path.name
    metadata_path = path / THEME_METADATA_FILE

    metadata: Dict[str, Any] = {}
    if metadata_path.is_file():
        try:
            with open(metadata_path, encoding="utf-8") as f:
                metadata = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            print(f"Warning: Could not read {metadata_path}: {e}")
        if not isinstance(metadata, dict):
            print(f"Warning: Ignoring {metadata_path}, expected a mapping")
            metadata = {}

    return Theme(
        slug=slug,
        path=path,
        name=str(metadata.get("name") or slug),
        description=str(metadata.get("description") or ""),
        version=str(metadata.get("version") or ""),
        author=str(metadata.get("author") or ""),
    )


class ThemeRegistry:
    """Registered theme directories, filter hooks and theme selection.

    One registry is built per request; filters added while handling a
    request never leak into the next one.
    """

    def __init__(self, default_template: str, default_stylesheet: Optional[str] = None):
        self.default_template = default_template
        self.default_stylesheet = default_stylesheet or default_template
        self.theme_directories: List[Path] = []
        self._filters: Dict[str, List[Callable[..., Any]]] = {}
        self._themes: Optional[Dict[str, Theme]] = None

    def register_theme_directory(self, directory) -> bool:
        """Add a root directory containing theme folders.

        Returns False when the directory is empty or already registered.
        """
        if not directory:
            return False
        directory = Path(directory)
        if directory in self.theme_directories:
            return False
        self.theme_directories.append(directory)
        self._themes = None
        return True

    def add_filter(self, hook: str, callback: Callable[..., Any]):
        """Register a callback for a hook."""
        self._filters.setdefault(hook, []).append(callback)

    def has_filter(self, hook: str) -> bool:
        return bool(self._filters.get(hook))

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        """Pass `value` through every callback of `hook`, in order."""
        for callback in self._filters.get(hook, []):
            value = callback(value, *args)
        return value

    def get_template(self) -> str:
        """Slug of the theme whose template renders this request."""
        return self.apply_filters(TEMPLATE_HOOK, self.default_template)

    def get_stylesheet(self) -> str:
        """Slug of the theme whose stylesheet renders this request."""
        return self.apply_filters(STYLESHEET_HOOK, self.default_stylesheet)

    def search_themes(self) -> Dict[str, Theme]:
        """Discover themes in all registered directories.

        A directory registered later overrides earlier ones for the same
        slug. Missing or unreadable directories are skipped.
        """
        if self._themes is not None:
            return self._themes

        themes: Dict[str, Theme] = {}
        for directory in self.theme_directories:
            try:
                entries = sorted(directory.iterdir())
            except OSError:
                continue
            for entry in entries:
                if entry.name.startswith(".") or not entry.is_dir():
                    continue
                themes[entry.name] = load_theme(entry)

        self._themes = themes
        return themes

    def get_theme(self, slug: str) -> Optional[Theme]:
        """Get theme by slug."""
        return self.search_themes().get(slug)

    def prepare_themes_for_listing(self) -> Dict[str, Theme]:
        """Themes shown in the admin theme browser."""
        return self.apply_filters(THEMES_LISTING_HOOK, dict(self.search_themes()))
