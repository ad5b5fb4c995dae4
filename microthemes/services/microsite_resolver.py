"""
Microsite Resolver for microthemes

Maps the first segment of the request path to a microsite theme. Each folder
in the microsites root is a theme; a request for /<folder>/... renders with
that theme as both template and stylesheet. Microsite themes are hidden from
the admin theme listing.
"""
from __future__ import annotations
import os
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, Mapping, Optional, TypeVar

from microthemes.services.request_uri import RequestUri
from microthemes.services.theme_registry import (
    STYLESHEET_HOOK,
    TEMPLATE_HOOK,
    THEMES_LISTING_HOOK,
    ThemeRegistry,
)

PSEUDO_ENTRIES = {".", ".."}

V = TypeVar("V")


class MicrositeState(str, Enum):
    NOT_MICROSITE = "not_microsite"
    MICROSITE_MATCHED = "microsite_matched"


class MicrositeResolver:
    """
    Decides whether the current request is for a microsite.

    Built once per request. The normalized path, the folder listing and the
    decision are computed on first use and kept for the resolver's lifetime.
    """

    def __init__(
        self,
        request_uri: RequestUri,
        lister: Callable[[str], Iterable[str]] = os.listdir,
    ):
        self.request_uri = request_uri
        self.override_value = ""
        self.state = MicrositeState.NOT_MICROSITE
        self._lister = lister
        self._root_directory = ""
        self._template_set_names: Optional[FrozenSet[str]] = None
        self._loaded = False

    def set_template_sets_root_directory(self, directory):
        """Set the folder holding microsite themes. Not checked until listed."""
        self._root_directory = os.fspath(directory)

    def get_template_sets_root_directory(self) -> str:
        return self._root_directory

    def get_known_template_set_names(self) -> FrozenSet[str]:
        """Names of the entries in the microsites root.

        An unreadable root yields an empty set, so no microsite matches and
        the site renders with its regular theme.
        """
        if self._template_set_names is None:
            try:
                entries = self._lister(self._root_directory)
                names = frozenset(entry for entry in entries if entry not in PSEUDO_ENTRIES)
            except OSError as e:
                print(f"Warning: Could not list microsites in {self._root_directory!r}: {e}")
                names = frozenset()
            self._template_set_names = names
        return self._template_set_names

    def get_microsite_name(self) -> str:
        """First segment of the normalized request path."""
        return self.request_uri.first_segment

    def is_microsite_request(self) -> bool:
        name = self.get_microsite_name()
        if not name:
            return False
        return name in self.get_known_template_set_names()

    def load(self, registry: ThemeRegistry):
        """
        Register the microsites root and the listing filter, then override
        the template and stylesheet if this is a microsite request.

        Calling it again is a no-op.
        """
        if self._loaded:
            return
        self._loaded = True

        registry.register_theme_directory(self.get_template_sets_root_directory())
        registry.add_filter(THEMES_LISTING_HOOK, self.filter_hidden_template_sets)

        if not self.is_microsite_request():
            return

        self.override_value = self.get_microsite_name()
        self.state = MicrositeState.MICROSITE_MATCHED
        registry.add_filter(TEMPLATE_HOOK, self.filter_template_override)
        registry.add_filter(STYLESHEET_HOOK, self.filter_template_override)

    def filter_template_override(self, *args, **kwargs) -> str:
        """Template/stylesheet filter; ignores the incoming value."""
        return self.override_value

    def filter_hidden_template_sets(self, all_template_sets: Mapping[str, V]) -> Dict[str, V]:
        """Return a copy of the listing without microsite themes."""
        hidden = self.get_known_template_set_names()
        return {
            name: template_set
            for name, template_set in all_template_sets.items()
            if name not in hidden
        }
