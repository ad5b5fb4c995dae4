"""
Request URI normalization for microthemes

Derives the canonical, site-relative request path from the raw request
signals. Requests arrive either path-info style (the path is appended after a
front controller, e.g. /index.php/client-a/about) or permalink style (the
path is the request target itself, e.g. /client-a/about). Path-info is
preferred when it is set and is not the front controller itself.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit


@dataclass(frozen=True)
class RawRequestSignals:
    """Path-like values describing one incoming request."""
    raw_request_target: str = ""
    path_info: str = ""
    script_self_path: str = ""
    site_base_path: str = ""


@dataclass(frozen=True)
class NormalizedRequest:
    """Processed request values; `path` is the one used for routing."""
    path: str
    request_target: str
    path_info: str
    script_self: str
    home_path: str


def get_home_path(site_base_path: str) -> str:
    """Path component of the site base URL, without surrounding slashes."""
    return urlsplit(site_base_path or "").path.strip("/")


def strip_home_path(value: str, home_path: str) -> str:
    """Remove a leading home path (case-insensitive, once) and trim slashes."""
    if home_path:
        match = re.match(re.escape(home_path), value, re.IGNORECASE)
        if match:
            value = value[match.end():]
    return value.strip("/")


def normalize_request(signals: RawRequestSignals, index: str) -> NormalizedRequest:
    """Normalize the raw request signals.

    `index` is the front controller token (e.g. ``index.php``). A path-info
    value ending with it is ignored, and a request target equal to it
    normalizes to the empty path.
    """
    path_info = (signals.path_info or "").split("?", 1)[0]
    path_info = path_info.replace("%", "%25")

    request_target = (signals.raw_request_target or "").split("?", 1)[0]
    home_path = get_home_path(signals.site_base_path)

    # Trim path info from the target and the home path from the front. For
    # path-info requests this leaves the front controller, for permalink
    # requests the requested path.
    request_target = request_target.replace(path_info, "", 1).strip("/")
    request_target = strip_home_path(request_target, home_path)

    path_info = strip_home_path(path_info.strip("/"), home_path)
    script_self = strip_home_path((signals.script_self_path or "").strip("/"), home_path)

    if path_info and not path_info.endswith(index):
        path = path_info
    elif request_target == index:
        path = ""
    else:
        path = request_target

    return NormalizedRequest(
        path=path,
        request_target=request_target,
        path_info=path_info,
        script_self=script_self,
        home_path=home_path,
    )


def compute_normalized_path(signals: RawRequestSignals, index: str) -> str:
    """Return the normalized request path for `signals`."""
    return normalize_request(signals, index).path


class RequestUri:
    """Request-scoped holder computing the normalized path at most once."""

    def __init__(self, signals: RawRequestSignals, index: str):
        self.signals = signals
        self.index = index
        self._normalized: Optional[NormalizedRequest] = None

    @property
    def normalized(self) -> NormalizedRequest:
        if self._normalized is None:
            self._normalized = normalize_request(self.signals, self.index)
        return self._normalized

    @property
    def path(self) -> str:
        return self.normalized.path

    @property
    def first_segment(self) -> str:
        """First `/`-delimited segment of the path, or "" for an empty path."""
        return self.path.split("/", 1)[0]


def signals_from_scope(scope: dict, site_url: str, index: str) -> RawRequestSignals:
    """Build request signals from an ASGI HTTP scope.

    ASGI has no PATH_INFO/SCRIPT_NAME pair in the CGI sense, so path-info is
    recovered by locating the front controller segment in the decoded path.
    """
    raw_path = scope.get("raw_path")
    if raw_path:
        target = raw_path.decode("latin-1")
    else:
        target = scope.get("path", "")

    query_string = scope.get("query_string", b"")
    if query_string:
        target = f"{target}?{query_string.decode('latin-1')}"

    path = scope.get("path", "")
    controller = f"/{index}" if index else ""

    path_info = ""
    script_self = f"{scope.get('root_path', '').rstrip('/')}{controller}"
    if controller:
        position = path.find(controller + "/")
        if position != -1:
            script_self = path[:position + len(controller)]
            path_info = path[position + len(controller):]
        elif path.endswith(controller):
            script_self = path

    return RawRequestSignals(
        raw_request_target=target,
        path_info=path_info,
        script_self_path=script_self,
        site_base_path=site_url,
    )
