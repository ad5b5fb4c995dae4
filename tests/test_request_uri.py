"""Tests for request URI normalization."""

import pytest

from microthemes.services.request_uri import (
    RawRequestSignals,
    RequestUri,
    compute_normalized_path,
    get_home_path,
    normalize_request,
    signals_from_scope,
    strip_home_path,
)

INDEX = "index.php"


def http_scope(path, query_string=b"", root_path="", raw_path=None):
    return {
        "type": "http",
        "path": path,
        "raw_path": raw_path if raw_path is not None else path.encode("latin-1"),
        "query_string": query_string,
        "root_path": root_path,
    }


class TestComputeNormalizedPath:

    def test_permalink_request(self):
        signals = RawRequestSignals(raw_request_target="client-a/about")
        assert compute_normalized_path(signals, INDEX) == "client-a/about"

    def test_bare_index_is_empty(self):
        signals = RawRequestSignals(raw_request_target="index.php")
        assert compute_normalized_path(signals, INDEX) == ""

    def test_path_info_ending_with_index_falls_back_to_target(self):
        signals = RawRequestSignals(
            raw_request_target="index.php?x=1",
            path_info="/index.php",
        )
        assert compute_normalized_path(signals, INDEX) == ""

    def test_path_info_request(self):
        signals = RawRequestSignals(
            raw_request_target="/index.php/client-a/about?page=2",
            path_info="/client-a/about",
            script_self_path="/index.php/client-a/about",
        )
        result = normalize_request(signals, INDEX)
        assert result.path == "client-a/about"
        assert result.request_target == "index.php"
        assert result.script_self == "index.php/client-a/about"

    def test_query_string_removed(self):
        signals = RawRequestSignals(raw_request_target="/client-a/about/?utm=x&y=/z")
        assert compute_normalized_path(signals, INDEX) == "client-a/about"

    def test_query_string_removed_from_path_info(self):
        signals = RawRequestSignals(
            raw_request_target="/index.php/shop",
            path_info="/shop?sort=asc",
        )
        assert compute_normalized_path(signals, INDEX) == "shop"

    def test_percent_in_path_info_is_escaped(self):
        signals = RawRequestSignals(
            raw_request_target="/index.php/100%",
            path_info="/100%",
        )
        assert compute_normalized_path(signals, INDEX) == "100%25"

    def test_repeated_slashes_trimmed(self):
        signals = RawRequestSignals(raw_request_target="///client-a/about///")
        assert compute_normalized_path(signals, INDEX) == "client-a/about"

    def test_home_path_stripped(self):
        signals = RawRequestSignals(
            raw_request_target="/blog/client-a/about",
            site_base_path="https://example.com/blog/",
        )
        assert compute_normalized_path(signals, INDEX) == "client-a/about"

    def test_home_path_stripped_case_insensitively(self):
        signals = RawRequestSignals(
            raw_request_target="/BLOG/client-a",
            site_base_path="https://example.com/blog",
        )
        assert compute_normalized_path(signals, INDEX) == "client-a"

    def test_home_path_stripped_once(self):
        signals = RawRequestSignals(
            raw_request_target="/blog/blog/post",
            site_base_path="https://example.com/blog",
        )
        assert compute_normalized_path(signals, INDEX) == "blog/post"

    def test_home_path_not_a_prefix(self):
        signals = RawRequestSignals(
            raw_request_target="/shop/blog",
            site_base_path="https://example.com/blog",
        )
        assert compute_normalized_path(signals, INDEX) == "shop/blog"

    def test_home_path_stripped_from_path_info_and_self(self):
        signals = RawRequestSignals(
            raw_request_target="/site/index.php/client-b",
            path_info="/site/client-b",
            script_self_path="/site/index.php",
            site_base_path="/site",
        )
        result = normalize_request(signals, INDEX)
        assert result.path == "client-b"
        assert result.path_info == "client-b"
        assert result.script_self == "index.php"

    def test_home_path_is_matched_literally(self):
        signals = RawRequestSignals(
            raw_request_target="/a.c/page",
            site_base_path="https://example.com/a.c",
        )
        assert compute_normalized_path(signals, INDEX) == "page"

        signals = RawRequestSignals(
            raw_request_target="/abc/page",
            site_base_path="https://example.com/a.c",
        )
        assert compute_normalized_path(signals, INDEX) == "abc/page"

    def test_missing_signals(self):
        assert compute_normalized_path(RawRequestSignals(), INDEX) == ""


class TestHomePath:

    @pytest.mark.parametrize("site_url,expected", [
        ("", ""),
        ("https://example.com", ""),
        ("https://example.com/", ""),
        ("https://example.com/blog/", "blog"),
        ("https://example.com//nested/site//", "nested/site"),
        ("/blog", "blog"),
    ])
    def test_get_home_path(self, site_url, expected):
        assert get_home_path(site_url) == expected

    def test_strip_home_path_empty_home(self):
        assert strip_home_path("/about/", "") == "about"


class TestRequestUri:

    def test_path_computed_once(self, monkeypatch):
        calls = []

        import microthemes.services.request_uri as request_uri

        original = request_uri.normalize_request

        def counting(signals, index):
            calls.append(signals)
            return original(signals, index)

        monkeypatch.setattr(request_uri, "normalize_request", counting)

        uri = RequestUri(RawRequestSignals(raw_request_target="/client-a/about"), INDEX)
        assert uri.path == "client-a/about"
        assert uri.path == "client-a/about"
        assert uri.first_segment == "client-a"
        assert len(calls) == 1

    def test_first_segment_of_empty_path(self):
        uri = RequestUri(RawRequestSignals(raw_request_target="/"), INDEX)
        assert uri.first_segment == ""


class TestSignalsFromScope:

    def test_permalink_request(self):
        signals = signals_from_scope(
            http_scope("/client-a/about", query_string=b"x=1"),
            "http://localhost:8000/",
            INDEX,
        )
        assert signals.raw_request_target == "/client-a/about?x=1"
        assert signals.path_info == ""
        assert signals.script_self_path == "/index.php"
        assert signals.site_base_path == "http://localhost:8000/"

    def test_path_info_request(self):
        signals = signals_from_scope(http_scope("/index.php/client-a/about"), "", INDEX)
        assert signals.path_info == "/client-a/about"
        assert signals.script_self_path == "/index.php"
        assert compute_normalized_path(signals, INDEX) == "client-a/about"

    def test_bare_front_controller(self):
        signals = signals_from_scope(http_scope("/index.php"), "", INDEX)
        assert signals.path_info == ""
        assert signals.script_self_path == "/index.php"
        assert compute_normalized_path(signals, INDEX) == ""

    def test_root_path_prefixes_script(self):
        signals = signals_from_scope(http_scope("/app/about", root_path="/app/"), "/app", INDEX)
        assert signals.script_self_path == "/app/index.php"
        assert compute_normalized_path(signals, INDEX) == "about"

    def test_raw_path_preferred_for_target(self):
        signals = signals_from_scope(
            http_scope("/café", raw_path=b"/caf%C3%A9"),
            "",
            INDEX,
        )
        assert signals.raw_request_target == "/caf%C3%A9"

    def test_missing_raw_path(self):
        scope = http_scope("/client-a")
        del scope["raw_path"]
        signals = signals_from_scope(scope, "", INDEX)
        assert signals.raw_request_target == "/client-a"
