"""Tests for request descriptor building."""

from __future__ import annotations

import pytest

from flyhttp.client.descriptor import build_descriptor, expand_url, uses_body
from flyhttp.client.request_config import RequestDefaults

BODY_VERBS = ["POST", "PUT", "PATCH"]
QUERY_VERBS = ["GET", "DELETE", "HEAD", "OPTIONS"]


class TestVerbPlacement:
    @pytest.mark.parametrize("verb", BODY_VERBS)
    def test_write_verbs_use_body(self, verb: str) -> None:
        d = build_descriptor(RequestDefaults(), {"a": 1}, {"b": 2}, verb, url="/things")
        assert d.body == {"a": 1, "b": 2}
        assert d.query_params == {}

    @pytest.mark.parametrize("verb", QUERY_VERBS)
    def test_other_verbs_use_query(self, verb: str) -> None:
        d = build_descriptor(RequestDefaults(), {"a": 1}, {"b": 2}, verb, url="/things")
        assert d.query_params == {"a": 1, "b": 2}
        assert d.body is None

    def test_verb_is_normalised(self) -> None:
        d = build_descriptor(RequestDefaults(), None, None, "post", url="/things")
        assert d.method == "POST"
        assert d.body == {}
        assert uses_body("patch")
        assert not uses_body("get")


class TestParameterMerge:
    def test_runtime_mapping_overrides_static(self) -> None:
        d = build_descriptor(RequestDefaults(), {"page": 1, "size": 10}, {"page": 3}, "GET", url="/items")
        assert d.query_params == {"page": 3, "size": 10}

    @pytest.mark.parametrize("runtime", [None, 42, "page=3", ["page", 3], ("page", 3)])
    def test_non_mapping_runtime_is_ignored(self, runtime: object) -> None:
        d = build_descriptor(RequestDefaults(), {"page": 1}, runtime, "GET", url="/items")
        assert d.query_params == {"page": 1}

    def test_missing_static_params_default_to_empty(self) -> None:
        d = build_descriptor(RequestDefaults(), None, {"q": "x"}, "GET", url="/search")
        assert d.query_params == {"q": "x"}

    def test_default_query_params_are_the_base_layer(self) -> None:
        defaults = RequestDefaults(params={"api_key": "k", "lang": "en"})
        d = build_descriptor(defaults, {"lang": "fr"}, None, "GET", url="/items")
        assert d.query_params == {"api_key": "k", "lang": "fr"}

    def test_default_query_params_stay_in_query_for_write_verbs(self) -> None:
        defaults = RequestDefaults(params={"api_key": "k"})
        d = build_descriptor(defaults, None, {"name": "n"}, "POST", url="/items")
        assert d.query_params == {"api_key": "k"}
        assert d.body == {"name": "n"}

    def test_inputs_are_not_mutated(self) -> None:
        static = {"id": 1, "page": 2}
        runtime = {"q": "x"}
        build_descriptor(RequestDefaults(), static, runtime, "GET", url="/items/{id}")
        assert static == {"id": 1, "page": 2}
        assert runtime == {"q": "x"}


class TestHeadersAndDefaults:
    def test_metadata_headers_override_defaults(self) -> None:
        defaults = RequestDefaults(headers={"Accept": "*/*", "X-App": "demo"})
        d = build_descriptor(defaults, None, None, "GET", url="/", headers={"Accept": "application/json"})
        assert d.headers == {"Accept": "application/json", "X-App": "demo"}

    def test_defaults_carry_transport_settings(self) -> None:
        defaults = RequestDefaults(base_url="http://api", timeout=2.5, options={"follow_redirects": True})
        d = build_descriptor(defaults, None, None, "GET", url="/ping")
        assert d.base_url == "http://api"
        assert d.timeout == 2.5
        assert d.options == {"follow_redirects": True}
        assert d.url == "/ping"

    def test_building_twice_is_identical(self) -> None:
        defaults = RequestDefaults(headers={"A": "1"}, params={"k": "v"})
        first = build_descriptor(defaults, {"s": 1}, {"r": 2}, "PUT", url="/x")
        second = build_descriptor(defaults, {"s": 1}, {"r": 2}, "PUT", url="/x")
        assert first == second
        assert first is not second


class TestUrlExpansion:
    def test_colon_placeholder_from_call_arguments(self) -> None:
        assert expand_url("/users/:id", {}, {"id": 42}) == "/users/42"

    def test_brace_placeholder_reads_request_param(self) -> None:
        request_params = {"user_id": 7, "expand": "posts"}
        assert expand_url("/users/{user_id}", request_params) == "/users/7"
        assert request_params == {"user_id": 7, "expand": "posts"}

    def test_call_arguments_win_over_request_params(self) -> None:
        assert expand_url("/users/{id}", {"id": 1}, {"id": 2}) == "/users/2"

    def test_values_are_percent_encoded(self) -> None:
        assert expand_url("/files/{name}", {}, {"name": "a b/c"}) == "/files/a%20b%2Fc"

    def test_unresolved_placeholders_are_kept(self) -> None:
        assert expand_url("/users/:id/{tab}", {}, {}) == "/users/:id/{tab}"

    def test_ports_and_schemes_are_not_placeholders(self) -> None:
        assert expand_url("http://localhost:8080/users/:id", {}, {"id": 5}) == "http://localhost:8080/users/5"

    def test_placeholder_param_stays_in_query(self) -> None:
        d = build_descriptor(RequestDefaults(), None, {"id": 9, "full": 1}, "GET", url="/users/{id}")
        assert d.url == "/users/9"
        assert d.query_params == {"id": 9, "full": 1}

    def test_placeholder_param_stays_in_body(self) -> None:
        d = build_descriptor(RequestDefaults(), None, {"id": 7, "name": "Ada"}, "PUT", url="/users/{id}")
        assert d.url == "/users/7"
        assert d.body == {"id": 7, "name": "Ada"}
