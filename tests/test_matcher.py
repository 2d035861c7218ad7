"""Tests for tandem.routing.matcher — segment parsing and matching."""

import pytest

from tandem.errors import ConfigurationError
from tandem.routing.matcher import (
    extract_params,
    match,
    parse_pattern,
    split_path,
)
from tandem.routing.route import SegmentKind


class TestSplitPath:
    def test_root_has_no_segments(self) -> None:
        assert split_path("/") == []
        assert split_path("") == []

    def test_strips_outer_slashes(self) -> None:
        assert split_path("/users/42/") == ["users", "42"]

    def test_keeps_inner_empty_segment(self) -> None:
        assert split_path("/a//b") == ["a", "", "b"]


class TestParsePattern:
    def test_literal(self) -> None:
        segments = parse_pattern("/users")
        assert len(segments) == 1
        assert segments[0].kind is SegmentKind.LITERAL
        assert segments[0].is_param is False

    def test_brace_param(self) -> None:
        segments = parse_pattern("/users/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"

    def test_colon_param(self) -> None:
        segments = parse_pattern("/users/:id")
        assert segments[1].kind is SegmentKind.PARAM
        assert segments[1].param_name == "id"

    def test_star_is_wildcard(self) -> None:
        segments = parse_pattern("/files/*/raw")
        assert segments[1].kind is SegmentKind.WILDCARD
        assert segments[1].param_name is None

    def test_empty_segment_is_wildcard(self) -> None:
        segments = parse_pattern("/a//b")
        assert segments[1].kind is SegmentKind.WILDCARD

    @pytest.mark.parametrize("pattern", ["/users/{id", "/users/id}", "/users/{}", "/users/:"])
    def test_malformed_param_rejected(self, pattern: str) -> None:
        with pytest.raises(ConfigurationError):
            parse_pattern(pattern)

    def test_duplicate_param_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate"):
            parse_pattern("/users/{id}/posts/:id")


class TestMatch:
    def test_exact_literal(self) -> None:
        assert match("/hello", "/hello") is True

    def test_literal_is_case_sensitive(self) -> None:
        assert match("/Hello", "/hello") is False

    def test_segment_count_must_be_equal(self) -> None:
        assert match("/users/42/extra", "/users/{id}") is False
        assert match("/users", "/users/{id}") is False

    def test_param_matches_any_segment(self) -> None:
        assert match("/users/42", "/users/{id}") is True
        assert match("/users/abc", "/users/:id") is True

    def test_wildcard_matches_any_segment(self) -> None:
        assert match("/files/report/raw", "/files/*/raw") is True
        assert match("/a/anything/b", "/a//b") is True

    def test_root_only_matches_root(self) -> None:
        assert match("/", "/") is True
        assert match("/x", "/") is False

    def test_trailing_slash_ignored(self) -> None:
        assert match("/hello/", "/hello") is True

    def test_literal_mismatch(self) -> None:
        assert match("/users/42", "/posts/{id}") is False

    def test_encoded_literal_matches_decoded_pattern(self) -> None:
        assert match("/caf%C3%A9", "/café") is True

    def test_encoded_slash_is_one_segment(self) -> None:
        assert match("/files/a%2Fb", "/files/{name}") is True


class TestExtractParams:
    def test_brace_and_colon(self) -> None:
        params = extract_params("/users/7/posts/99", "/users/{uid}/posts/:pid")
        assert params == {"uid": "7", "pid": "99"}

    def test_literals_and_wildcards_contribute_nothing(self) -> None:
        assert extract_params("/files/a/raw", "/files/*/raw") == {}

    def test_values_are_percent_decoded(self) -> None:
        assert extract_params("/tags/c%2B%2B", "/tags/{name}") == {"name": "c++"}

    def test_values_decoded_only_once(self) -> None:
        assert extract_params("/files/%2541", "/files/{name}") == {"name": "%41"}
        assert extract_params("/files/a%2Fb", "/files/{name}") == {"name": "a/b"}
