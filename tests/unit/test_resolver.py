"""
Unit tests for the resolver and params_parser().
"""

import logging

import pytest

from paramsparser import (
    NO_MATCH,
    MatcherConfig,
    ParamsResolver,
    RequestLineError,
    RouteTable,
    params_parser,
)


class TestParamsParser:
    """Tests for the one-shot params_parser() function."""

    def test_matches_root(self, routes):
        """Test that "GET /" matches the root route."""
        results = params_parser("GET / HTTP/1.1", routes)

        assert results.method == "GET"
        assert results.path == "/"

    def test_no_match(self, routes):
        """Test that an unknown path returns NO_MATCH."""
        results = params_parser("GET /waffle-makers HTTP/1.1", routes)

        assert results is NO_MATCH

    def test_earlier_match_wins(self, routes):
        """Test that the earlier of two candidate routes is chosen."""
        results = params_parser("GET /toasters/new HTTP/1.1", routes)

        assert results.method == "GET"
        assert results.path == "/toasters/new"
        assert results.params == {}

    def test_extracts_parameter(self, routes):
        """Test that a capture is extracted from the path."""
        results = params_parser("GET /toasters/42 HTTP/1.1", routes)

        assert results.method == "GET"
        assert results.path == "/toasters/42"
        assert results.params["toaster_id"] == "42"

    def test_post_route(self, routes):
        """Test matching a POST request."""
        results = params_parser("POST /users/sign_in HTTP/1.1", routes)

        assert results.method == "POST"
        assert results.route.pattern == "/users/sign_in"

    def test_method_discrimination(self):
        """Test that a POST-only route is invisible to GET."""
        routes = [("POST", "/toasters")]

        assert params_parser("GET /toasters HTTP/1.1", routes) is NO_MATCH

    def test_malformed_line_raises(self, routes):
        """Test that malformed lines raise instead of returning NO_MATCH."""
        with pytest.raises(RequestLineError):
            params_parser("GET /toasters", routes)

    def test_malformed_line_skips_lookup(self):
        """Test that the route table is not consulted for malformed lines."""
        class ExplodingTable(RouteTable):
            def __iter__(self):
                raise AssertionError("route table consulted")

        with pytest.raises(RequestLineError):
            params_parser("nonsense", ExplodingTable())

    def test_accepts_route_table(self, route_table):
        results = params_parser("GET /toasters/42 HTTP/1.1", route_table)

        assert results.params == {"toaster_id": "42"}


class TestParamsResolver:
    """Tests for ParamsResolver."""

    def test_resolve(self, routes, config):
        resolver = ParamsResolver(routes, config)

        result = resolver.resolve("GET /toasters/42 HTTP/1.1")

        assert result.params == {"toaster_id": "42"}

    def test_callable(self, routes):
        resolver = ParamsResolver(routes)

        assert resolver("GET / HTTP/1.1")

    def test_default_table_is_empty(self):
        resolver = ParamsResolver()

        assert isinstance(resolver.routes, RouteTable)
        assert resolver.resolve("GET / HTTP/1.1") is NO_MATCH

    def test_sees_later_registrations(self):
        """Test that the resolver holds the table by reference."""
        table = RouteTable()
        resolver = ParamsResolver(table)

        table.get("/toasters")

        assert resolver.resolve("GET /toasters HTTP/1.1")

    def test_generator_routes_are_reusable(self):
        """Test that a one-shot iterable of routes serves every call."""
        resolver = ParamsResolver(r for r in [("GET", "/toasters/:toaster_id")])

        first = resolver.resolve("GET /toasters/42 HTTP/1.1")
        second = resolver.resolve("GET /toasters/42 HTTP/1.1")

        assert first == second
        assert second.params == {"toaster_id": "42"}

    def test_plain_routes_are_copied(self, routes):
        """Test that later edits to a plain list do not reach the resolver."""
        resolver = ParamsResolver(routes)

        routes.clear()

        assert resolver.resolve("GET / HTTP/1.1")

    def test_strict_config(self, routes):
        resolver = ParamsResolver(routes, MatcherConfig(strict=True))

        with pytest.raises(RequestLineError) as exc_info:
            resolver.resolve("GET / HTTP/9")

        assert exc_info.value.status_code == 505

    def test_max_line_length_config(self, routes):
        resolver = ParamsResolver(routes, MatcherConfig(max_line_length=10))

        with pytest.raises(RequestLineError) as exc_info:
            resolver.resolve("GET /toasters/42 HTTP/1.1")

        assert exc_info.value.status_code == 414

    def test_invalid_config_fails_fast(self, routes):
        with pytest.raises(ValueError):
            ParamsResolver(routes, MatcherConfig(log_format="xml"))

    def test_idempotent(self, routes):
        """Test that resolving twice gives identical results."""
        resolver = ParamsResolver(routes)

        first = resolver.resolve("GET /toasters/42 HTTP/1.1")
        second = resolver.resolve("GET /toasters/42 HTTP/1.1")

        assert first == second

    def test_logs_match(self, routes, config, caplog):
        resolver = ParamsResolver(routes, config)

        with caplog.at_level(logging.DEBUG, logger="paramsparser.match"):
            resolver.resolve("GET /toasters/42 HTTP/1.1")

        messages = [r.getMessage() for r in caplog.records if r.name == "paramsparser.match"]
        assert len(messages) == 1
        assert "matched /toasters/:toaster_id" in messages[0]
        assert "toaster_id=42" in messages[0]

    def test_logs_no_match(self, routes, config, caplog):
        resolver = ParamsResolver(routes, config)

        with caplog.at_level(logging.DEBUG, logger="paramsparser.match"):
            resolver.resolve("GET /waffle-makers HTTP/1.1")

        messages = [r.getMessage() for r in caplog.records if r.name == "paramsparser.match"]
        assert "no_match" in messages[0]

    def test_logs_malformed(self, routes, caplog):
        resolver = ParamsResolver(routes)

        with caplog.at_level(logging.WARNING, logger="paramsparser.match"):
            with pytest.raises(RequestLineError):
                resolver.resolve("GET")

        records = [r for r in caplog.records if r.name == "paramsparser.match"]
        assert records[0].levelno == logging.WARNING
        assert "malformed" in records[0].getMessage()

    def test_log_matches_disabled(self, routes, caplog):
        resolver = ParamsResolver(routes, MatcherConfig(log_matches=False))

        with caplog.at_level(logging.DEBUG, logger="paramsparser.match"):
            resolver.resolve("GET / HTTP/1.1")

        assert not [r for r in caplog.records if r.name == "paramsparser.match"]

    def test_match_entries_logged_at_info(self, routes, caplog):
        """Test that matched and no_match entries go out at INFO."""
        resolver = ParamsResolver(routes, MatcherConfig(log_level="DEBUG"))

        with caplog.at_level(logging.DEBUG, logger="paramsparser.match"):
            resolver.resolve("GET / HTTP/1.1")
            resolver.resolve("GET /waffle-makers HTTP/1.1")

        records = [r for r in caplog.records if r.name == "paramsparser.match"]
        assert [r.levelno for r in records] == [logging.INFO, logging.INFO]
