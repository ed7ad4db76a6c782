"""
=============================================================================
RESOLVER - Request Line In, Match Result Out
=============================================================================

Glues the request line parser, the route matcher and the match logger
together:

    "GET /toasters/42 HTTP/1.1"
              │
              ▼
    ┌───────────────────┐   RequestLineError (400/414/505)
    │ RequestLineParser │ ───────────────────────────────────► caller
    └───────────────────┘   (logged as "malformed", no lookup)
              │ RequestLine
              ▼
    ┌───────────────────┐
    │   MatchLogger     │   times the lookup, logs matched / no_match
    │  ┌─────────────┐  │
    │  │ match_route │  │   first-match-wins over the route table
    │  └─────────────┘  │
    └───────────────────┘
              │
              ▼
    Matched(...) or NO_MATCH

=============================================================================
"""

import logging
from typing import Iterable, Optional, Union

from .config import MatcherConfig
from .http.request import RequestLine, RequestLineError, RequestLineParser
from .http.router import MatchResult, Route, RouteLike, RouteTable, match_route
from .match_log import MatchLogger


logger = logging.getLogger(__name__)


class ParamsResolver:
    """
    Resolves raw request lines against a route table.

    =========================================================================
    USAGE
    =========================================================================

        resolver = ParamsResolver([
            ("GET", "/toasters/new"),
            ("GET", "/toasters/:toaster_id"),
        ])

        result = resolver.resolve("GET /toasters/42 HTTP/1.1")
        if result:
            print(result.params["toaster_id"])   # "42"

    Routes may be a RouteTable, a list of Route, or plain (method, pattern)
    tuples. A RouteTable is kept by reference: routes appended to it later
    are visible to later resolve() calls. Any other iterable is copied
    into a list once, so generators are not used up by the first call.

    =========================================================================
    """

    def __init__(
        self,
        routes: Optional[Iterable[RouteLike]] = None,
        config: Optional[MatcherConfig] = None,
    ):
        """
        Args:
            routes: Ordered route table. Defaults to an empty RouteTable.
            config: Parser / logging configuration. Validated eagerly.
        """
        self.config = config or MatcherConfig()
        self.config.validate()

        if routes is None:
            routes = RouteTable()
        elif not isinstance(routes, RouteTable):
            routes = [Route.coerce(entry) for entry in routes]
        self._routes = routes

        self._parser = RequestLineParser(
            max_line_length=self.config.max_line_length,
            strict=self.config.strict,
        )

        # Entries go out at INFO; config.log_level is applied by setup_logging
        self._match_logger = MatchLogger(
            log_format=self.config.log_format,
            enabled=self.config.log_matches,
        )

        logger.debug(
            "Resolver ready (strict=%s, max_line_length=%d)",
            self.config.strict,
            self.config.max_line_length,
        )

    @property
    def routes(self) -> Iterable[RouteLike]:
        return self._routes

    def parse(self, request_line: Union[str, bytes]) -> RequestLine:
        """Parse only; raises RequestLineError on malformed input."""
        try:
            return self._parser.parse(request_line)
        except RequestLineError as e:
            self._match_logger.log_malformed(request_line, e)
            raise

    def match(self, request: RequestLine) -> MatchResult:
        """Match an already parsed request line."""
        return self._match_logger(
            request,
            lambda req: match_route(self._routes, req.method, req.path),
        )

    def resolve(self, request_line: Union[str, bytes]) -> MatchResult:
        """
        Parse request_line and match it against the routes.

        Returns:
            Matched, or NO_MATCH when the line is well formed but no route
            fits.

        Raises:
            RequestLineError: If the line is malformed. The route table is
                              not consulted.
        """
        return self.match(self.parse(request_line))

    __call__ = resolve


def params_parser(
    request_line: Union[str, bytes],
    routes: Iterable[RouteLike],
    config: Optional[MatcherConfig] = None,
) -> MatchResult:
    """
    Resolve one request line against routes.

    Example:
        routes = [("GET", "/"), ("GET", "/toasters/:toaster_id")]

        params_parser("GET /toasters/42 HTTP/1.1", routes)
        # Matched(method="GET", path="/toasters/42", params={"toaster_id": "42"}, ...)

        params_parser("GET /waffle-makers HTTP/1.1", routes)
        # NO_MATCH
    """
    return ParamsResolver(routes, config).resolve(request_line)
