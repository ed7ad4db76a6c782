"""
=============================================================================
HTTP PACKAGE - Request Lines and Routing
=============================================================================

    request.py  - RequestLineParser: "GET /path HTTP/1.1" → RequestLine
    router.py   - match_route / RouteTable: RequestLine → Matched | NO_MATCH

=============================================================================
"""

from .request import (
    RequestLine,
    RequestLineError,
    RequestLineParser,
    parse_request_line,
)
from .router import (
    NO_MATCH,
    Matched,
    MatchResult,
    NoMatch,
    Route,
    RouteDefinitionError,
    RouteTable,
    allowed_methods,
    format_routes,
    match_route,
    split_path,
)

__all__ = [
    # Request lines
    "RequestLine",
    "RequestLineError",
    "RequestLineParser",
    "parse_request_line",
    # Routing
    "Route",
    "RouteTable",
    "RouteDefinitionError",
    "match_route",
    "allowed_methods",
    "format_routes",
    "split_path",
    # Results
    "Matched",
    "NoMatch",
    "NO_MATCH",
    "MatchResult",
]
