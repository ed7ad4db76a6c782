"""
=============================================================================
PARAMSPARSER - Request Line Routing With Path Parameters
=============================================================================

Given a raw HTTP request line and an ordered table of (method, pattern)
routes, find the route the request matches and extract its path
parameters.

=============================================================================
PROJECT STRUCTURE
=============================================================================

    paramsparser/
    ├── __init__.py          # Public API (this file)
    ├── __main__.py          # CLI: python -m paramsparser
    ├── config.py            # MatcherConfig, setup_logging
    ├── match_log.py         # Structured match logging
    ├── resolver.py          # ParamsResolver, params_parser()
    └── http/
        ├── request.py       # Request line parsing
        └── router.py        # Route matching, RouteTable

=============================================================================
QUICK START
=============================================================================

    from paramsparser import params_parser

    routes = [
        ("GET", "/"),
        ("GET", "/toasters"),
        ("GET", "/toasters/new"),
        ("GET", "/toasters/:toaster_id"),
        ("POST", "/toasters"),
    ]

    result = params_parser("GET /toasters/42 HTTP/1.1", routes)
    result.method               # "GET"
    result.path                 # "/toasters/42"
    result.params["toaster_id"] # "42"

    params_parser("GET /waffle-makers HTTP/1.1", routes)   # NO_MATCH (falsy)

    params_parser("GET /toasters/new HTTP/1.1", routes).params
    # {} - "/toasters/new" was registered first, so it wins

=============================================================================
OUTCOMES
=============================================================================

    Matched      - truthy, carries method, path, params and the route
    NO_MATCH     - falsy singleton, a normal result (not an error)
    RequestLineError - raised for lines that are not "METHOD PATH VERSION"

=============================================================================
"""

__version__ = "1.0.0"

from .config import MatcherConfig, setup_logging
from .http import (
    NO_MATCH,
    Matched,
    MatchResult,
    NoMatch,
    RequestLine,
    RequestLineError,
    RequestLineParser,
    Route,
    RouteDefinitionError,
    RouteTable,
    allowed_methods,
    format_routes,
    match_route,
    parse_request_line,
)
from .match_log import MatchLog, MatchLogger
from .resolver import ParamsResolver, params_parser

__all__ = [
    "params_parser",
    "ParamsResolver",
    "MatcherConfig",
    "setup_logging",
    "MatchLog",
    "MatchLogger",
    "RequestLine",
    "RequestLineError",
    "RequestLineParser",
    "parse_request_line",
    "Route",
    "RouteTable",
    "RouteDefinitionError",
    "match_route",
    "allowed_methods",
    "format_routes",
    "Matched",
    "NoMatch",
    "NO_MATCH",
    "MatchResult",
    "__version__",
]
