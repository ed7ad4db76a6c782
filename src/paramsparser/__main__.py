"""
=============================================================================
PARAMS PARSER CLI ENTRY POINT
=============================================================================

Resolve a request line against a route table from the command line.

=============================================================================
USAGE
=============================================================================

    # Routes inline, first registered wins
    python -m paramsparser "GET /toasters/42 HTTP/1.1" \\
        -r "GET /toasters/new" \\
        -r "GET /toasters/:toaster_id"

    # Routes from a file, JSON output
    python -m paramsparser "POST /users/sign_in HTTP/1.1" \\
        --routes-file routes.txt --format json

    # Just show the table
    python -m paramsparser --routes-file routes.txt --list-routes

Routes files hold one "METHOD PATTERN" per line; blank lines and lines
starting with "#" are ignored. File routes are registered before -r routes.

=============================================================================
EXIT CODES
=============================================================================

    0   a route matched
    1   well-formed request line, no route matched
    2   malformed request line, bad route definition or bad usage

=============================================================================
"""

import argparse
import json
import logging
import os
import sys
from typing import Iterable, List, Optional

from . import __version__
from .config import LOG_FORMATS, MatcherConfig, setup_logging
from .http.request import RequestLineError
from .http.router import Matched, MatchResult, Route, RouteDefinitionError, RouteTable
from .resolver import ParamsResolver


logger = logging.getLogger(__name__)

EXIT_MATCHED = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def parse_route_argument(value: str) -> Route:
    """Parse "METHOD PATTERN" into a Route."""
    tokens = value.split()
    if len(tokens) != 2:
        raise RouteDefinitionError(f"expected 'METHOD PATTERN', got {value!r}")
    return Route(method=tokens[0], pattern=tokens[1])


def read_routes_file(path: str) -> List[Route]:
    """Read routes from a file, one "METHOD PATTERN" per line."""
    routes: List[Route] = []
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                routes.append(parse_route_argument(line))
            except RouteDefinitionError as e:
                raise RouteDefinitionError(f"{path}:{lineno}: {e}") from e
    return routes


def build_route_table(files: Iterable[str], inline: Iterable[str]) -> RouteTable:
    """Register file routes first, then inline routes, preserving order."""
    table = RouteTable()
    for path in files:
        for route in read_routes_file(path):
            table.add_route(route.method, route.pattern)
    for value in inline:
        route = parse_route_argument(value)
        table.add_route(route.method, route.pattern)
    return table


def format_result(result: MatchResult, output_format: str = "text") -> str:
    """Render a match result for the terminal."""
    if output_format == "json":
        if isinstance(result, Matched):
            return json.dumps({
                "matched": True,
                "method": result.method,
                "path": result.path,
                "params": result.params,
                "route": {
                    "method": result.route.method,
                    "pattern": result.route.pattern,
                } if result.route else None,
            })
        return json.dumps({"matched": False})

    if not isinstance(result, Matched):
        return "no match"

    lines = [f"matched {result.method} {result.path}"]
    if result.route:
        lines.append(f"route:  {result.route.method} {result.route.pattern}")
    for name, value in result.params.items():
        lines.append(f"  {name} = {value}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="params-parser",
        description="Match an HTTP request line against an ordered route table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  params-parser "GET /toasters/42 HTTP/1.1" -r "GET /toasters/:toaster_id"
  params-parser "GET / HTTP/1.1" --routes-file routes.txt --format json
  params-parser --routes-file routes.txt --list-routes
        """,
    )

    parser.add_argument(
        "request_line",
        nargs="?",
        help='Raw request line, e.g. "GET /toasters/42 HTTP/1.1"',
    )

    # ─────────────────────────────────────────────────────────────────────
    # ROUTES
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--route", "-r",
        action="append",
        default=[],
        metavar="'METHOD PATTERN'",
        help="Register a route (repeatable, registration order is match order)",
    )

    parser.add_argument(
        "--routes-file", "-f",
        action="append",
        default=[],
        metavar="FILE",
        help="Read routes from FILE, one 'METHOD PATTERN' per line",
    )

    parser.add_argument(
        "--list-routes",
        action="store_true",
        help="Print the route table and exit",
    )

    # ─────────────────────────────────────────────────────────────────────
    # BEHAVIOUR
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Validate method, path and HTTP version tokens",
    )

    parser.add_argument(
        "--format",
        choices=LOG_FORMATS,
        default="text",
        help="Output format (default: text)",
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: $PARAMS_LOG_LEVEL or WARNING)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"params-parser {__version__}",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns the process exit status (see EXIT CODES above).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # ─────────────────────────────────────────────────────────────────────
    # CONFIGURATION: environment first, then CLI overrides
    # ─────────────────────────────────────────────────────────────────────
    config = MatcherConfig.from_env()
    if args.strict:
        config.strict = True
    if args.log_level:
        config.log_level = args.log_level
    elif "PARAMS_LOG_LEVEL" not in os.environ:
        config.log_level = "WARNING"

    try:
        config.validate()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    setup_logging(config)

    try:
        table = build_route_table(args.routes_file, args.route)
    except (OSError, RouteDefinitionError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    logger.debug("Loaded %d routes", len(table))

    if args.list_routes:
        print(table.format_routes())
        return EXIT_MATCHED

    if args.request_line is None:
        parser.print_usage(sys.stderr)
        print("error: a request line is required", file=sys.stderr)
        return EXIT_ERROR

    resolver = ParamsResolver(table, config)

    try:
        result = resolver.resolve(args.request_line)
    except RequestLineError as e:
        print(f"error: {e} (status {e.status_code})", file=sys.stderr)
        return EXIT_ERROR

    print(format_result(result, args.format))
    return EXIT_MATCHED if result else EXIT_NO_MATCH


if __name__ == "__main__":
    sys.exit(main())
