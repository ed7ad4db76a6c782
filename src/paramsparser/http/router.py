"""
=============================================================================
ROUTE MATCHER
=============================================================================

Matches a (method, path) pair against an ordered table of routes:
- Static segments:  /toasters, /users/sign_in
- Capture segments: /toasters/:toaster_id
- Method filter:    GET, POST, ... compared exactly, never normalised

=============================================================================
ROUTING FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Request line: GET /toasters/42 HTTP/1.1                            │
    │        │                                                             │
    │        ▼                                                             │
    │   ┌─────────────────────────────────────────────────────────────┐   │
    │   │  Route table (registration order)                            │   │
    │   │  ┌────────────────────────────────────────────────────────┐ │   │
    │   │  │ GET  /                                                  │ │   │
    │   │  │ GET  /toasters                                          │ │   │
    │   │  │ GET  /toasters/new                                      │ │   │
    │   │  │ GET  /toasters/:toaster_id          ← MATCH!            │ │   │
    │   │  │ POST /toasters                                          │ │   │
    │   │  └────────────────────────────────────────────────────────┘ │   │
    │   │                                                              │   │
    │   │  Extracted: params = {"toaster_id": "42"}                    │   │
    │   └─────────────────────────────────────────────────────────────┘   │
    │        │                                                             │
    │        ▼                                                             │
    │   Matched(method="GET", path="/toasters/42",                         │
    │           params={"toaster_id": "42"})                               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
SEGMENT MATCHING ALGORITHM
=============================================================================

Both the pattern and the path are split on "/":

    Pattern:  /toasters/:toaster_id   →  ["", "toasters", ":toaster_id"]
    Path:     /toasters/42            →  ["", "toasters", "42"]
                                              │            │
                                           literal      capture
                                           must be      binds
                                           equal        "42"

    - Different segment counts never match (no trailing wildcards).
    - The root path "/" splits to ["", ""], so it matches the pattern "/"
      and nothing else. The empty pattern "" splits to [""] and can never
      match a path that starts with "/".

=============================================================================
FIRST MATCH WINS
=============================================================================

The table is scanned in registration order and the FIRST structurally
matching route is returned, even when a later route is more specific:

    GET /toasters/new          ← registered first, wins for /toasters/new
    GET /toasters/:toaster_id  ← would have captured toaster_id="new"

Register routes from most specific to least specific.

=============================================================================
INTERVIEW QUESTIONS ABOUT ROUTING
=============================================================================

Q: "What's the time complexity of this matcher?"
A: "O(R × S): R routes, S path segments. A radix tree gets you O(S), but
   a linear scan is the only structure where 'first registered wins' is
   trivially true."

Q: "Why return a NoMatch object instead of None?"
A: "A match on '/' has an empty params dict. With None and dicts mixed
   together, 'if result:' goes wrong. A tagged result makes the two
   cases impossible to confuse."

=============================================================================
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union


logger = logging.getLogger(__name__)


# =============================================================================
# ROUTES
# =============================================================================

@dataclass(frozen=True)
class Route:
    """
    A registered (method, pattern) pair.

    Example:
        Route("GET", "/toasters/:toaster_id")
        Route("POST", "/users/sign_in")
    """

    method: str
    pattern: str

    @property
    def segments(self) -> List[str]:
        """Pattern split on "/" (leading empty segment included)."""
        return split_path(self.pattern)

    @property
    def param_names(self) -> List[str]:
        """Capture names in pattern order: /a/:x/b/:y → ["x", "y"]"""
        return [seg[1:] for seg in self.segments if seg.startswith(":")]

    @classmethod
    def coerce(cls, entry: Union["Route", Tuple[str, str], Sequence[str]]) -> "Route":
        """
        Accept a Route or any (method, pattern) pair.

        Lets callers keep route tables as plain lists of tuples:

            [("GET", "/"), ("GET", "/toasters/:toaster_id")]
        """
        if isinstance(entry, Route):
            return entry
        method, pattern = entry
        return cls(method=method, pattern=pattern)


RouteLike = Union[Route, Tuple[str, str], Sequence[str]]


# =============================================================================
# MATCH RESULTS
# =============================================================================

@dataclass(frozen=True)
class Matched:
    """
    Result of a successful match.

    method and path are the REQUEST's values; route is the table entry
    that matched.

    Example:
        Route:  GET /toasters/:toaster_id
        Path:   /toasters/42
        Result: Matched(method="GET", path="/toasters/42",
                        params={"toaster_id": "42"})
    """

    method: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    route: Optional[Route] = None

    # params is a plain dict, so results are not hashable
    __hash__ = None

    def __bool__(self) -> bool:
        # An empty params dict must not make a match falsy
        return True


class NoMatch:
    """
    The "no route found" outcome.

    A singleton (NO_MATCH), falsy, and never an exception: a well-formed
    request that hits no route is a normal result.
    """

    _instance: Optional["NoMatch"] = None

    def __new__(cls) -> "NoMatch":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_MATCH"

    def __reduce__(self):
        return (NoMatch, ())


NO_MATCH = NoMatch()

MatchResult = Union[Matched, NoMatch]


# =============================================================================
# MATCHING
# =============================================================================

def split_path(path: str) -> List[str]:
    """
    Split a path or pattern into segments.

        "/"               → ["", ""]
        "/toasters/42"    → ["", "toasters", "42"]
        ""                → [""]
    """
    return path.split("/")


def _match_segments(
    pattern_segments: List[str],
    path_segments: List[str],
) -> Optional[Dict[str, str]]:
    """
    Compare segment lists pairwise.

    Returns the captured params on success (possibly empty), None on
    failure.
    """
    if len(pattern_segments) != len(path_segments):
        return None

    params: Dict[str, str] = {}
    for pattern_seg, path_seg in zip(pattern_segments, path_segments):
        if pattern_seg.startswith(":"):
            params[pattern_seg[1:]] = path_seg
        elif pattern_seg != path_seg:
            return None
    return params


def match_route(routes: Iterable[RouteLike], method: str, path: str) -> MatchResult:
    """
    Find the first route matching method and path.

    Args:
        routes: Ordered routes or (method, pattern) pairs. Never mutated.
        method: Request method, compared exactly.
        path: Request path, leading "/" included.

    Returns:
        Matched for the first route that fits, NO_MATCH otherwise.
    """
    path_segments = split_path(path)

    for entry in routes:
        route = Route.coerce(entry)

        if route.method != method:
            continue

        params = _match_segments(route.segments, path_segments)
        if params is None:
            continue

        logger.debug("Matched %s %s -> %s", method, path, route.pattern)
        return Matched(method=method, path=path, params=params, route=route)

    logger.debug("No route for %s %s", method, path)
    return NO_MATCH


def allowed_methods(routes: Iterable[RouteLike], path: str) -> List[str]:
    """
    List the methods registered for patterns that fit path.

    Lets a caller answer 405 Method Not Allowed (with an Allow header)
    instead of 404 when the path exists under another method.

    Returns:
        Sorted, de-duplicated list of methods, e.g. ["GET", "POST"].
    """
    path_segments = split_path(path)
    methods = set()

    for entry in routes:
        route = Route.coerce(entry)
        if _match_segments(route.segments, path_segments) is not None:
            methods.add(route.method)

    return sorted(methods)


def format_routes(routes: Iterable[RouteLike]) -> str:
    """
    Render routes as an aligned listing, in registration order.

        GET    /
        GET    /toasters/:toaster_id
        POST   /toasters
    """
    entries = [Route.coerce(entry) for entry in routes]
    if not entries:
        return ""

    width = max(len(route.method) for route in entries)
    return "\n".join(f"{route.method:<{width}}   {route.pattern}" for route in entries)


# =============================================================================
# ROUTE TABLE
# =============================================================================

class RouteDefinitionError(ValueError):
    """Raised when a route cannot be registered."""


class RouteTable:
    """
    Ordered, append-only route registry.

    ==========================================================================
    USAGE
    ==========================================================================

        table = RouteTable()
        table.get("/toasters/new")
        table.get("/toasters/:toaster_id", name="toaster")
        table.post("/toasters")

        table.match("GET", "/toasters/42")
        # Matched(method="GET", path="/toasters/42", params={"toaster_id": "42"})

        table.url_for("toaster", toaster_id="42")   # "/toasters/42"
        table.allowed_methods("/toasters")          # ["POST"]

    A RouteTable is also a plain iterable of Route, so it can be passed
    anywhere a route sequence is expected (match_route, ParamsResolver).

    ==========================================================================
    """

    def __init__(self, routes: Iterable[RouteLike] = ()):
        self._routes: List[Route] = []
        self._named_routes: Dict[str, Route] = {}

        for entry in routes:
            route = Route.coerce(entry)
            self.add_route(route.method, route.pattern)

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def add_route(self, method: str, pattern: str, name: Optional[str] = None) -> Route:
        """
        Register a route at the end of the table.

        Args:
            method: HTTP method, stored as given.
            pattern: Path pattern, e.g. /toasters/:toaster_id
            name: Optional name for url_for()

        Returns:
            The registered Route.

        Raises:
            RouteDefinitionError: On an invalid pattern or duplicate name.
        """
        if not method:
            raise RouteDefinitionError("method must not be empty")
        self._validate_pattern(pattern)

        if name is not None and name in self._named_routes:
            raise RouteDefinitionError(f"route name already registered: {name}")

        route = Route(method=method, pattern=pattern)
        self._routes.append(route)

        if name is not None:
            self._named_routes[name] = route

        logger.debug("Registered route %s %s", method, pattern)
        return route

    @staticmethod
    def _validate_pattern(pattern: str) -> None:
        if not pattern.startswith("/"):
            raise RouteDefinitionError(f"pattern must start with '/', provided {pattern!r}")

        seen = set()
        for seg in split_path(pattern):
            if not seg.startswith(":"):
                continue
            name = seg[1:]
            if not name:
                raise RouteDefinitionError(f"empty capture name in {pattern!r}")
            if name in seen:
                raise RouteDefinitionError(f"duplicate capture {name!r} in {pattern!r}")
            seen.add(name)

    def get(self, pattern: str, name: Optional[str] = None) -> Route:
        """Register a GET route."""
        return self.add_route("GET", pattern, name)

    def post(self, pattern: str, name: Optional[str] = None) -> Route:
        """Register a POST route."""
        return self.add_route("POST", pattern, name)

    def put(self, pattern: str, name: Optional[str] = None) -> Route:
        """Register a PUT route."""
        return self.add_route("PUT", pattern, name)

    def patch(self, pattern: str, name: Optional[str] = None) -> Route:
        """Register a PATCH route."""
        return self.add_route("PATCH", pattern, name)

    def delete(self, pattern: str, name: Optional[str] = None) -> Route:
        """Register a DELETE route."""
        return self.add_route("DELETE", pattern, name)

    def head(self, pattern: str, name: Optional[str] = None) -> Route:
        """Register a HEAD route."""
        return self.add_route("HEAD", pattern, name)

    def options(self, pattern: str, name: Optional[str] = None) -> Route:
        """Register an OPTIONS route."""
        return self.add_route("OPTIONS", pattern, name)

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def match(self, method: str, path: str) -> MatchResult:
        """First-match-wins lookup; see match_route()."""
        return match_route(self._routes, method, path)

    def allowed_methods(self, path: str) -> List[str]:
        """Methods registered for path; see allowed_methods()."""
        return allowed_methods(self._routes, path)

    def url_for(self, name: str, **params: str) -> Optional[str]:
        """
        Build a path for a named route (reverse routing).

            table.get("/toasters/:toaster_id", name="toaster")
            table.url_for("toaster", toaster_id="42")  # "/toasters/42"

        Returns:
            The path, or None if no route has that name.

        Raises:
            KeyError: If a capture in the pattern has no value in params.
        """
        route = self._named_routes.get(name)
        if route is None:
            return None

        segments = []
        for seg in route.segments:
            if seg.startswith(":"):
                segments.append(str(params[seg[1:]]))
            else:
                segments.append(seg)
        return "/".join(segments)

    # =========================================================================
    # INTROSPECTION
    # =========================================================================

    def routes(self) -> List[Route]:
        """Copy of the registered routes, in order."""
        return list(self._routes)

    def format_routes(self) -> str:
        return format_routes(self._routes)

    def print_routes(self) -> None:
        """
        Print the table (useful for debugging).

        Example output:
            Registered Routes:
            ------------------------------------------------------------
            GET    /
            GET    /toasters/:toaster_id
            POST   /toasters
            ------------------------------------------------------------
        """
        print("Registered Routes:")
        print("-" * 60)
        if self._routes:
            print(self.format_routes())
        print("-" * 60)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({len(self._routes)} routes)"
