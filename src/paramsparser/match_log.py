"""
=============================================================================
MATCH LOGGING
=============================================================================

Structured logging of routing outcomes with timing and correlation IDs.

=============================================================================
LOG FORMATS
=============================================================================

    TEXT FORMAT (default):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ [a1b2c3d4] "GET /toasters/42" matched /toasters/:toaster_id         │
    │            {toaster_id=42} 0.01ms                                   │
    └─────────────────────────────────────────────────────────────────────┘

    JSON FORMAT (for log aggregators):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ {                                                                   │
    │   "match_id": "a1b2c3d4",                                           │
    │   "method": "GET",                                                  │
    │   "path": "/toasters/42",                                           │
    │   "outcome": "matched",                                             │
    │   "pattern": "/toasters/:toaster_id",                               │
    │   "params": {"toaster_id": "42"},                                   │
    │   "duration_ms": 0.01                                               │
    │ }                                                                   │
    └─────────────────────────────────────────────────────────────────────┘

Outcomes:
    matched   - a route was found                  (INFO)
    no_match  - well-formed line, no route         (INFO)
    malformed - the line could not be parsed       (WARNING)

=============================================================================
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .http.request import RequestLine, RequestLineError
from .http.router import Matched, MatchResult


# ═══════════════════════════════════════════════════════════════════════════
# Namespaced logger so match logs can be routed separately:
#   logging.getLogger("paramsparser.match").addHandler(file_handler)
# ═══════════════════════════════════════════════════════════════════════════
logger = logging.getLogger("paramsparser.match")

MATCHED = "matched"
NO_MATCH = "no_match"
MALFORMED = "malformed"

NextMatcher = Callable[[RequestLine], MatchResult]


@dataclass
class MatchLog:
    """
    Structured log entry for one resolved request line.

    pattern is the matched route's pattern, or "" when nothing matched.
    """

    match_id: str
    method: str
    path: str
    outcome: str
    duration_ms: float
    timestamp: str
    pattern: str = ""
    params: Dict[str, str] = field(default_factory=dict)
    error: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        entry = {
            "match_id": self.match_id,
            "method": self.method,
            "path": self.path,
            "outcome": self.outcome,
            "pattern": self.pattern,
            "params": dict(self.params),
            "duration_ms": round(self.duration_ms, 2),
            "timestamp": self.timestamp,
        }
        if self.error:
            entry["error"] = self.error
        return entry

    def to_text(self) -> str:
        """Format as a single human readable line."""
        text = f'[{self.match_id}] "{self.method} {self.path}" {self.outcome}'
        if self.pattern:
            text += f" {self.pattern}"
        if self.params:
            pairs = ", ".join(f"{key}={value}" for key, value in self.params.items())
            text += f" {{{pairs}}}"
        if self.error:
            text += f" ({self.error})"
        return text + f" {self.duration_ms:.2f}ms"


class MatchLogger:
    """
    Times a match call and emits a MatchLog entry for it.

    =========================================================================
    USAGE
    =========================================================================

        match_logger = MatchLogger(log_format="json")
        result = match_logger(request, lambda req: table.match(req.method, req.path))

    Wraps the matcher the way a logging middleware wraps a handler: the
    matcher runs unchanged and its result is passed straight through.

    =========================================================================
    """

    def __init__(
        self,
        log_format: str = "text",
        log_level: int = logging.INFO,
        enabled: bool = True,
    ):
        """
        Args:
            log_format: "text" (one line) or "json" (machine parseable).
            log_level: Level for matched / no_match entries.
            enabled: When False, __call__ only forwards to the matcher.
        """
        self.log_format = log_format
        self.log_level = log_level
        self.enabled = enabled

    def __call__(self, request: RequestLine, next: NextMatcher) -> MatchResult:
        """Run next(request), log the outcome and return the result."""
        if not self.enabled:
            return next(request)

        match_id = str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        try:
            result = next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"[{match_id}] Match failed: {request.method} {request.path} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000

        entry = MatchLog(
            match_id=match_id,
            method=request.method,
            path=request.path,
            outcome=MATCHED if isinstance(result, Matched) else NO_MATCH,
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )
        if isinstance(result, Matched):
            entry.pattern = result.route.pattern if result.route else ""
            entry.params = dict(result.params)

        self._emit(self.log_level, entry)
        return result

    def log_malformed(self, line: object, error: RequestLineError) -> Optional[MatchLog]:
        """Log a request line the parser rejected. Returns the entry emitted."""
        if not self.enabled:
            return None

        entry = MatchLog(
            match_id=str(uuid.uuid4())[:8],
            method="-",
            path="-",
            outcome=MALFORMED,
            duration_ms=0.0,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
            error=f"{error.status_code} {error}",
        )
        logger.debug("Malformed request line: %r", line)
        self._emit(logging.WARNING, entry)
        return entry

    def _emit(self, level: int, entry: MatchLog) -> None:
        if self.log_format == "json":
            logger.log(level, json.dumps(entry.to_dict()))
        else:
            logger.log(level, entry.to_text())
