"""
=============================================================================
REQUEST LINE PARSER
=============================================================================

Turns the first line of an HTTP/1.1 request into a structured RequestLine.
Only the request line is handled: no headers, no body, no query string.

=============================================================================
REQUEST LINE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        REQUEST LINE                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │        GET /toasters/42 HTTP/1.1                                    │
    │        ─┬─ ──────┬───── ────┬───                                    │
    │         │        │          │                                        │
    │       Method    Path     Version                                     │
    │         │        │          │                                        │
    │         ▼        ▼          ▼                                        │
    │      matched  split on   kept for                                    │
    │      exactly  "/" by     diagnostics,                                │
    │      (case!)  router     never matched                               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The method and path are returned VERBATIM. "get" is not "GET": callers
register routes with the same case they expect on the wire.

=============================================================================
MALFORMED INPUT
=============================================================================

A request line that does not split into exactly three whitespace-separated
tokens is a contract violation. It raises RequestLineError, which carries
the status code a server would answer with:

    400 Bad Request                 - wrong token count, bad method/path
    414 URI Too Long                - line exceeds max_line_length
    505 HTTP Version Not Supported  - strict mode, version not HTTP/x.y

A malformed line is never reported as "no match": the router is not even
consulted.

=============================================================================
INTERVIEW QUESTIONS ABOUT REQUEST LINES
=============================================================================

Q: "Why not just do line.split(' ')?"
A: "split(' ') yields empty tokens for doubled spaces and keeps the
   trailing CRLF glued to the version. split() with no argument collapses
   runs of whitespace and drops the line ending for free."

Q: "Should the parser upper-case the method?"
A: "RFC 9110 says methods are case-sensitive. Normalising hides client
   bugs, so we keep the token as sent and let the route table decide."

=============================================================================
"""

import logging
import re
from dataclasses import dataclass
from typing import Union


logger = logging.getLogger(__name__)


class RequestLineError(Exception):
    """
    Raised when a request line cannot be decomposed.

    Like an HTTP parse error, it carries the status code that should be
    returned to the client if the line came off a socket.
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class RequestLine:
    """
    A parsed request line.

    Attributes:
        method:  First token, verbatim ("GET", "POST", ...)
        path:    Second token, verbatim, leading "/" kept
        version: Third token ("HTTP/1.1"); never used for matching
    """

    method: str
    path: str
    version: str = "HTTP/1.1"

    def __str__(self) -> str:
        return f"{self.method} {self.path} {self.version}"


class RequestLineParser:
    """
    Splits raw request lines into RequestLine objects.

    ==========================================================================
    PARSING STEPS
    ==========================================================================

        "GET /toasters/42 HTTP/1.1\\r\\n"
              │
              ▼
        1. Decode bytes (latin-1), reject other types
        2. Length check            → RequestLineError(414)
        3. Whitespace split        → exactly 3 tokens, else RequestLineError(400)
        4. Strict checks (opt-in)  → method token, "/" path, HTTP/x.y version
              │
              ▼
        RequestLine(method="GET", path="/toasters/42", version="HTTP/1.1")

    ==========================================================================
    """

    # Strict mode only: RFC 9110 token restricted to upper-case letters,
    # the same shape the router expects for registered methods.
    METHOD_PATTERN = re.compile(r"^[A-Z]+$")
    VERSION_PATTERN = re.compile(r"^HTTP/\d\.\d$")

    def __init__(self, max_line_length: int = 8192, strict: bool = False):
        """
        Args:
            max_line_length: Longest accepted line in characters. Longer
                             lines are rejected with 414 URI Too Long.
            strict: Also validate the shape of each token.
        """
        self.max_line_length = max_line_length
        self.strict = strict

    def parse(self, line: Union[str, bytes]) -> RequestLine:
        """
        Parse a single request line.

        Args:
            line: "METHOD PATH VERSION", optionally with a trailing CRLF.

        Returns:
            The parsed RequestLine.

        Raises:
            RequestLineError: If the line is malformed.
            TypeError: If line is neither str nor bytes.
        """
        if isinstance(line, bytes):
            # Request lines are ASCII on the wire; latin-1 never fails
            line = line.decode("latin-1")
        elif not isinstance(line, str):
            raise TypeError(
                f"request line must be str or bytes, not {type(line).__name__}"
            )

        if len(line) > self.max_line_length:
            raise RequestLineError(
                f"Request line too long: {len(line)} > {self.max_line_length}",
                status_code=414,
            )

        tokens = line.split()
        if len(tokens) != 3:
            raise RequestLineError(
                f"Invalid request line: expected 3 tokens, got {len(tokens)}: {line!r}"
            )

        method, path, version = tokens

        if self.strict:
            self._validate(method, path, version)

        logger.debug("Parsed request line: %s %s %s", method, path, version)
        return RequestLine(method=method, path=path, version=version)

    def _validate(self, method: str, path: str, version: str) -> None:
        if not self.METHOD_PATTERN.match(method):
            raise RequestLineError(f"Invalid method: {method}")

        if not path.startswith("/"):
            raise RequestLineError(f"Invalid path: must start with '/': {path}")

        if not self.VERSION_PATTERN.match(version):
            raise RequestLineError(
                f"Unsupported HTTP version: {version}",
                status_code=505,
            )


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def parse_request_line(
    line: Union[str, bytes],
    max_line_length: int = 8192,
    strict: bool = False,
) -> RequestLine:
    """
    Parse a request line in one call.

    Use RequestLineParser directly to parse many lines with the same
    settings.
    """
    parser = RequestLineParser(max_line_length=max_line_length, strict=strict)
    return parser.parse(line)
