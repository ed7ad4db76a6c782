"""
=============================================================================
MATCHER CONFIGURATION
=============================================================================

Centralized configuration for the request line parser and the match log.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m paramsparser --strict ...                       │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── PARAMS_STRICT=1 python -m paramsparser ...                │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import logging
import os
from dataclasses import dataclass


LOG_FORMATS = ("text", "json")

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class MatcherConfig:
    """
    Configuration for request parsing and match logging.

    =========================================================================
    DEVELOPMENT VS PRODUCTION
    =========================================================================

    Development:
        MatcherConfig(
            log_level="DEBUG",   # Every match/no-match is logged
            strict=True,         # Catch sloppy test fixtures early
        )

    Production:
        MatcherConfig(
            log_level="WARNING", # Only malformed lines
            log_format="json",   # For log aggregators
        )

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # PARSING
    # ─────────────────────────────────────────────────────────────────────

    max_line_length: int = 8192
    """
    Longest accepted request line, in characters.
    8 KB is the common default of production servers.
    """

    strict: bool = False
    """
    Validate token shapes: upper-case method, "/"-rooted path,
    HTTP/x.y version. Off by default: tokens are taken verbatim.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """Match log format: 'json' or 'text'."""

    log_matches: bool = True
    """Emit one match log entry per resolved request line."""

    @classmethod
    def from_env(cls) -> "MatcherConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        PARAMS_MAX_LINE_LENGTH  Longest request line (default: 8192)
        PARAMS_STRICT           1/true/yes/on enables strict parsing
        PARAMS_LOG_LEVEL        Logging level (default: INFO)
        PARAMS_LOG_FORMAT       text or json (default: text)
        PARAMS_LOG_MATCHES      1/true/yes/on (default: on)

        =====================================================================
        """
        return cls(
            max_line_length=int(os.getenv("PARAMS_MAX_LINE_LENGTH", "8192")),
            strict=_env_flag("PARAMS_STRICT", False),
            log_level=os.getenv("PARAMS_LOG_LEVEL", "INFO"),
            log_format=os.getenv("PARAMS_LOG_FORMAT", "text"),
            log_matches=_env_flag("PARAMS_LOG_MATCHES", True),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called at construction time by ParamsResolver so a bad setting
        fails before the first request line is seen.
        """
        if self.max_line_length < 1:
            raise ValueError(f"max_line_length must be >= 1, got {self.max_line_length}")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Invalid log_level: {self.log_level}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log_format: {self.log_format}. Must be one of {', '.join(LOG_FORMATS)}."
            )


def setup_logging(config: MatcherConfig) -> None:
    """
    Configure logging based on config.

    Only called by entry points (the CLI); the library itself never
    configures logging on import.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("paramsparser").setLevel(level)
