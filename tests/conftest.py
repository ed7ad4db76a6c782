"""
pytest configuration and fixtures.
"""

from typing import List, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from paramsparser import MatcherConfig, RouteTable


@pytest.fixture
def routes() -> List[Tuple[str, str]]:
    """The toaster shop route table, most specific routes first."""
    return [
        ("GET", "/"),
        ("GET", "/toasters"),
        ("GET", "/toasters/new"),
        ("GET", "/toasters/:toaster_id"),
        ("GET", "/users/sign_in"),
        ("POST", "/toasters"),
        ("POST", "/users/sign_in"),
    ]


@pytest.fixture
def route_table(routes) -> RouteTable:
    """Same routes registered in a RouteTable."""
    return RouteTable(routes)


@pytest.fixture
def config() -> MatcherConfig:
    """Default test configuration."""
    return MatcherConfig(log_level="DEBUG")


@pytest.fixture
def routes_file(tmp_path: Path) -> Path:
    """A routes file with comments and blank lines."""
    path = tmp_path / "routes.txt"
    path.write_text(
        "# toaster shop\n"
        "GET /\n"
        "\n"
        "GET /toasters/new\n"
        "GET /toasters/:toaster_id\n"
        "POST /toasters\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PARAMS_* variables from the developer's shell out of tests."""
    for name in (
        "PARAMS_MAX_LINE_LENGTH",
        "PARAMS_STRICT",
        "PARAMS_LOG_LEVEL",
        "PARAMS_LOG_FORMAT",
        "PARAMS_LOG_MATCHES",
    ):
        monkeypatch.delenv(name, raising=False)
