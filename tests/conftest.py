import sys
from pathlib import Path
from typing import Generator

import httpx
import pytest

# Ensure local source package (src/restbuilder) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from restbuilder import RestClient  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("RESTBUILDER_BASE_URL", raising=False)
    monkeypatch.delenv("RESTBUILDER_TIMEOUT", raising=False)
    monkeypatch.delenv("RESTBUILDER_DEBUG", raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com/v1/"


@pytest.fixture
def http_client() -> Generator[httpx.Client, None, None]:
    with httpx.Client() as client:
        yield client


@pytest.fixture
def client(http_client: httpx.Client, base_url: str) -> RestClient:
    return RestClient(http_client).base(base_url)
