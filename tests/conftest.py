"""Shared test fixtures."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from dsn_json.config import DsnJsonConfig, SectionErrorPolicy
from dsn_json.diagnostics import Diagnostics

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_dsn_path() -> Path:
    return FIXTURES_DIR / "simple_board.dsn"


@pytest.fixture
def sample_dsn(sample_dsn_path: Path) -> str:
    return sample_dsn_path.read_text(encoding="utf-8")


@pytest.fixture
def diagnostics() -> Diagnostics:
    return Diagnostics()


@pytest.fixture
def strict_config() -> DsnJsonConfig:
    return DsnJsonConfig(on_section_error=SectionErrorPolicy.RAISE)


@pytest.fixture
def lenient_config() -> DsnJsonConfig:
    return DsnJsonConfig(on_section_error=SectionErrorPolicy.DROP)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DSN_JSON_ON_SECTION_ERROR",
        "DSN_JSON_MAX_DEPTH",
        "DSN_JSON_LOG_LEVEL",
        "DSN_JSON_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logger = logging.getLogger("dsn_json")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
