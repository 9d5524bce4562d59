"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from cepcast.config.schema import CacheConfig, CepcastConfig, ServicesConfig
from cepcast.ingest import condition_codes
from cepcast.ingest.brasilapi_client import BrasilApiClient

TEST_BASE_URL = "https://test-brasilapi.example.com/api"
FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _restore_condition_codes():
    """Keep runtime registrations from leaking between tests."""
    saved = dict(condition_codes.CONDITION_CODES)
    yield
    condition_codes.CONDITION_CODES.clear()
    condition_codes.CONDITION_CODES.update(saved)


@pytest.fixture
def api_client() -> BrasilApiClient:
    return BrasilApiClient(base_url=TEST_BASE_URL, timeout=1.0)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "cepcast.db"


@pytest.fixture
def test_config(db_path: Path) -> CepcastConfig:
    """Default config pointed at the mocked API and a temp database."""
    return CepcastConfig(
        services=ServicesConfig(base_url=TEST_BASE_URL, timeout_seconds=1.0),
        cache=CacheConfig(db_path=str(db_path)),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path, db_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "services": {"base_url": TEST_BASE_URL, "timeout_seconds": 1.0},
        "cache": {"db_path": str(db_path)},
        "notifications": {"enabled": True},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR
