"""
Shared test configuration for CLI Compat.

Provides registry fixtures, a sample registry file and marker assignment
based on test location.
"""

from pathlib import Path

import pytest
import yaml

from cli_compat.contracts.models import DependencyRecord, DeprecationRecord, Tier
from cli_compat.registry import DeprecationRegistry

SAMPLE_REGISTRY = {
    "features": [
        {
            "id": "op log --no-graph-legacy",
            "tier": "standard",
            "deprecated_at": 10,
            "replacement": "op log --no-graph",
        },
        {"id": "debug clear-predecessors", "tier": "niche", "deprecated_at": 5},
        {"id": "legacy-backend", "tier": "standard", "deprecated_at": 26, "removal_at": 30},
    ],
    "dependencies": [
        {
            "id": "backend.libgit2",
            "tier": "standard",
            "deprecated_at": 20,
            "gated_behind": "legacy-backend",
        },
        {
            "id": "fetch.ssh-agent",
            "tier": "niche",
            "deprecated_at": 12,
            "gated_behind": "ssh-agent-compat",
        },
    ],
}


@pytest.fixture
def registry():
    """Registry with one record per tier and kind, frozen."""
    reg = DeprecationRegistry()
    reg.register(
        "op log --no-graph-legacy",
        DeprecationRecord(tier=Tier.standard, deprecated_at=10, replacement="op log --no-graph"),
    )
    reg.register("debug clear-predecessors", DeprecationRecord(tier=Tier.niche, deprecated_at=5))
    reg.register(
        "backend.libgit2",
        DependencyRecord(tier=Tier.standard, deprecated_at=20, gated_behind="legacy-backend"),
    )
    return reg.freeze()


@pytest.fixture
def sample_registry_data():
    return yaml.safe_load(yaml.safe_dump(SAMPLE_REGISTRY))


@pytest.fixture
def registry_file(tmp_path: Path) -> Path:
    path = tmp_path / "deprecations.yaml"
    path.write_text(yaml.safe_dump(SAMPLE_REGISTRY), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep host environment settings out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("CLI_COMPAT_"):
            monkeypatch.delenv(key, raising=False)


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "contract: Contract tests")


def pytest_collection_modifyitems(config, items):
    """Add default markers based on test location."""
    for item in items:
        test_path = str(item.fspath)
        if "unit" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "contract" in test_path:
            item.add_marker(pytest.mark.contract)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI commands reconfigure the root logger; undo that after each test."""
    import logging

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
