"""Deployment registry persistence."""

import json

import pytest

from eth_v2factory.exceptions import ConfigurationError
from eth_v2factory.registry import DeploymentRegistry, RegistryEntry

FACTORY = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"


def test_registry_round_trip(registry_path):
    """Recorded entries survive reopening the file."""
    registry = DeploymentRegistry(registry_path)
    assert registry.get("development", "UniswapV2Factory") is None

    registry.record("development", "UniswapV2Factory", RegistryEntry(address=FACTORY, chain_id=1337, block_number=1))
    assert registry_path.exists()

    reopened = DeploymentRegistry(registry_path)
    entry = reopened.get("development", "UniswapV2Factory")
    assert entry.address == FACTORY
    assert entry.chain_id == 1337
    assert entry.block_number == 1
    assert entry.deployed_at is not None

    # Other networks are separate
    assert reopened.get("base", "UniswapV2Factory") is None

    data = json.loads(registry_path.read_text())
    assert data["development"]["UniswapV2Factory"]["address"] == FACTORY


def test_registry_in_memory(tmp_path):
    """No path, no file."""
    registry = DeploymentRegistry()
    registry.record("development", "UniswapV2Factory", RegistryEntry(address=FACTORY, chain_id=1337))
    assert registry.get("development", "UniswapV2Factory").address == FACTORY
    assert list(tmp_path.iterdir()) == []


def test_registry_bad_json(registry_path):
    registry_path.write_text("{not json")
    with pytest.raises(ConfigurationError):
        DeploymentRegistry(registry_path)


def test_registry_bad_format(registry_path):
    registry_path.write_text(json.dumps({"development": {"UniswapV2Factory": {"foo": 1}}}))
    with pytest.raises(ConfigurationError):
        DeploymentRegistry(registry_path)
