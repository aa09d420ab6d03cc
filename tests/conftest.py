"""Shared fixtures.

Tests run against EthereumTester in-process chain with build artifacts
written to a temporary directory.
"""

import json
from pathlib import Path

import pytest
from web3 import EthereumTesterProvider, Web3

from eth_v2factory.registry import DeploymentRegistry
from tests.contract_fixtures import FACTORY_ABI, FACTORY_BYTECODE, PAIR_BYTECODE


@pytest.fixture
def tester_provider():
    # https://web3py.readthedocs.io/en/stable/examples.html#contract-unit-tests-in-python
    return EthereumTesterProvider()


@pytest.fixture
def web3(tester_provider):
    """Set up a local unit testing blockchain."""
    return Web3(tester_provider)


@pytest.fixture()
def deployer(web3) -> str:
    """Deploy account.

    Do some account allocation for tests.
    """
    return web3.eth.accounts[0]


@pytest.fixture()
def user_1(web3) -> str:
    """User account."""
    return web3.eth.accounts[1]


@pytest.fixture()
def user_2(web3) -> str:
    """User account."""
    return web3.eth.accounts[2]


@pytest.fixture()
def artifacts(tmp_path) -> Path:
    """Truffle style build directory with the factory and the pair artifacts."""
    path = tmp_path / "build" / "contracts"
    path.mkdir(parents=True)

    factory = {"contractName": "UniswapV2Factory", "abi": FACTORY_ABI, "bytecode": FACTORY_BYTECODE}
    pair = {"contractName": "UniswapV2Pair", "abi": [], "bytecode": PAIR_BYTECODE}

    (path / "UniswapV2Factory.json").write_text(json.dumps(factory))
    (path / "UniswapV2Pair.json").write_text(json.dumps(pair))
    return path


@pytest.fixture()
def registry_path(tmp_path) -> Path:
    return tmp_path / "deployments.json"


@pytest.fixture()
def registry(registry_path) -> DeploymentRegistry:
    return DeploymentRegistry(registry_path)
