"""Build artifact loading."""

import json

import pytest
from web3 import Web3

from eth_v2factory.abi import get_artifact_bytecode, get_artifact_path, get_bytecode, get_contract
from eth_v2factory.exceptions import ConfigurationError
from tests.contract_fixtures import FACTORY_BYTECODE, PAIR_BYTECODE


def test_get_bytecode_formats():
    """Truffle, Hardhat/Forge and Etherscan artifacts."""
    assert get_bytecode({"abi": [], "bytecode": "0x6001"}) == "0x6001"
    assert get_bytecode({"abi": [], "bytecode": {"object": "0x6002", "sourceMap": ""}}) == "0x6002"
    assert get_bytecode({"abi": []}) is None
    assert get_bytecode([]) is None


def test_get_artifact_path(artifacts):
    assert get_artifact_path(artifacts, "UniswapV2Pair") == artifacts / "UniswapV2Pair.json"
    assert get_artifact_path(artifacts, "UniswapV2Pair.json") == artifacts / "UniswapV2Pair.json"


def test_get_artifact_path_file(artifacts):
    """A single artifact file cannot stand in for the build directory."""
    with pytest.raises(ConfigurationError):
        get_artifact_path(artifacts / "UniswapV2Factory.json", "UniswapV2Pair")


def test_get_artifact_bytecode(artifacts):
    assert get_artifact_bytecode(artifacts, "UniswapV2Pair") == PAIR_BYTECODE


def test_artifact_for_other_contract(tmp_path):
    """File named after the pair but compiled from the factory."""
    artifact = {"contractName": "UniswapV2Factory", "abi": [], "bytecode": FACTORY_BYTECODE}
    (tmp_path / "UniswapV2Pair.json").write_text(json.dumps(artifact))
    with pytest.raises(ConfigurationError):
        get_artifact_bytecode(tmp_path, "UniswapV2Pair")


def test_forge_artifact_without_name(tmp_path):
    artifact = {"abi": [], "bytecode": {"object": PAIR_BYTECODE}}
    (tmp_path / "UniswapV2Pair.json").write_text(json.dumps(artifact))
    assert get_artifact_bytecode(tmp_path, "UniswapV2Pair") == PAIR_BYTECODE


def test_get_contract(web3: Web3, artifacts):
    """Contract proxy class carries the artifact ABI and bytecode."""
    Factory = get_contract(web3, artifacts / "UniswapV2Factory.json")
    assert Web3.to_hex(Factory.bytecode) == FACTORY_BYTECODE
    assert {f["name"] for f in Factory.abi if f["type"] == "function"} == {"feeTo", "feeToSetter", "setFeeTo"}


def test_missing_artifact(tmp_path):
    with pytest.raises(ConfigurationError):
        get_artifact_bytecode(tmp_path, "UniswapV2Factory")


def test_broken_artifact(tmp_path):
    (tmp_path / "UniswapV2Factory.json").write_text("{")
    with pytest.raises(ConfigurationError):
        get_artifact_bytecode(tmp_path, "UniswapV2Factory")
