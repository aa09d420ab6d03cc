"""ABI and bytecode loading from compiler build artifacts.

Provides functions to load Truffle, Hardhat, Foundry or plain solc JSON artifacts
and construct :py:class:`web3.contract.Contract` types.

Artifacts are looked up as ``<artifacts path>/<ContractName>.json``,
e.g. ``build/contracts/UniswapV2Factory.json`` for a Truffle build.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional, Type

from web3 import Web3
from web3.contract.contract import Contract

from eth_v2factory.exceptions import ConfigurationError

# How big are our ABI and contract caches
_CACHE_SIZE = 64


#: Ethereum 0x0000000000000000000000000000000000000000 address
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def get_artifact_path(artifacts: Path, contract_name: str) -> Path:
    """Resolve the JSON artifact file for a contract.

    :param artifacts:
        Build output directory.

    :param contract_name:
        Contract name, e.g. ``UniswapV2Pair``. ``.json`` suffix is optional.

    :raise ConfigurationError:
        ``artifacts`` points to a single file instead of the build directory.
    """
    assert isinstance(artifacts, Path), f"Expected Path, got {type(artifacts)}"
    if artifacts.suffix == ".json" or artifacts.is_file():
        raise ConfigurationError(f"Artifacts path {artifacts} is a file, give the build directory containing {contract_name}.json")

    if not contract_name.endswith(".json"):
        contract_name = f"{contract_name}.json"

    return artifacts / contract_name


@lru_cache(maxsize=_CACHE_SIZE)
def get_abi_by_filename(fname: Path) -> dict | list:
    """Reads a compiler artifact file and returns it.

    You are most likely interested in the keys `abi` and `bytecode` of the JSON file.

    Loaded files are cached in in-process memory.

    :param fname:
        Absolute or relative path to the JSON file.

    :raise ConfigurationError:
        The artifact does not exist or is not JSON.

    :return:
        Full contract interface, including `bytecode`.
        Etherscan style plain ABI files are returned as a list.
    """
    try:
        with open(fname, "rt", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Contract artifact {fname} not found, did you compile the contracts?") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Contract artifact {fname} is not valid JSON: {e}") from e


def get_bytecode(contract_interface: dict | list) -> Optional[str]:
    """Extract the creation bytecode from a loaded artifact.

    :return:
        Bytecode as a hex string or ``None`` if the artifact does not carry one.
    """

    if type(contract_interface) == list:
        # Etherscan
        return None

    bytecode = contract_interface.get("bytecode")

    if type(bytecode) == dict:
        # Sol 0.8 / Forge / Hardhat
        # Contains keys object, sourceMap, linkReferences
        bytecode = bytecode.get("object")
    else:
        # Truffle / legacy solc
        # Bytecode hex is directly in the key.
        pass

    return bytecode


def get_artifact_bytecode(artifacts: Path, contract_name: str) -> Optional[str]:
    """Read the creation bytecode of a contract without a web3 connection.

    Example:

    .. code-block:: python

        bytecode = get_artifact_bytecode(Path("build/contracts"), "UniswapV2Pair")

    :raise ConfigurationError:
        Artifact is missing, or it was compiled from another contract.
    """
    fname = get_artifact_path(artifacts, contract_name)
    contract_interface = get_abi_by_filename(fname)
    expected_name = contract_name.removesuffix(".json")

    if type(contract_interface) == dict:
        # Truffle and Hardhat record the name, Forge does not
        recorded_name = contract_interface.get("contractName")
        if recorded_name and recorded_name != expected_name:
            raise ConfigurationError(f"Artifact {fname} is for contract {recorded_name}, expected {expected_name}")

    return get_bytecode(contract_interface)


@lru_cache(maxsize=_CACHE_SIZE)
def get_contract(
    web3: Web3,
    fname: Path,
    bytecode: Optional[str] = None,
) -> Type[Contract]:
    """Get Contract proxy class from ABI JSON file.

    `See Web3.py documentation on Contract instances <https://web3py.readthedocs.io/en/stable/contracts.html#contract-deployment-example>`_.

    Any results are cached. Web3 connection is part of the cache key.

    Example:

    .. code-block:: python

        UniswapV2Factory = get_contract(web3, Path("build/contracts/UniswapV2Factory.json"))

    :param web3:
        Web3 instance

    :param fname:
        Compiler artifact path.

    :param bytecode:
        Override bytecode payload for the contract

    :return:
        Contract proxy class
    """

    contract_interface = get_abi_by_filename(fname)

    if type(contract_interface) == list:
        abi = contract_interface
    else:
        abi = contract_interface["abi"]

        if bytecode is None:
            bytecode = get_bytecode(contract_interface)

    Contract = web3.eth.contract(abi=abi, bytecode=bytecode)
    return Contract

