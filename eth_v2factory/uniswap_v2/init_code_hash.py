"""Pair contract init code hash.

The init code hash is keccak-256 of the pair contract creation bytecode.
Off-chain code uses it to derive pair addresses without asking the chain
(see :py:func:`eth_v2factory.uniswap_v2.utils.pair_for`), so the value must match
byte for byte what the factory uses with ``CREATE2``.

The hash is the same value as web3.js ``soliditySha3(bytecode)``
and ``Web3.solidity_keccak(["bytes"], [bytecode])``.
"""

import re
from pathlib import Path

from eth_typing import HexStr
from web3 import Web3

from eth_v2factory.abi import get_artifact_bytecode
from eth_v2factory.exceptions import ConfigurationError, InputError
from eth_v2factory.uniswap_v2.constants import PAIR_CONTRACT_NAME

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def decode_bytecode(bytecode: bytes | str) -> bytes:
    """Turn artifact bytecode into raw bytes.

    :param bytecode:
        Raw bytes, or a hex string with or without ``0x`` prefix.

    :raise InputError:
        Bytecode is missing, not hex, or has unlinked library placeholders.
    """
    if bytecode is None:
        raise InputError("Pair bytecode missing")

    if isinstance(bytecode, (bytes, bytearray)):
        data = bytes(bytecode)
    elif isinstance(bytecode, str):
        text = bytecode.strip()
        if text[0:2].lower() == "0x":
            text = text[2:]

        if "__" in text:
            # Solidity library link placeholder, e.g. __$1d6c...$__
            raise InputError("Pair bytecode has unlinked library references, link the libraries before hashing")

        if not _HEX_PATTERN.match(text):
            raise InputError("Pair bytecode is not a hex string")

        if len(text) % 2 != 0:
            raise InputError(f"Pair bytecode has odd number of hex digits: {len(text)}")

        data = bytes.fromhex(text)
    else:
        raise InputError(f"Unsupported pair bytecode type: {type(bytecode)}")

    if not data:
        raise InputError("Pair bytecode is empty, is the contract abstract?")

    return data


def compute_init_code_hash(bytecode: bytes | str) -> HexStr:
    """Compute the init code hash of a creation bytecode.

    Pure function, does not touch the network.

    Example:

    .. code-block:: python

        init_code_hash = compute_init_code_hash(pair_artifact["bytecode"])
        print(f"INIT_CODE_HASH: {init_code_hash}")

    :param bytecode:
        Pair contract creation bytecode

    :return:
        0x prefixed 32 bytes hex digest
    """
    data = decode_bytecode(bytecode)
    return Web3.to_hex(Web3.keccak(data))


def load_pair_bytecode(artifacts: Path, contract_name: str = PAIR_CONTRACT_NAME) -> str:
    """Read the pair creation bytecode from the build artifacts.

    :raise InputError:
        Artifact or its bytecode is missing.
    """
    try:
        bytecode = get_artifact_bytecode(artifacts, contract_name)
    except ConfigurationError as e:
        raise InputError(f"Cannot read {contract_name} bytecode: {e}") from e

    if not bytecode:
        raise InputError(f"Artifact for {contract_name} in {artifacts} has no bytecode")

    return bytecode
