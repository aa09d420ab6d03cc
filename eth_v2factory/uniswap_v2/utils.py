"""Uniswap v2 pair address derivation.

Pairs are created with ``CREATE2``, so anyone holding the factory address
and the pair init code hash can compute a pair address without a chain lookup::

    address = keccak256(0xff ++ factory ++ keccak256(token0 ++ token1) ++ init_code_hash)[12:]
"""

from typing import Tuple

from eth_typing import HexAddress, HexStr
from hexbytes import HexBytes
from web3 import Web3

from eth_v2factory.abi import ZERO_ADDRESS
from eth_v2factory.exceptions import InputError

#: CREATE2 address derivation prefix byte
CREATE2_PREFIX = b"\xff"


def sort_tokens(token_a: HexAddress, token_b: HexAddress) -> Tuple[HexAddress, HexAddress]:
    """Order a token pair the way the factory stores it, lower address first.

    :raise InputError:
        Same token twice, or the zero address.
    """
    token_a = Web3.to_checksum_address(token_a)
    token_b = Web3.to_checksum_address(token_b)

    if token_a == token_b:
        raise InputError(f"Cannot make a pair of {token_a} with itself")

    token_0, token_1 = sorted([token_a, token_b], key=lambda a: int(a, 16))
    if token_0 == ZERO_ADDRESS:
        raise InputError("Zero address is not a token")

    return token_0, token_1


def decode_init_code_hash(init_code_hash: HexStr | bytes) -> bytes:
    """Validate an init code hash and return its 32 raw bytes.

    :raise InputError:
        Not a 32 bytes hex digest.
    """
    try:
        digest = HexBytes(init_code_hash)
    except (ValueError, TypeError) as e:
        raise InputError(f"Init code hash {init_code_hash!r} is not hex: {e}") from e

    if len(digest) != 32:
        raise InputError(f"Init code hash must be 32 bytes, got {len(digest)}: {init_code_hash!r}")

    return bytes(digest)


def pair_for(factory: HexAddress, token_a: HexAddress, token_b: HexAddress, init_code_hash: HexStr) -> HexAddress:
    """Compute the address of the pair contract the factory creates for two tokens.

    Example:

    .. code-block:: python

        init_code_hash = compute_init_code_hash(load_pair_bytecode(Path("build/contracts")))
        pair_address = pair_for(factory.address, usdc, weth, init_code_hash)

    :param factory:
        Factory contract address

    :param token_a:
        Either token, order does not matter

    :param token_b:
        The other token

    :param init_code_hash:
        Init code hash of the pair contract,
        see :py:func:`eth_v2factory.uniswap_v2.init_code_hash.compute_init_code_hash`

    :raise InputError:
        Malformed init code hash or token pair

    :return:
        Checksummed pair contract address
    """
    salt = Web3.keccak(b"".join(HexBytes(token) for token in sort_tokens(token_a, token_b)))
    factory_bytes = HexBytes(Web3.to_checksum_address(factory))
    digest = Web3.keccak(CREATE2_PREFIX + factory_bytes + salt + decode_init_code_hash(init_code_hash))
    return Web3.to_checksum_address(Web3.to_hex(digest[12:]))
