"""Deployer and fee setter account selection.

The factory is deployed by one account and configured with a fee setter account.
Both roles are given explicitly with :py:class:`DeploymentRoles`.
If the operator does not name a fee setter, the deployer takes both roles.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress
from web3 import Web3
from web3.exceptions import Web3Exception

from eth_v2factory.exceptions import ConfigurationError, NetworkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeploymentRoles:
    """Who deploys the factory and who controls its fees."""

    #: Account sending the construction transaction
    deployer: HexAddress

    #: Account passed to the factory constructor as ``feeToSetter``
    fee_to_setter: HexAddress


def to_checksum_account(address: str, role: str) -> HexAddress:
    """Validate and normalise an address.

    :param role:
        Used in the error message

    :raise ConfigurationError:
        Not an Ethereum address
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ConfigurationError(f"Bad {role} address: {address!r}")
    return Web3.to_checksum_address(address)


def resolve_roles(
    accounts: Sequence[str],
    fee_to_setter: Optional[str] = None,
) -> DeploymentRoles:
    """Pick the deployer and the fee setter.

    Example:

    .. code-block:: python

        roles = resolve_roles(web3.eth.accounts)
        assert roles.deployer == roles.fee_to_setter == web3.eth.accounts[0]

    :param accounts:
        Ordered list of accounts made available by the environment.
        The first account is the deployer.

    :param fee_to_setter:
        Explicit fee setter. If not given, the deployer is the fee setter.

    :raise ConfigurationError:
        No accounts available or an address is malformed.
    """
    if not accounts:
        raise ConfigurationError("No accounts available to deploy the factory, check your node or PRIVATE_KEY configuration")

    deployer = to_checksum_account(accounts[0], "deployer")

    if fee_to_setter is None:
        fee_to_setter = deployer
    else:
        fee_to_setter = to_checksum_account(fee_to_setter, "fee setter")

    roles = DeploymentRoles(deployer=deployer, fee_to_setter=fee_to_setter)
    logger.info("Deployer is %s, fee setter is %s", roles.deployer, roles.fee_to_setter)
    return roles


def fetch_node_accounts(web3: Web3) -> list[HexAddress]:
    """Get the accounts the JSON-RPC node signs for.

    Only development nodes (Anvil, Ganache, EthereumTester) have any.

    :raise NetworkError:
        The node could not be queried.
    """
    try:
        return list(web3.eth.accounts)
    except (OSError, Web3Exception) as e:
        raise NetworkError(f"Could not read accounts from the node: {e}") from e


def load_local_account(private_key: str) -> LocalAccount:
    """Create a local signing account from a hex private key.

    :raise ConfigurationError:
        The key is not a valid private key.
    """
    if not private_key:
        raise ConfigurationError("PRIVATE_KEY is empty")
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    try:
        account = Account.from_key(private_key)
    except (ValueError, TypeError) as e:
        # Do not echo the key back
        raise ConfigurationError("PRIVATE_KEY is not a valid private key") from e

    logger.info("Using local signing account %s", account.address)
    return account
