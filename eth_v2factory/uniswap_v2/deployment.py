"""Uniswap v2 factory deployment.

- Deploy ``UniswapV2Factory`` once per network

- Reuse the recorded factory when the deployment is run again

- Post-deployment fee recipient configuration, see :py:func:`set_fee_to`
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress, HexStr
from hexbytes import HexBytes
from web3 import Web3
from web3.contract.contract import Contract
from web3.exceptions import Web3Exception

from eth_v2factory.abi import get_artifact_path, get_contract
from eth_v2factory.accounts import to_checksum_account
from eth_v2factory.deploy import DEFAULT_CONFIRMATION_TIMEOUT, deploy_contract, transact_and_confirm
from eth_v2factory.exceptions import ConfigurationError, InvariantViolation, NetworkError
from eth_v2factory.registry import DeploymentRegistry, RegistryEntry
from eth_v2factory.tx import get_sender_address
from eth_v2factory.uniswap_v2.constants import FACTORY_CONTRACT_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UniswapV2FactoryDeployment:
    """Describe a deployed Uniswap v2 factory."""

    #: The Web3 instance for which all the contracts here are bound
    web3: Web3

    #: Network name the factory is recorded under
    network: str

    #: Factory contract proxy.
    #: `See the Solidity source code <https://github.com/Uniswap/v2-core/blob/master/contracts/UniswapV2Factory.sol>`__.
    factory: Contract

    #: True if the factory was found in the registry and no transaction was sent
    reused: bool

    #: Deployment transaction, if known
    tx_hash: Optional[HexStr] = None

    #: Block where the factory was deployed, if known
    block_number: Optional[int] = None

    @property
    def address(self) -> HexAddress:
        return self.factory.address


def fetch_chain_id(web3: Web3) -> int:
    """Read the chain id of the connected node.

    :raise NetworkError:
        Node not reachable.
    """
    try:
        return web3.eth.chain_id
    except (OSError, Web3Exception) as e:
        raise NetworkError(f"Could not read chain id: {e}") from e


def has_code(web3: Web3, address: HexAddress) -> bool:
    """Is there a contract at the address."""
    try:
        return len(web3.eth.get_code(address)) > 0
    except (OSError, Web3Exception) as e:
        raise NetworkError(f"Could not read code at {address}: {e}") from e


def fetch_fee_to_setter(factory: Contract) -> HexAddress:
    """Read ``feeToSetter()`` from the factory.

    :raise NetworkError:
        The call failed.
    """
    try:
        return factory.functions.feeToSetter().call()
    except (OSError, Web3Exception, ValueError) as e:
        raise NetworkError(f"Could not read feeToSetter() from factory {factory.address}: {e}") from e


def fetch_fee_to(factory: Contract) -> HexAddress:
    """Read ``feeTo()`` from the factory.

    Zero address means the protocol fee is switched off.

    :raise NetworkError:
        The call failed.
    """
    try:
        return factory.functions.feeTo().call()
    except (OSError, Web3Exception, ValueError) as e:
        raise NetworkError(f"Could not read feeTo() from factory {factory.address}: {e}") from e


def deploy_factory(
    web3: Web3,
    network: str,
    fee_to_setter: HexAddress,
    deployer: HexAddress | LocalAccount,
    *,
    artifacts: Path,
    registry: DeploymentRegistry,
    init_code_hash: Optional[HexStr] = None,
    gas: Optional[int] = None,
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
) -> UniswapV2FactoryDeployment:
    """Deploy a Uniswap v2 factory, or return the one already deployed on the network.

    Deployment is idempotent per network: if the registry has a factory for ``network``
    and there is code at the recorded address, no transaction is sent.

    Example:

    .. code-block:: python

        registry = DeploymentRegistry(Path("deployments.json"))
        deployment = deploy_factory(
            web3,
            "development",
            fee_to_setter=deployer,
            deployer=deployer,
            artifacts=Path("build/contracts"),
            registry=registry,
        )
        print(f"Uniswap v2 factory is {deployment.address}")

    :param web3:
        Web3 instance

    :param network:
        Network name the deployment is recorded under

    :param fee_to_setter:
        Factory constructor argument

    :param deployer:
        Node-managed address or a local signing account

    :param artifacts:
        Build artifacts directory containing ``UniswapV2Factory.json``

    :param registry:
        Where deployed addresses are recorded

    :param init_code_hash:
        Pair init code hash, stored in the registry for reference

    :param gas:
        Gas limit for the deployment. Estimated if not given.

    :param confirmation_timeout:
        Seconds to wait for the deployment transaction

    :raise ConfigurationError:
        The network name is recorded for a different chain

    :raise DeploymentError:
        The construction transaction failed

    :raise NetworkError:
        The node could not be reached
    """
    assert network, "Network name missing"

    chain_id = fetch_chain_id(web3)
    Factory = get_contract(web3, get_artifact_path(artifacts, FACTORY_CONTRACT_NAME))

    entry = registry.get(network, FACTORY_CONTRACT_NAME)
    if entry is not None:
        if entry.chain_id != chain_id:
            raise ConfigurationError(f"Network {network} has {FACTORY_CONTRACT_NAME} recorded on chain {entry.chain_id}, but the node is chain {chain_id}")

        address = Web3.to_checksum_address(entry.address)
        if has_code(web3, address):
            logger.info("%s already deployed on %s at %s, not deploying again", FACTORY_CONTRACT_NAME, network, address)
            return UniswapV2FactoryDeployment(
                web3=web3,
                network=network,
                factory=Factory(address),
                reused=True,
                tx_hash=entry.tx_hash,
                block_number=entry.block_number,
            )

        logger.warning("Recorded %s at %s on %s has no code, node has been reset? Deploying again.", FACTORY_CONTRACT_NAME, address, network)

    registry.check_writable()

    logger.info("Deploying %s on %s (chain %d) with feeToSetter %s", FACTORY_CONTRACT_NAME, network, chain_id, fee_to_setter)

    factory, tx_receipt = deploy_contract(
        web3,
        Factory,
        deployer,
        fee_to_setter,
        contract_name=FACTORY_CONTRACT_NAME,
        gas=gas,
        confirmation_timeout=confirmation_timeout,
    )

    tx_hash = Web3.to_hex(HexBytes(tx_receipt["transactionHash"]))
    try:
        registry.record(
            network,
            FACTORY_CONTRACT_NAME,
            RegistryEntry(
                address=factory.address,
                chain_id=chain_id,
                tx_hash=tx_hash,
                block_number=tx_receipt["blockNumber"],
                deployer=get_sender_address(deployer),
                fee_to_setter=fee_to_setter,
                init_code_hash=init_code_hash,
            ),
        )
    except ConfigurationError as e:
        # The factory exists on chain, the operator must record it before the next run
        raise ConfigurationError(
            f"{FACTORY_CONTRACT_NAME} was deployed at {factory.address} in tx {tx_hash} on {network} (chain {chain_id}), "
            f"but it could not be recorded: {e}. Add it to {registry.path} by hand before running again."
        ) from e

    return UniswapV2FactoryDeployment(
        web3=web3,
        network=network,
        factory=factory,
        reused=False,
        tx_hash=tx_hash,
        block_number=tx_receipt["blockNumber"],
    )


def fetch_factory(
    web3: Web3,
    network: str,
    *,
    artifacts: Path,
    registry: DeploymentRegistry,
) -> UniswapV2FactoryDeployment:
    """Get the factory recorded for a network without deploying.

    :raise ConfigurationError:
        No factory recorded for the network, or it is recorded on another chain.
    """
    entry = registry.get(network, FACTORY_CONTRACT_NAME)
    if entry is None:
        raise ConfigurationError(f"No {FACTORY_CONTRACT_NAME} recorded for network {network} in {registry}, deploy it first")

    chain_id = fetch_chain_id(web3)
    if entry.chain_id != chain_id:
        raise ConfigurationError(f"Network {network} has {FACTORY_CONTRACT_NAME} recorded on chain {entry.chain_id}, but the node is chain {chain_id}")

    Factory = get_contract(web3, get_artifact_path(artifacts, FACTORY_CONTRACT_NAME))
    return UniswapV2FactoryDeployment(
        web3=web3,
        network=network,
        factory=Factory(Web3.to_checksum_address(entry.address)),
        reused=True,
        tx_hash=entry.tx_hash,
        block_number=entry.block_number,
    )


def set_fee_to(
    web3: Web3,
    factory: Contract,
    fee_to: HexAddress,
    sender: HexAddress | LocalAccount,
    *,
    gas: Optional[int] = None,
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
) -> HexAddress:
    """Switch on the protocol fee by setting its recipient.

    This is a separate manual step after the deployment and never run by the
    deployment workflow itself.

    :param fee_to:
        Protocol fee recipient

    :param sender:
        Must be the factory's fee setter

    :raise InvariantViolation:
        Sender is not the on-chain fee setter. No transaction is sent.

    :raise DeploymentError:
        The transaction failed

    :return:
        ``feeTo()`` read back from the chain
    """
    fee_to = to_checksum_account(fee_to, "fee recipient")
    sender_address = get_sender_address(sender)

    fee_to_setter = fetch_fee_to_setter(factory)
    if fee_to_setter != sender_address:
        raise InvariantViolation(f"Only feeToSetter {fee_to_setter} can call setFeeTo() on {factory.address}, tried with {sender_address}")

    logger.info("Setting feeTo of %s to %s", factory.address, fee_to)
    transact_and_confirm(
        web3,
        factory.functions.setFeeTo(fee_to),
        sender,
        gas=gas,
        confirmation_timeout=confirmation_timeout,
    )

    current = fetch_fee_to(factory)
    if current != fee_to:
        raise InvariantViolation(f"feeTo() of {factory.address} is {current} after setFeeTo({fee_to})")
    return current
