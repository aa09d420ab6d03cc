"""Factory deployment workflow.

Runs the steps in a fixed order and aborts at the first failure:

1. Pick the deployer and the fee setter (no network access)

2. Hash the pair bytecode (no network access)

3. Deploy the factory, or reuse the recorded one

4. Read back the factory state, verify it and print the deployment record

The record is printed only after every check has passed.
"""

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, TextIO

from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress
from web3 import Web3

from eth_v2factory.accounts import DeploymentRoles, resolve_roles
from eth_v2factory.deploy import DEFAULT_CONFIRMATION_TIMEOUT
from eth_v2factory.exceptions import ConfigurationError
from eth_v2factory.registry import DeploymentRegistry
from eth_v2factory.report import DeploymentRecord, fetch_deployment_record, print_deployment_record, verify_deployment_record
from eth_v2factory.uniswap_v2.constants import PAIR_CONTRACT_NAME
from eth_v2factory.uniswap_v2.deployment import UniswapV2FactoryDeployment, deploy_factory
from eth_v2factory.uniswap_v2.init_code_hash import compute_init_code_hash, load_pair_bytecode

logger = logging.getLogger(__name__)


class WorkflowState(enum.Enum):
    """Where the deployment workflow got to."""

    undeployed = "undeployed"
    deployed = "deployed"
    reported = "reported"


@dataclass
class FactoryDeploymentResult:
    """Outcome of :py:func:`run_factory_deployment`."""

    roles: DeploymentRoles

    deployment: UniswapV2FactoryDeployment

    record: DeploymentRecord

    state: WorkflowState = WorkflowState.undeployed


def run_factory_deployment(
    web3: Web3,
    network: str,
    accounts: Sequence[str],
    *,
    artifacts: Path,
    registry: DeploymentRegistry,
    fee_to_setter: Optional[HexAddress] = None,
    signer: Optional[LocalAccount] = None,
    pair_bytecode: Optional[bytes | str] = None,
    gas: Optional[int] = None,
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
    output: TextIO = None,
) -> FactoryDeploymentResult:
    """Deploy the factory and print the deployment record.

    Example:

    .. code-block:: python

        web3 = Web3(HTTPProvider("http://localhost:8545"))
        result = run_factory_deployment(
            web3,
            "development",
            web3.eth.accounts,
            artifacts=Path("build/contracts"),
            registry=DeploymentRegistry(Path("deployments.json")),
        )
        assert result.state == WorkflowState.reported

    :param web3:
        Connection to the target network

    :param network:
        Network name the factory is recorded under in the registry

    :param accounts:
        Accounts made available by the environment, first one is the deployer

    :param artifacts:
        Build artifacts directory with ``UniswapV2Factory.json`` and ``UniswapV2Pair.json``

    :param registry:
        Deployment registry, makes reruns idempotent

    :param fee_to_setter:
        Fee setter if different from the deployer

    :param signer:
        Local signing account for the deployer.
        If not given, the node signs for ``accounts[0]``.

    :param pair_bytecode:
        Pair creation bytecode. Read from ``UniswapV2Pair.json`` if not given.

    :param output:
        Where the record is printed, stdout by default

    :raise FactoryDeploymentError:
        Any step failed. Nothing has been printed.
    """
    roles = resolve_roles(accounts, fee_to_setter)

    if signer is not None:
        if signer.address != roles.deployer:
            raise ConfigurationError(f"Signing account {signer.address} is not the deployer {roles.deployer}")

    if pair_bytecode is None:
        pair_bytecode = load_pair_bytecode(artifacts, PAIR_CONTRACT_NAME)

    init_code_hash = compute_init_code_hash(pair_bytecode)
    logger.info("Pair init code hash is %s", init_code_hash)

    deployment = deploy_factory(
        web3,
        network,
        roles.fee_to_setter,
        signer or roles.deployer,
        artifacts=artifacts,
        registry=registry,
        init_code_hash=init_code_hash,
        gas=gas,
        confirmation_timeout=confirmation_timeout,
    )

    record = fetch_deployment_record(deployment.factory, roles.deployer, init_code_hash)
    result = FactoryDeploymentResult(
        roles=roles,
        deployment=deployment,
        record=record,
        state=WorkflowState.deployed,
    )

    verify_deployment_record(record, roles)
    print_deployment_record(record, file=output)
    result.state = WorkflowState.reported
    return result
