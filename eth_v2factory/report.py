"""Deployment record for operator verification.

The record is printed as three lines:

.. code-block:: text

    INIT_CODE_HASH: 0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f
    accounts[0]: 0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf
    feeToSetter: 0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf
"""

import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from eth_typing import HexAddress, HexStr
from web3.contract.contract import Contract

from eth_v2factory.accounts import DeploymentRoles
from eth_v2factory.exceptions import InvariantViolation
from eth_v2factory.uniswap_v2.deployment import fetch_fee_to_setter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeploymentRecord:
    """What the operator cross-checks after a deployment."""

    #: Init code hash of the pair contract
    init_code_hash: HexStr

    #: Account that deployed the factory
    deployer: HexAddress

    #: ``feeToSetter()`` as read from the chain
    fee_to_setter: HexAddress

    #: Factory address, logged but not part of the printed record
    factory_address: HexAddress


def fetch_deployment_record(
    factory: Contract,
    deployer: HexAddress,
    init_code_hash: HexStr,
) -> DeploymentRecord:
    """Read the factory state needed for the record.

    :raise NetworkError:
        ``feeToSetter()`` could not be read
    """
    return DeploymentRecord(
        init_code_hash=init_code_hash,
        deployer=deployer,
        fee_to_setter=fetch_fee_to_setter(factory),
        factory_address=factory.address,
    )


def verify_deployment_record(record: DeploymentRecord, roles: DeploymentRoles):
    """Check the deployed factory is configured the way we intended.

    :raise InvariantViolation:
        On-chain fee setter is not the one the factory was meant to be deployed with.
        Happens e.g. when the deployment is rerun with a different fee setter
        and the earlier factory is reused.
    """
    if record.fee_to_setter != roles.fee_to_setter:
        raise InvariantViolation(f"Factory {record.factory_address} has feeToSetter {record.fee_to_setter}, expected {roles.fee_to_setter}")


def format_deployment_record(record: DeploymentRecord) -> list[str]:
    """Format the record as output lines, in fixed order."""
    return [
        f"INIT_CODE_HASH: {record.init_code_hash}",
        f"accounts[0]: {record.deployer}",
        f"feeToSetter: {record.fee_to_setter}",
    ]


def print_deployment_record(record: DeploymentRecord, file: TextIO = None):
    """Print the record to stdout.

    Log output goes to stderr, so stdout carries only these lines.
    """
    if file is None:
        file = sys.stdout

    logger.info("Factory %s, init code hash %s", record.factory_address, record.init_code_hash)
    for line in format_deployment_record(record):
        print(line, file=file)
