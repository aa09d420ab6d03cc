"""Errors raised by the factory deployment workflow.

Every failure is fatal. The workflow does not retry and aborts at the first error.
"""

from typing import Optional

from hexbytes import HexBytes


class FactoryDeploymentError(Exception):
    """Base class for all deployment workflow failures."""


class ConfigurationError(FactoryDeploymentError):
    """Accounts, addresses, artifacts or network settings are missing or malformed."""


class DeploymentError(FactoryDeploymentError):
    """Did not get a successful tx receipt from a deployment or a configuration transaction."""

    def __init__(self, msg: str, tx_hash: Optional[HexBytes] = None):
        super().__init__(msg)
        self.tx_hash = tx_hash


class NetworkError(FactoryDeploymentError):
    """JSON-RPC endpoint unreachable or a state read failed."""


class InputError(FactoryDeploymentError):
    """Pair bytecode is missing or malformed and cannot be hashed."""


class InvariantViolation(FactoryDeploymentError):
    """On-chain state does not match the intended deployment configuration."""
