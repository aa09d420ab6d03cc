"""Deployment registry.

Keep track of what has already been deployed on which network, so that
running the deployment again does not construct a second factory.

The registry is a JSON file:

.. code-block:: json

    {
        "base": {
            "UniswapV2Factory": {
                "address": "0x...",
                "chain_id": 8453,
                "tx_hash": "0x...",
                "block_number": 123,
                "deployer": "0x...",
                "fee_to_setter": "0x...",
                "init_code_hash": "0x...",
                "deployed_at": "2024-01-01T00:00:00+00:00"
            }
        }
    }
"""

import datetime
import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Optional

from eth_typing import HexAddress, HexStr

from eth_v2factory.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegistryEntry:
    """One deployed contract on one network."""

    #: Contract address
    address: HexAddress

    #: Chain id the network name pointed to when the contract was deployed
    chain_id: int

    #: Deployment transaction
    tx_hash: Optional[HexStr] = None

    #: Block where the deployment was mined
    block_number: Optional[int] = None

    #: Account that paid for the deployment
    deployer: Optional[HexAddress] = None

    #: feeToSetter constructor argument
    fee_to_setter: Optional[HexAddress] = None

    #: Init code hash of the pair contract at the time of the deployment
    init_code_hash: Optional[HexStr] = None

    #: ISO 8601 UTC timestamp
    deployed_at: Optional[str] = None


class DeploymentRegistry:
    """Record of deployed contract addresses, keyed by network name and contract name.

    - With ``path`` set, the registry is read from and written back to a JSON file
      on every change

    - Without ``path``, the registry lives in memory only (tests, dry runs)
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self.networks: dict[str, dict[str, RegistryEntry]] = {}
        if path is not None and path.exists():
            self.networks = self._read(path)

    def __repr__(self):
        return f"<DeploymentRegistry {self.path or 'in-memory'}, networks {list(self.networks.keys())}>"

    @staticmethod
    def _read(path: Path) -> dict[str, dict[str, RegistryEntry]]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Deployment registry {path} is not valid JSON: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read deployment registry {path}: {e}") from e

        try:
            return {network: {name: RegistryEntry(**entry) for name, entry in contracts.items()} for network, contracts in data.items()}
        except (TypeError, AttributeError) as e:
            raise ConfigurationError(f"Deployment registry {path} has unexpected format: {e}") from e

    def _get_temp_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".tmp")

    def check_writable(self):
        """Make sure :py:meth:`save` can write the registry file.

        Called before broadcasting anything: a deployment that cannot be
        recorded would be deployed again on the next run.

        :raise ConfigurationError:
            Registry directory cannot be created or written to.
        """
        if self.path is None:
            return

        temp = self._get_temp_path()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp.touch()
            temp.unlink()
        except OSError as e:
            raise ConfigurationError(f"Deployment registry {self.path} is not writable: {e}") from e

    def save(self):
        """Write the registry to its file.

        The file is replaced atomically, so a crash never leaves a half written registry.

        :raise ConfigurationError:
            The file could not be written.
        """
        if self.path is None:
            return

        data = {network: {name: asdict(entry) for name, entry in contracts.items()} for network, contracts in self.networks.items()}
        temp = self._get_temp_path()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(temp, self.path)
        except OSError as e:
            raise ConfigurationError(f"Could not write deployment registry {self.path}: {e}") from e
        logger.info("Deployment registry saved to %s", self.path)

    def get(self, network: str, contract_name: str) -> Optional[RegistryEntry]:
        """Get a recorded deployment.

        :return:
            ``None`` if the contract has not been deployed on this network
        """
        return self.networks.get(network, {}).get(contract_name)

    def record(self, network: str, contract_name: str, entry: RegistryEntry):
        """Record a new deployment and persist it."""
        assert network, "Network name missing"
        if entry.deployed_at is None:
            now = datetime.datetime.now(datetime.timezone.utc).isoformat()
            entry = replace(entry, deployed_at=now)
        self.networks.setdefault(network, {})[contract_name] = entry
        logger.info("Recorded %s at %s on network %s", contract_name, entry.address, network)
        self.save()

