"""Command line entry point.

Deploy the factory against a local development node:

.. code-block:: shell

    export JSON_RPC_URL=http://localhost:8545
    eth-v2factory deploy --network development --artifacts build/contracts

Deploy with a private key:

.. code-block:: shell

    export JSON_RPC_URL=...
    export PRIVATE_KEY=...
    eth-v2factory deploy --network base --fee-to-setter 0x...

Switch on the protocol fee later, as a separate step:

.. code-block:: shell

    eth-v2factory set-fee-to --network base --fee-to 0x...

Only print the pair init code hash:

.. code-block:: shell

    eth-v2factory init-code-hash --artifacts build/contracts
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress
from web3 import HTTPProvider, Web3

from eth_v2factory.accounts import fetch_node_accounts, load_local_account, resolve_roles, to_checksum_account
from eth_v2factory.chain import get_chain_name, get_default_network_name
from eth_v2factory.deploy import DEFAULT_CONFIRMATION_TIMEOUT
from eth_v2factory.exceptions import ConfigurationError, FactoryDeploymentError
from eth_v2factory.registry import DeploymentRegistry
from eth_v2factory.uniswap_v2.deployment import fetch_chain_id, fetch_factory, set_fee_to
from eth_v2factory.uniswap_v2.init_code_hash import compute_init_code_hash, load_pair_bytecode
from eth_v2factory.utils import get_url_domain, setup_console_logging
from eth_v2factory.workflow import run_factory_deployment

logger = logging.getLogger(__name__)


@dataclass
class DeploymentConfig:
    """Settings collected from the command line and the environment."""

    command: str

    json_rpc_url: Optional[str]

    network: Optional[str]

    artifacts: Path

    registry: Path

    private_key: Optional[str] = None

    fee_to_setter: Optional[str] = None

    fee_to: Optional[str] = None

    sender: Optional[str] = None

    gas: Optional[int] = None

    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "DeploymentConfig":
        return cls(
            command=args.command,
            json_rpc_url=getattr(args, "json_rpc_url", None) or os.environ.get("JSON_RPC_URL"),
            network=getattr(args, "network", None) or os.environ.get("NETWORK"),
            artifacts=Path(args.artifacts or os.environ.get("ARTIFACTS_PATH", "build/contracts")),
            registry=Path(getattr(args, "registry", None) or os.environ.get("DEPLOYMENT_REGISTRY", "deployments.json")),
            private_key=os.environ.get("PRIVATE_KEY") or None,
            fee_to_setter=getattr(args, "fee_to_setter", None) or os.environ.get("FEE_TO_SETTER") or None,
            fee_to=getattr(args, "fee_to", None),
            sender=getattr(args, "sender", None),
            gas=getattr(args, "gas", None),
            confirmation_timeout=getattr(args, "timeout", None) or DEFAULT_CONFIRMATION_TIMEOUT,
        )


def create_web3(json_rpc_url: str) -> Web3:
    """Connect to the target network."""
    return Web3(HTTPProvider(json_rpc_url))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="eth-v2factory", description="Deploy Uniswap v2 factory and publish the pair init code hash.")
    parser.add_argument("--log-level", default=None, help="Log level, overrides LOG_LEVEL environment variable")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_network_args(p: argparse.ArgumentParser):
        p.add_argument("--json-rpc-url", default=None, help="JSON-RPC endpoint, default from JSON_RPC_URL")
        p.add_argument("--network", default=None, help="Network name in the deployment registry, default from NETWORK or the chain name")
        p.add_argument("--registry", default=None, help="Deployment registry JSON file, default deployments.json")
        p.add_argument("--gas", type=int, default=None, help="Gas limit, estimated if not given")
        p.add_argument("--timeout", type=float, default=None, help=f"Seconds to wait for confirmations, default {DEFAULT_CONFIRMATION_TIMEOUT}")

    deploy = subparsers.add_parser("deploy", help="Deploy the factory and print the deployment record")
    deploy.add_argument("--artifacts", default=None, help="Build artifacts directory, default build/contracts")
    deploy.add_argument("--fee-to-setter", default=None, help="Fee setter account, default is the deployer")
    add_network_args(deploy)

    init_code_hash = subparsers.add_parser("init-code-hash", help="Print the pair init code hash only")
    init_code_hash.add_argument("--artifacts", default=None, help="Build artifacts directory, default build/contracts")

    fee_to = subparsers.add_parser("set-fee-to", help="Set the protocol fee recipient on the deployed factory")
    fee_to.add_argument("--artifacts", default=None, help="Build artifacts directory, default build/contracts")
    fee_to.add_argument("--fee-to", required=True, help="Protocol fee recipient")
    fee_to.add_argument("--sender", default=None, help="Node-managed account that sends setFeeTo(), default FEE_TO_SETTER or the first account")
    add_network_args(fee_to)

    return parser


def connect(config: DeploymentConfig) -> tuple[Web3, str]:
    """Create the web3 connection and resolve the network name."""
    if not config.json_rpc_url:
        raise ConfigurationError("JSON_RPC_URL environment variable or --json-rpc-url missing")

    web3 = create_web3(config.json_rpc_url)
    chain_id = fetch_chain_id(web3)
    network = config.network or get_default_network_name(chain_id)
    logger.info("Connected to %s, chain %s (%d), network name %s", get_url_domain(config.json_rpc_url), get_chain_name(chain_id), chain_id, network)
    return web3, network


def get_accounts(web3: Web3, config: DeploymentConfig) -> tuple[list[str], Optional[LocalAccount]]:
    """Accounts from PRIVATE_KEY, or the node-managed accounts if no key is given."""
    if config.private_key:
        signer = load_local_account(config.private_key)
        return [signer.address], signer
    return fetch_node_accounts(web3), None


def run_deploy(config: DeploymentConfig):
    web3, network = connect(config)
    accounts, signer = get_accounts(web3, config)
    run_factory_deployment(
        web3,
        network,
        accounts,
        artifacts=config.artifacts,
        registry=DeploymentRegistry(config.registry),
        fee_to_setter=config.fee_to_setter,
        signer=signer,
        gas=config.gas,
        confirmation_timeout=config.confirmation_timeout,
    )


def run_init_code_hash(config: DeploymentConfig):
    init_code_hash = compute_init_code_hash(load_pair_bytecode(config.artifacts))
    print(f"INIT_CODE_HASH: {init_code_hash}")


def pick_sender(accounts: Sequence[str], signer: Optional[LocalAccount], sender: Optional[str]) -> HexAddress | LocalAccount:
    """Choose who sends a transaction to an already deployed factory.

    A local signer always sends. Otherwise the named node-managed account,
    or ``accounts[0]`` if none is named.

    :raise ConfigurationError:
        The named sender is not one of the accounts available.
    """
    if signer is not None:
        if sender and to_checksum_account(sender, "sender") != signer.address:
            raise ConfigurationError(f"Sender {sender} does not match PRIVATE_KEY account {signer.address}")
        return signer

    if not sender:
        return resolve_roles(accounts).deployer

    sender = to_checksum_account(sender, "sender")
    if sender not in [to_checksum_account(a, "node") for a in accounts]:
        raise ConfigurationError(f"Sender {sender} is not an account managed by the node")
    return sender


def run_set_fee_to(config: DeploymentConfig):
    web3, network = connect(config)
    accounts, signer = get_accounts(web3, config)
    sender = pick_sender(accounts, signer, config.sender or (None if signer else config.fee_to_setter))
    deployment = fetch_factory(
        web3,
        network,
        artifacts=config.artifacts,
        registry=DeploymentRegistry(config.registry),
    )
    fee_to = set_fee_to(
        web3,
        deployment.factory,
        config.fee_to,
        sender,
        gas=config.gas,
        confirmation_timeout=config.confirmation_timeout,
    )
    print(f"feeTo: {fee_to}")


COMMANDS = {
    "deploy": run_deploy,
    "init-code-hash": run_init_code_hash,
    "set-fee-to": run_set_fee_to,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console script entry point.

    :return:
        Process exit code, 0 on success and 1 on any deployment failure
    """
    args = build_parser().parse_args(argv)
    config = DeploymentConfig.from_args(args)

    try:
        setup_console_logging(default_log_level="info", log_level=args.log_level)
        COMMANDS[config.command](config)
    except FactoryDeploymentError as e:
        logger.error("%s failed: %s: %s", config.command, type(e).__name__, e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
