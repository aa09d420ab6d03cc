"""Deploy a compiled contract and confirm state changing transactions.

Both functions block until the transaction is confirmed. Nothing is retried:
any failure is raised to the caller.
"""

import logging
from typing import Optional, Type

from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress
from hexbytes import HexBytes
from web3 import Web3
from web3.contract.contract import Contract, ContractFunction
from web3.exceptions import TimeExhausted, Web3Exception
from web3.types import TxReceipt

from eth_v2factory.exceptions import ConfigurationError, DeploymentError, NetworkError
from eth_v2factory.tx import broadcast_call

logger = logging.getLogger(__name__)

#: How long we wait for a transaction to be mined before giving up, seconds
DEFAULT_CONFIRMATION_TIMEOUT = 120.0


def wait_for_confirmation(
    web3: Web3,
    tx_hash: HexBytes,
    description: str,
    timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
) -> TxReceipt:
    """Block until a transaction is mined and check it succeeded.

    :param description:
        Human readable name of the transaction for error messages

    :raise DeploymentError:
        Transaction reverted, ran out of gas or was not mined within the timeout.

    :raise NetworkError:
        JSON-RPC endpoint went away or returned an error while waiting.
    """
    try:
        tx_receipt = web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
    except TimeExhausted as e:
        raise DeploymentError(f"{description} was not confirmed in {timeout} seconds, tx hash is {Web3.to_hex(tx_hash)}", tx_hash) from e
    except (OSError, Web3Exception) as e:
        raise NetworkError(f"Lost connection while waiting for {description}, tx hash is {Web3.to_hex(tx_hash)}: {e}") from e

    if tx_receipt["status"] != 1:
        raise DeploymentError(f"{description} failed, tx hash is {Web3.to_hex(tx_hash)}", tx_hash)

    logger.info("%s confirmed in block %s", description, tx_receipt.get("blockNumber"))
    return tx_receipt


def deploy_contract(
    web3: Web3,
    Contract: Type[Contract],
    deployer: HexAddress | LocalAccount,
    *constructor_args,
    contract_name: Optional[str] = None,
    gas: Optional[int] = None,
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
) -> tuple[Contract, TxReceipt]:
    """Deploys a new contract from its proxy class.

    Example:

    .. code-block:: python

        Factory = get_contract(web3, Path("build/contracts/UniswapV2Factory.json"))
        factory, receipt = deploy_contract(web3, Factory, deployer, fee_to_setter, contract_name="UniswapV2Factory")
        print(f"Deployed factory at {factory.address}")

    :param web3:
        Web3 instance

    :param Contract:
        Contract proxy class with bytecode

    :param deployer:
        Deployer account.

        Either node-managed address or LocalAccount.

    :param constructor_args:
        Other arguments to pass to the contract's constructor

    :param contract_name:
        Used in log and error messages

    :param gas:
        Gas limit.

        If not set tries to estimate and probably may hit reverts when doing so.

    :param confirmation_timeout:
        Seconds to wait for the deployment to be mined

    :raise DeploymentError:
        In the case we could not deploy the contract.

    :raise NetworkError:
        JSON-RPC endpoint is not reachable.

    :return:
        Tuple (contract proxy instance, deployment tx receipt)
    """
    if not Contract.bytecode:
        raise ConfigurationError(f"Contract {contract_name} has no bytecode in its artifact, cannot deploy")

    description = f"Contract {contract_name} deployment"

    try:
        tx_hash = broadcast_call(web3, Contract.constructor(*constructor_args), deployer, gas=gas)
    except OSError as e:
        raise NetworkError(f"Could not broadcast {description}: {e}") from e
    except (Web3Exception, ValueError) as e:
        raise DeploymentError(f"{description} was rejected with args {constructor_args}: {e}") from e

    tx_receipt = wait_for_confirmation(web3, tx_hash, description, timeout=confirmation_timeout)

    instance = Contract(address=tx_receipt["contractAddress"])
    logger.info("%s deployed at %s", contract_name, instance.address)
    return instance, tx_receipt


def transact_and_confirm(
    web3: Web3,
    func: ContractFunction,
    sender: HexAddress | LocalAccount,
    *,
    gas: Optional[int] = None,
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
) -> TxReceipt:
    """Call a state changing contract function and wait for it to be mined.

    :raise DeploymentError:
        Transaction was rejected, reverted or timed out.

    :raise NetworkError:
        JSON-RPC endpoint is not reachable.
    """
    description = f"Transaction {func.fn_name}()"

    try:
        tx_hash = broadcast_call(web3, func, sender, gas=gas)
    except OSError as e:
        raise NetworkError(f"Could not broadcast {description}: {e}") from e
    except (Web3Exception, ValueError) as e:
        raise DeploymentError(f"{description} was rejected: {e}") from e

    return wait_for_confirmation(web3, tx_hash, description, timeout=confirmation_timeout)
