"""Transaction signing and broadcasting utilities."""

import logging
from typing import Optional

from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress
from hexbytes import HexBytes
from web3 import Web3
from web3.contract.contract import ContractConstructor, ContractFunction

logger = logging.getLogger(__name__)


def get_sender_address(sender: HexAddress | LocalAccount) -> HexAddress:
    """Address of a node-managed account or a local signer."""
    if isinstance(sender, LocalAccount):
        return sender.address
    return Web3.to_checksum_address(sender)


def broadcast_call(
    web3: Web3,
    call: ContractConstructor | ContractFunction,
    sender: HexAddress | LocalAccount,
    gas: Optional[int] = None,
) -> HexBytes:
    """Broadcast a contract constructor or a state changing function call.

    - With a :py:class:`LocalAccount` the transaction is signed locally
      and sent with ``eth_sendRawTransaction``

    - With an address the signing is delegated to the node (Anvil, Ganache, EthereumTester)
      using ``eth_sendTransaction``

    :param gas:
        Gas limit.

        If not set tries to estimate and probably may hit reverts when doing so.

    :return:
        Transaction hash
    """
    if isinstance(sender, LocalAccount):
        # Sign locally
        nonce = web3.eth.get_transaction_count(sender.address)
        tx_params = {
            "from": sender.address,
            "nonce": nonce,
            "chainId": web3.eth.chain_id,
        }
        if gas:
            tx_params["gas"] = gas
        tx_data = call.build_transaction(tx_params)
        signed_tx = sender.sign_transaction(tx_data)
        tx_hash = web3.eth.send_raw_transaction(signed_tx.raw_transaction)
    else:
        # Delegate to test RPC
        tx_params = {"from": sender}
        if gas:
            tx_params["gas"] = gas
        tx_hash = call.transact(tx_params)

    logger.info("Broadcasted transaction %s from %s", Web3.to_hex(tx_hash), get_sender_address(sender))
    return tx_hash
