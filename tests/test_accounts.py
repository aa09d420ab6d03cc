"""Deployer and fee setter selection."""

import pytest
from eth_account import Account
from web3 import HTTPProvider, Web3

from eth_v2factory.accounts import DeploymentRoles, fetch_node_accounts, load_local_account, resolve_roles
from eth_v2factory.exceptions import ConfigurationError, NetworkError


def test_resolve_roles_first_account(deployer, user_1):
    """The first account deploys and sets fees."""
    roles = resolve_roles([deployer, user_1])
    assert roles == DeploymentRoles(deployer=deployer, fee_to_setter=deployer)


def test_resolve_roles_explicit_fee_setter(deployer, user_1):
    """Fee setter can be a different account than the deployer."""
    roles = resolve_roles([deployer], fee_to_setter=user_1.lower())
    assert roles.deployer == deployer
    assert roles.fee_to_setter == user_1


def test_resolve_roles_checksums():
    """Lowercased addresses from the environment are normalised."""
    roles = resolve_roles(["0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"])
    assert roles.deployer == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


def test_resolve_roles_no_accounts():
    """Empty account list is a configuration error."""
    with pytest.raises(ConfigurationError):
        resolve_roles([])


@pytest.mark.parametrize("accounts, fee_to_setter", [(["0x1234"], None), (["foobar"], None), ([None], None)])
def test_resolve_roles_bad_deployer(accounts, fee_to_setter):
    with pytest.raises(ConfigurationError):
        resolve_roles(accounts, fee_to_setter)


def test_resolve_roles_bad_fee_setter(deployer):
    with pytest.raises(ConfigurationError):
        resolve_roles([deployer], fee_to_setter="0xdead")


def test_fetch_node_accounts(web3: Web3, deployer):
    """EthereumTester has unlocked accounts."""
    accounts = fetch_node_accounts(web3)
    assert accounts[0] == deployer
    assert len(accounts) >= 3


def test_fetch_node_accounts_unreachable():
    """Nothing listens at the port."""
    web3 = Web3(HTTPProvider("http://127.0.0.1:9", exception_retry_configuration=None))
    with pytest.raises(NetworkError):
        fetch_node_accounts(web3)


def test_load_local_account():
    """Private key with or without 0x prefix."""
    account = Account.create()
    key = account.key.hex()
    if key.startswith("0x"):
        key = key[2:]

    assert load_local_account(key).address == account.address
    assert load_local_account("0x" + key).address == account.address


def test_load_local_account_bad_key():
    with pytest.raises(ConfigurationError):
        load_local_account("0x1234")
