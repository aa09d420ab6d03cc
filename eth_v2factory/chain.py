"""Chain specific configuration.

Chain names double as the default network identifier for the deployment registry.
"""

#: Manually maintained shorthand names for different EVM chains
CHAIN_NAMES = {
    1: "Ethereum",
    56: "Binance",
    137: "Polygon",
    43114: "Avalanche",
    130: "Unichain",
    8453: "Base",
    146: "Sonic",
    5000: "Mantle",
    42161: "Arbitrum",
    421614: "Arbitrum_Sepolia",
    10: "Optimism",
    100: "Gnosis",
    81457: "Blast",
    42220: "Celo",
    11155111: "Sepolia",
    84532: "Base_Sepolia",
    #
    # Local development nodes
    1337: "Ganache",
    31337: "Anvil",
}


def get_chain_name(chain_id: int) -> str:
    """Translate Ethereum chain id to its name."""
    name = CHAIN_NAMES.get(chain_id)
    if name:
        return name

    return f"<Unknown chain, id {chain_id}>"


def get_default_network_name(chain_id: int) -> str:
    """Network identifier used in the deployment registry when the operator does not give one.

    - Known chains: lowercased chain name, e.g. ``base``

    - Unknown chains: ``chain-<id>``
    """
    assert type(chain_id) is int, f"Chain ID must be an integer: {type(chain_id)}"
    name = CHAIN_NAMES.get(chain_id)
    if name:
        return name.lower()
    return f"chain-{chain_id}"
