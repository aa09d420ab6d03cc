"""Uniswap v2 contract names and known deployments."""

#: Truffle artifact name of the factory contract
FACTORY_CONTRACT_NAME = "UniswapV2Factory"

#: Truffle artifact name of the pair contract
PAIR_CONTRACT_NAME = "UniswapV2Pair"

#: Reference deployments.
#:
#: Used to check our pair address derivation against known pairs.
UNISWAP_V2_DEPLOYMENTS = {
    "ethereum": {
        "factory": "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f",
        "router": "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
        "init_code_hash": "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f",
    },
    # https://docs.uniswap.org/contracts/v2/reference/smart-contracts/v2-deployments
    "base": {
        "factory": "0x8909Dc15e40173Ff4699343b6eB8132c65e18eC6",
        "router": "0x4752ba5dbc23f44d87826276bf6fd6b1c372ad24",
        "init_code_hash": "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f",
    },
}
