"""Build artifacts for tests.

A minimal stand-in for ``UniswapV2Factory``: it has the same ABI and function selectors
for ``feeTo()``, ``feeToSetter()`` and ``setFeeTo(address)``, so we do not need
a Solidity compiler to run the tests.
"""

#: Constructor: store the ``feeToSetter`` argument in slot 0 and return the runtime code
FACTORY_CONSTRUCTOR = "".join(
    [
        "6020",  # PUSH1 0x20  size
        "6020",  # PUSH1 0x20
        "38",  # CODESIZE
        "03",  # SUB  offset of the last constructor argument word
        "6000",  # PUSH1 0x00  memory destination
        "39",  # CODECOPY
        "6000",  # PUSH1 0x00
        "51",  # MLOAD
        "6000",  # PUSH1 0x00
        "55",  # SSTORE  slot 0 = feeToSetter
        "6055",  # PUSH1 0x55  runtime length
        "80",  # DUP1
        "601a",  # PUSH1 0x1a  runtime offset, length of this constructor
        "6000",  # PUSH1 0x00
        "39",  # CODECOPY
        "6000",  # PUSH1 0x00
        "f3",  # RETURN
    ]
)

#: Runtime: slot 0 is feeToSetter, slot 1 is feeTo
FACTORY_RUNTIME = "".join(
    [
        "6000",  # 0x00 PUSH1 0
        "35",  # 0x02 CALLDATALOAD
        "60e0",  # 0x03 PUSH1 224
        "1c",  # 0x05 SHR  function selector
        "80",  # 0x06 DUP1
        "63094b7415",  # 0x07 PUSH4 feeToSetter()
        "14",  # 0x0c EQ
        "6028",  # 0x0d PUSH1 0x28
        "57",  # 0x0f JUMPI
        "80",  # 0x10 DUP1
        "63017e7e58",  # 0x11 PUSH4 feeTo()
        "14",  # 0x16 EQ
        "6034",  # 0x17 PUSH1 0x34
        "57",  # 0x19 JUMPI
        "80",  # 0x1a DUP1
        "63f46901ed",  # 0x1b PUSH4 setFeeTo(address)
        "14",  # 0x20 EQ
        "6040",  # 0x21 PUSH1 0x40
        "57",  # 0x23 JUMPI
        "6000",  # 0x24 PUSH1 0
        "80",  # 0x26 DUP1
        "fd",  # 0x27 REVERT  unknown function
        "5b",  # 0x28 JUMPDEST  feeToSetter()
        "6000",  # 0x29 PUSH1 0
        "54",  # 0x2b SLOAD
        "6000",  # 0x2c PUSH1 0
        "52",  # 0x2e MSTORE
        "6020",  # 0x2f PUSH1 32
        "6000",  # 0x31 PUSH1 0
        "f3",  # 0x33 RETURN
        "5b",  # 0x34 JUMPDEST  feeTo()
        "6001",  # 0x35 PUSH1 1
        "54",  # 0x37 SLOAD
        "6000",  # 0x38 PUSH1 0
        "52",  # 0x3a MSTORE
        "6020",  # 0x3b PUSH1 32
        "6000",  # 0x3d PUSH1 0
        "f3",  # 0x3f RETURN
        "5b",  # 0x40 JUMPDEST  setFeeTo(address)
        "6000",  # 0x41 PUSH1 0
        "54",  # 0x43 SLOAD
        "33",  # 0x44 CALLER
        "14",  # 0x45 EQ
        "604d",  # 0x46 PUSH1 0x4d
        "57",  # 0x48 JUMPI
        "6000",  # 0x49 PUSH1 0
        "80",  # 0x4b DUP1
        "fd",  # 0x4c REVERT  FORBIDDEN
        "5b",  # 0x4d JUMPDEST
        "6004",  # 0x4e PUSH1 4
        "35",  # 0x50 CALLDATALOAD
        "6001",  # 0x51 PUSH1 1
        "55",  # 0x53 SSTORE
        "00",  # 0x54 STOP
    ]
)

FACTORY_BYTECODE = "0x" + FACTORY_CONSTRUCTOR + FACTORY_RUNTIME

FACTORY_ABI = [
    {
        "type": "constructor",
        "inputs": [{"name": "_feeToSetter", "type": "address", "internalType": "address"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "feeTo",
        "inputs": [],
        "outputs": [{"name": "", "type": "address", "internalType": "address"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "feeToSetter",
        "inputs": [],
        "outputs": [{"name": "", "type": "address", "internalType": "address"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "setFeeTo",
        "inputs": [{"name": "_feeTo", "type": "address", "internalType": "address"}],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
]

#: Any creation code will do for hashing
PAIR_BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe6080604052600080fdfea164736f6c6343000813000a"
