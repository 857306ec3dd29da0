"""ABI fragments of the Taraxa DPOS precompile used by the keeper."""

DPOS_CONTRACT_ADDRESS = "0x00000000000000000000000000000000000000fe"
DEFAULT_RPC_URL = "https://rpc.mainnet.taraxa.io/"

# Events whose emission lowers a validator's stake.
UNDELEGATION_EVENTS = ("Undelegated", "UndelegateConfirmed")

_VALIDATOR_BASIC_INFO = {
    "components": [
        {"internalType": "uint256", "name": "total_stake", "type": "uint256"},
        {"internalType": "uint256", "name": "commission_reward", "type": "uint256"},
        {"internalType": "uint16", "name": "commission", "type": "uint16"},
        {"internalType": "uint64", "name": "last_commission_change", "type": "uint64"},
        {"internalType": "uint16", "name": "undelegations_count", "type": "uint16"},
        {"internalType": "address", "name": "owner", "type": "address"},
        {"internalType": "string", "name": "description", "type": "string"},
        {"internalType": "string", "name": "endpoint", "type": "string"},
    ],
    "internalType": "struct DposInterface.ValidatorBasicInfo",
    "name": "info",
    "type": "tuple",
}


def _delegation_event(name: str) -> dict:
    return {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "delegator", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "validator", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "amount", "type": "uint256"},
        ],
        "name": name,
        "type": "event",
    }


DPOS_ABI = [
    _delegation_event("Undelegated"),
    _delegation_event("UndelegateConfirmed"),
    {
        "inputs": [{"internalType": "address", "name": "validator", "type": "address"}],
        "name": "delegate",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "validator", "type": "address"}],
        "name": "getValidator",
        "outputs": [dict(_VALIDATOR_BASIC_INFO, name="")],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint32", "name": "batch", "type": "uint32"}],
        "name": "getValidators",
        "outputs": [
            {
                "components": [
                    {"internalType": "address", "name": "account", "type": "address"},
                    _VALIDATOR_BASIC_INFO,
                ],
                "internalType": "struct DposInterface.ValidatorData[]",
                "name": "validators",
                "type": "tuple[]",
            },
            {"internalType": "bool", "name": "end", "type": "bool"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]
