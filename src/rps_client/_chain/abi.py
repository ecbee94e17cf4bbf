# Area: Chain
"""
rps_client._chain.abi — Contract ABI
====================================

JSON ABI of the multi-table Rock-Paper-Scissors contract, restricted
to the functions and events this client uses.
"""

DEFAULT_CONTRACT_ADDRESS = "0x300F1aE97FD0C48510Fa04075E80D0a121e0199E"


def _uint(name: str, bits: int = 256) -> dict:
    return {"internalType": f"uint{bits}", "name": name, "type": f"uint{bits}"}


def _address(name: str) -> dict:
    return {"internalType": "address", "name": name, "type": "address"}


RPS_ABI = [
    {
        "inputs": [],
        "name": "createGame",
        "outputs": [_uint("")],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [_uint("gameId")],
        "name": "joinGame",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [
            _uint("gameId"),
            {"internalType": "bytes32", "name": "hash", "type": "bytes32"},
        ],
        "name": "commitMove",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            _uint("gameId"),
            _uint("move", 8),
            {"internalType": "string", "name": "salt", "type": "string"},
        ],
        "name": "revealMove",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getOpenGames",
        "outputs": [{"internalType": "uint256[]", "name": "", "type": "uint256[]"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_uint("gameId")],
        "name": "getGameInfo",
        "outputs": [
            _address("player1"),
            _address("player2"),
            _uint("betAmount"),
            _uint("status", 8),
            _uint("blocksLeft"),
            _uint("move1", 8),
            _uint("move2", 8),
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "gameCounter",
        "outputs": [_uint("")],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {**_uint("gameId"), "indexed": True},
            {**_address("player1"), "indexed": True},
            {**_uint("bet"), "indexed": False},
        ],
        "name": "NewGame",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {**_uint("gameId"), "indexed": True},
            {**_address("player2"), "indexed": True},
        ],
        "name": "Joined",
        "type": "event",
    },
]
