"""Oracle contract ABI (the parts the relay uses)."""

REQUEST_EVENT = "CreditScoreRequested"
FULFILLED_EVENT = "CreditScoreReceived"
FULFILL_FUNCTION = "fulfillCreditScore"

ORACLE_ABI: list[dict] = [
    {
        "inputs": [],
        "stateMutability": "nonpayable",
        "type": "constructor",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "requestId", "type": "bytes32"},
            {"indexed": True, "name": "requester", "type": "address"},
            {"indexed": False, "name": "userId", "type": "string"},
            {"indexed": False, "name": "userName", "type": "string"},
            {"indexed": False, "name": "timestamp", "type": "uint256"},
        ],
        "name": REQUEST_EVENT,
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "requestId", "type": "bytes32"},
            {"indexed": False, "name": "userId", "type": "string"},
            {"indexed": False, "name": "creditScore", "type": "uint256"},
            {"indexed": False, "name": "timestamp", "type": "uint256"},
            {"indexed": False, "name": "ipfsCID", "type": "string"},
        ],
        "name": FULFILLED_EVENT,
        "type": "event",
    },
    {
        "inputs": [
            {"name": "_requestId", "type": "bytes32"},
            {"name": "_userId", "type": "string"},
            {"name": "_creditScore", "type": "uint256"},
            {"name": "_ipfsCID", "type": "string"},
        ],
        "name": FULFILL_FUNCTION,
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_userId", "type": "string"},
            {"name": "_userName", "type": "string"},
        ],
        "name": "requestCreditScore",
        "outputs": [{"name": "", "type": "bytes32"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
