"""Constants for EVM JSON-RPC client."""

# Seconds a single JSON-RPC call may take before it is aborted
TIMEOUT_WAIT_RPC = 30

# Receipt polling used while waiting for a broadcast transaction to be mined
RECEIPT_POLL_ATTEMPTS = 60
RECEIPT_POLL_INTERVAL = 2

ALLOWED_SCHEMES = ("http://", "https://")

JSONRPC_VERSION = "2.0"
JSONRPC_REQUEST_ID = 1

# Block tags
BLOCK_LATEST = "latest"
BLOCK_PENDING = "pending"
BLOCK_EARLIEST = "earliest"
BLOCK_SAFE = "safe"
BLOCK_FINALIZED = "finalized"

BLOCK_TAGS = (BLOCK_LATEST, BLOCK_PENDING, BLOCK_EARLIEST, BLOCK_SAFE, BLOCK_FINALIZED)

# Node methods
ETH_SYNCING = "eth_syncing"
ETH_CHAIN_ID = "eth_chainId"
ETH_GET_BALANCE = "eth_getBalance"
ETH_GET_TRANSACTION_COUNT = "eth_getTransactionCount"
ETH_GET_TRANSACTION_RECEIPT = "eth_getTransactionReceipt"
ETH_BLOCK_NUMBER = "eth_blockNumber"
ETH_GET_BLOCK_BY_NUMBER = "eth_getBlockByNumber"
ETH_GET_BLOCK_BY_HASH = "eth_getBlockByHash"
ETH_SEND_RAW_TRANSACTION = "eth_sendRawTransaction"

# Receipt status of a successful transaction
RECEIPT_STATUS_SUCCESS = 1
