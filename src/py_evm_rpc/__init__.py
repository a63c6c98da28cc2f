from py_evm_rpc.client import EVMClient
from py_evm_rpc.exceptions import (
    BlockNotFoundError,
    BroadcastRejectedError,
    ConfigurationError,
    JsonRpcError,
    MalformedResponseError,
    RpcClientError,
    RpcNotAvailableError,
    RPCTimeoutError,
    TransportError,
    ValidationError,
)
from py_evm_rpc.models import (
    Block,
    BlockId,
    BlockIdKind,
    Log,
    SyncStatus,
    Transaction,
    TransactionReceipt,
)
from py_evm_rpc.providers import JsonProvider
