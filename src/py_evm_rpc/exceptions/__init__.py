from py_evm_rpc.exceptions.exceptions import (
    BlockNotFoundError,
    BroadcastRejectedError,
    ConfigurationError,
    ValidationError,
)
from py_evm_rpc.exceptions.provider import (
    RPC_CODE_TO_EXCEPTION,
    TRANSACTION_REJECTION_ERRORS,
    ExecutionRevertedError,
    HTTPStatusError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    JsonRpcError,
    LimitExceededError,
    MalformedResponseError,
    MethodNotFoundError,
    MethodNotSupportedError,
    ParseError,
    ResourceNotFoundError,
    ResourceUnavailableError,
    RpcClientError,
    RpcNotAvailableError,
    RPCTimeoutError,
    ServerError,
    TransactionRejectedError,
    TransportError,
)
