from typing import Optional


class RpcClientError(Exception):
    pass


class TransportError(RpcClientError):
    """
    The call did not produce a usable result: the node was unreachable,
    too slow, answered garbage or reported a JSON-RPC error object
    """

    error_json: Optional[dict]
    transaction_hash: Optional[str] = None

    def __init__(self, *args, error_json=None, transaction_hash=None):
        super().__init__(*args)
        self.error_json = error_json
        self.transaction_hash = transaction_hash


class RpcNotAvailableError(TransportError):
    """
    Connection to the node could not be established or was dropped
    """

    pass


class RPCTimeoutError(TransportError):
    """
    The call did not complete within the configured timeout
    """

    pass


class HTTPStatusError(TransportError):
    status: int

    def __init__(self, status: int, body: str = "", error_json=None):
        super().__init__(f"Status: {status} {body[:200]}", error_json=error_json)
        self.status = status


class MalformedResponseError(TransportError):
    """
    The node answered with something that is not a JSON-RPC response
    """

    pass


class JsonRpcError(TransportError):
    code: Optional[int]
    message: str
    data: object

    def __init__(self, message="", code=None, data=None, error_json=None):
        super().__init__(f"RPC error {code}: {message}", error_json=error_json)
        self.code = code
        self.message = message
        self.data = data


class ParseError(JsonRpcError):
    """
    Invalid JSON was received by the node
    """

    pass


class InvalidRequestError(JsonRpcError):
    pass


class MethodNotFoundError(JsonRpcError):
    """
    The method does not exist or is not enabled on this node
    """

    pass


class InvalidParamsError(JsonRpcError):
    pass


class InternalError(JsonRpcError):
    """
    Something went wrong with the node itself or overloaded
    """

    pass


class ServerError(JsonRpcError):
    """
    Generic node-side failure, used by geth for nonce too low,
    insufficient funds, underpriced replacement and similar
    """

    pass


class ResourceNotFoundError(JsonRpcError):
    pass


class ResourceUnavailableError(JsonRpcError):
    pass


class TransactionRejectedError(JsonRpcError):
    pass


class MethodNotSupportedError(JsonRpcError):
    pass


class LimitExceededError(JsonRpcError):
    """
    Request exceeds a node defined limit (rate limit, block range)
    """

    pass


class ExecutionRevertedError(JsonRpcError):
    pass


RPC_CODE_TO_EXCEPTION = {
    -32700: ParseError,
    -32600: InvalidRequestError,
    -32601: MethodNotFoundError,
    -32602: InvalidParamsError,
    -32603: InternalError,
    -32000: ServerError,
    -32001: ResourceNotFoundError,
    -32002: ResourceUnavailableError,
    -32003: TransactionRejectedError,
    -32004: MethodNotSupportedError,
    -32005: LimitExceededError,
    3: ExecutionRevertedError,
}

# Errors with which a node judges a submitted transaction, as opposed to
# refusing the request itself (rate limits, disabled methods, overload)
TRANSACTION_REJECTION_ERRORS = (
    ServerError,
    TransactionRejectedError,
    ExecutionRevertedError,
    InvalidParamsError,
)
