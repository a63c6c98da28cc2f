from typing import Optional, TYPE_CHECKING

from py_evm_rpc.exceptions.provider import RpcClientError

if TYPE_CHECKING:
    from py_evm_rpc.models import TransactionReceipt


class ConfigurationError(RpcClientError):
    """
    Endpoint or client settings are unusable, raised before any network call
    """

    pass


class ValidationError(RpcClientError):
    """
    Caller supplied a malformed address, hash, height or transaction payload
    """

    pass


class BlockNotFoundError(RpcClientError):
    pass


class BroadcastRejectedError(RpcClientError):
    """
    Node accepted the connection but refused the transaction, either at
    submission or by executing it with a failed status
    """

    code: Optional[int]
    message: str
    data: object
    transaction_hash: Optional[str]
    receipt: Optional["TransactionReceipt"]

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data=None,
        transaction_hash: Optional[str] = None,
        receipt: Optional["TransactionReceipt"] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data
        self.transaction_hash = transaction_hash
        self.receipt = receipt
