import asyncio
from typing import Optional

import pydantic
from loguru import logger

from py_evm_rpc import constants
from py_evm_rpc.exceptions.exceptions import (
    BlockNotFoundError,
    BroadcastRejectedError,
    ConfigurationError,
    ValidationError,
)
from py_evm_rpc.exceptions.provider import (
    TRANSACTION_REJECTION_ERRORS,
    MalformedResponseError,
    RPCTimeoutError,
    TransportError,
)
from py_evm_rpc.models import Block, BlockId, SyncStatus, TransactionReceipt
from py_evm_rpc.providers import JsonProvider
from py_evm_rpc.utils import (
    hex_to_int,
    is_raw_transaction_hex,
    is_valid_address,
    is_valid_endpoint,
    is_valid_hash,
    normalize_hex,
)


class EVMClient(object):
    """
    Client for a single EVM-compatible node.

    Every method is one logical call to the node: arguments are validated
    locally, the result is normalized into ints and models, failures are
    raised as typed errors. The client holds no state besides the provider,
    so one instance may be shared by concurrent tasks.
    """

    def __init__(
        self,
        provider,
        receipt_poll_attempts: int = constants.RECEIPT_POLL_ATTEMPTS,
        receipt_poll_interval: float = constants.RECEIPT_POLL_INTERVAL,
    ):
        """
        Initialize client over an existing provider.

        Args:
            provider: Object with an async json_rpc(method, params) method,
                normally a JsonProvider
            receipt_poll_attempts: Receipt polls made while a broadcast waits
            receipt_poll_interval: Seconds between receipt polls
        """
        if (
            isinstance(receipt_poll_attempts, bool)
            or not isinstance(receipt_poll_attempts, int)
            or receipt_poll_attempts < 1
        ):
            raise ConfigurationError(
                f"receipt_poll_attempts must be a positive int, got {receipt_poll_attempts!r}"
            )
        if (
            isinstance(receipt_poll_interval, bool)
            or not isinstance(receipt_poll_interval, (int, float))
            or receipt_poll_interval < 0
        ):
            raise ConfigurationError(
                f"receipt_poll_interval must be a non-negative number, got {receipt_poll_interval!r}"
            )
        self._provider = provider
        self.receipt_poll_attempts = receipt_poll_attempts
        self.receipt_poll_interval = receipt_poll_interval

    @classmethod
    def create(
        cls,
        endpoint_url: str,
        *,
        timeout=constants.TIMEOUT_WAIT_RPC,
        headers: Optional[dict] = None,
        receipt_poll_attempts: int = constants.RECEIPT_POLL_ATTEMPTS,
        receipt_poll_interval: float = constants.RECEIPT_POLL_INTERVAL,
        **kwargs,
    ) -> "EVMClient":
        """
        Build a client for an http(s) node endpoint.

        No network call is made here; the HTTP session is opened on first use.

        Raises:
            ConfigurationError: Endpoint is not an http:// or https:// URL,
                timeout is not positive, polling settings are out of range
                or an unknown option is passed
        """
        if kwargs:
            raise ConfigurationError(f"Unknown client options: {sorted(kwargs)}")
        if not is_valid_endpoint(endpoint_url):
            raise ConfigurationError(
                f"Please provide a valid HTTP endpoint, got {endpoint_url!r}"
            )
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigurationError(f"Timeout must be a positive number, got {timeout!r}")
        return cls(
            JsonProvider(endpoint_url, timeout=timeout, headers=headers),
            receipt_poll_attempts=receipt_poll_attempts,
            receipt_poll_interval=receipt_poll_interval,
        )

    @property
    def provider(self):
        return self._provider

    async def __aenter__(self):
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()

    async def startup(self):
        if hasattr(self._provider, "startup"):
            await self._provider.startup()

    async def shutdown(self):
        if hasattr(self._provider, "shutdown"):
            await self._provider.shutdown()

    async def _call(self, method: str, *params):
        return await self._provider.json_rpc(method, list(params))

    @staticmethod
    def _to_int(value, method: str) -> int:
        try:
            result = hex_to_int(value)
        except ValueError as e:
            raise MalformedResponseError(f"{method} returned {value!r}") from e
        if result is None:
            raise MalformedResponseError(f"{method} returned no value")
        return result

    @staticmethod
    def _parse(model, data, method: str):
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"{method} returned {type(data).__name__}, expected object"
            )
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            raise MalformedResponseError(f"Can't parse {method} response: {e}") from e

    @staticmethod
    def _check_address(address):
        if not is_valid_address(address):
            raise ValidationError(
                f"invalid address {address!r}, please provide a valid EVM compatible address"
            )

    @staticmethod
    def _check_hash(value, kind="hash"):
        if not is_valid_hash(value):
            raise ValidationError(f"invalid {kind} {value!r}, expected 0x + 64 hex digits")

    # Node

    @staticmethod
    def _is_syncing_result(result) -> bool:
        return isinstance(result, (dict, list))

    async def get_sync_status(self) -> Optional[SyncStatus]:
        """
        Get sync progress of the node.

        Returns:
            None when the node is fully synced, otherwise SyncStatus

        Raises:
            MalformedResponseError: Node reports it is syncing but the
                progress is not an object
        """
        result = await self._call(constants.ETH_SYNCING)
        if not self._is_syncing_result(result):
            return None
        return self._parse(SyncStatus, result, constants.ETH_SYNCING)

    async def is_node_syncing(self) -> bool:
        """
        False when the node reports a scalar "not syncing", True for any
        structured progress object.
        """
        result = await self._call(constants.ETH_SYNCING)
        return self._is_syncing_result(result)

    async def get_chain_id(self) -> int:
        result = await self._call(constants.ETH_CHAIN_ID)
        return self._to_int(result, constants.ETH_CHAIN_ID)

    # Address

    async def get_native_balance_by_address(self, address: str) -> int:
        """
        Get native balance at the latest block.

        Args:
            address: EVM account address

        Returns:
            Balance in wei

        Raises:
            ValidationError: Address is malformed, no call is made
        """
        self._check_address(address)
        result = await self._call(
            constants.ETH_GET_BALANCE, address, constants.BLOCK_LATEST
        )
        return self._to_int(result, constants.ETH_GET_BALANCE)

    async def get_next_nonce_by_address(self, address: str) -> int:
        """
        Get the nonce to use for the next transaction of an account.

        Uses the pending transaction count so transactions still in the
        mempool are accounted for.

        Raises:
            ValidationError: Address is malformed, no call is made
        """
        self._check_address(address)
        result = await self._call(
            constants.ETH_GET_TRANSACTION_COUNT, address, constants.BLOCK_PENDING
        )
        return self._to_int(result, constants.ETH_GET_TRANSACTION_COUNT)

    # Transaction

    async def get_transaction_receipt_by_hash(
        self, tx_hash: str
    ) -> Optional[TransactionReceipt]:
        """
        Get receipt of a transaction.

        Returns:
            TransactionReceipt, or None if the transaction is not mined yet
        """
        self._check_hash(tx_hash, "transaction hash")
        result = await self._call(constants.ETH_GET_TRANSACTION_RECEIPT, tx_hash)
        if result is None:
            return None
        return self._parse(
            TransactionReceipt, result, constants.ETH_GET_TRANSACTION_RECEIPT
        )

    async def wait_for_transaction_receipt(
        self,
        tx_hash: str,
        attempts: Optional[int] = None,
        poll_interval: Optional[float] = None,
    ) -> TransactionReceipt:
        """
        Poll until the transaction is mined.

        Transport errors are not retried and propagate from the first failing
        poll. Every TransportError raised here carries transaction_hash.

        Raises:
            RPCTimeoutError: Receipt still absent after all attempts
        """
        attempts = self.receipt_poll_attempts if attempts is None else attempts
        if poll_interval is None:
            poll_interval = self.receipt_poll_interval
        for attempt in range(attempts):
            try:
                receipt = await self.get_transaction_receipt_by_hash(tx_hash)
            except TransportError as e:
                e.transaction_hash = tx_hash
                raise
            if receipt is not None:
                return receipt
            if attempt + 1 < attempts:
                await asyncio.sleep(poll_interval)
        raise RPCTimeoutError(
            f"Transaction {tx_hash} not mined after {attempts} polls",
            transaction_hash=tx_hash,
        )

    # Block

    async def get_latest_block_height(self) -> int:
        result = await self._call(constants.ETH_BLOCK_NUMBER)
        return self._to_int(result, constants.ETH_BLOCK_NUMBER)

    async def get_block(self, block_id: BlockId) -> Block:
        """
        Get block with full transaction bodies.

        Args:
            block_id: Height, hash or tag of the block

        Raises:
            BlockNotFoundError: Node does not know the block
        """
        result = await self._call(block_id.rpc_method, block_id.rpc_param, True)
        if result is None:
            raise BlockNotFoundError(f"Block {block_id} not found")
        return self._parse(Block, result, block_id.rpc_method)

    async def get_block_by_height(self, height: int) -> Block:
        if isinstance(height, bool) or not isinstance(height, int) or height < 0:
            raise ValidationError(f"invalid block height {height!r}")
        return await self.get_block(BlockId.by_height(height))

    async def get_block_by_hash(self, block_hash: str) -> Block:
        self._check_hash(block_hash, "block hash")
        return await self.get_block(BlockId.by_hash(block_hash))

    async def get_latest_block(self) -> Block:
        return await self.get_block(BlockId.latest())

    # Broadcast

    async def broadcast_raw_transaction_hex(
        self, signed_tx_hex: str, wait_for_receipt: bool = True
    ) -> str:
        """
        Submit an already signed transaction.

        Args:
            signed_tx_hex: Signed transaction as hex, with or without 0x prefix
            wait_for_receipt: Wait until the transaction is mined and check
                its status. If False, return as soon as the node accepts it.

        Returns:
            Transaction hash

        Raises:
            ValidationError: Payload is not hex, no call is made
            BroadcastRejectedError: Node refused the transaction or it was
                mined with a failed status
            TransportError: Submission or receipt polling failed; after the
                node accepted the transaction the error carries transaction_hash
        """
        if not is_raw_transaction_hex(signed_tx_hex):
            raise ValidationError("Please provide a valid Hex string.")
        signed_tx_hex = normalize_hex(signed_tx_hex)

        try:
            tx_hash = await self._call(constants.ETH_SEND_RAW_TRANSACTION, signed_tx_hex)
        except TRANSACTION_REJECTION_ERRORS as e:
            logger.warning(f"Transaction rejected by node: {e.message}")
            raise BroadcastRejectedError(e.message, code=e.code, data=e.data) from e
        if not is_valid_hash(tx_hash):
            raise MalformedResponseError(
                f"{constants.ETH_SEND_RAW_TRANSACTION} returned {tx_hash!r}"
            )
        if not wait_for_receipt:
            return tx_hash

        receipt = await self.wait_for_transaction_receipt(tx_hash)
        if receipt.status is not None and not receipt.succeeded:
            logger.warning(f"Transaction {tx_hash} failed with status {receipt.status}")
            raise BroadcastRejectedError(
                f"Transaction {tx_hash} failed with status {receipt.status}",
                transaction_hash=tx_hash,
                receipt=receipt,
            )
        return receipt.transaction_hash
