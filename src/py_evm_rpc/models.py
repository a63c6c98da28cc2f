"""Typed records returned by EVMClient."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from py_evm_rpc.constants import (
    BLOCK_LATEST,
    BLOCK_TAGS,
    ETH_GET_BLOCK_BY_HASH,
    ETH_GET_BLOCK_BY_NUMBER,
    RECEIPT_STATUS_SUCCESS,
)
from py_evm_rpc.utils import hex_to_int


class NodeModel(BaseModel):
    """
    Base for node responses: camelCase keys are read into snake_case fields,
    unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class SyncStatus(NodeModel):
    """
    Sync progress reported by eth_syncing while the node catches up.

    Attributes:
        starting_block: Block the current sync started from.
        current_block: Block the node has processed up to.
        highest_block: Highest block known to the node.
    """

    starting_block: int
    current_block: int
    highest_block: int

    @field_validator("starting_block", "current_block", "highest_block", mode="before")
    def parse_quantity(cls, v):
        return hex_to_int(v)

    @property
    def remaining_blocks(self) -> int:
        return max(self.highest_block - self.current_block, 0)


class Transaction(NodeModel):
    """
    Transaction body as included in a block.

    Attributes:
        hash: Transaction hash.
        nonce: Sender sequence number.
        block_hash: Hash of the including block, None while pending.
        block_number: Height of the including block, None while pending.
        transaction_index: Position inside the block.
        from_address: Sender address.
        to: Recipient address, None for contract creation.
        value: Transferred amount in wei.
        gas: Gas limit supplied by the sender.
        gas_price: Gas price (effective price for EIP-1559 transactions).
        input: Call data as hex.
        type: Transaction envelope type.
        chain_id: Chain id the transaction was signed for.
    """

    hash: str
    nonce: int
    block_hash: Optional[str] = None
    block_number: Optional[int] = None
    transaction_index: Optional[int] = None
    from_address: str = Field(alias="from")
    to: Optional[str] = None
    value: int
    gas: int
    gas_price: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None
    input: str = "0x"
    type: Optional[int] = None
    chain_id: Optional[int] = None

    @field_validator(
        "nonce",
        "block_number",
        "transaction_index",
        "value",
        "gas",
        "gas_price",
        "max_fee_per_gas",
        "max_priority_fee_per_gas",
        "type",
        "chain_id",
        mode="before",
    )
    def parse_quantity(cls, v):
        return hex_to_int(v)


class Block(NodeModel):
    """
    Block with full transaction bodies.

    Attributes:
        number: Block height, None for a pending block.
        hash: Block hash, None for a pending block.
        parent_hash: Hash of the parent block.
        timestamp: Unix timestamp in seconds.
        miner: Fee recipient.
        gas_limit: Block gas limit.
        gas_used: Gas used by all transactions.
        base_fee_per_gas: EIP-1559 base fee, None before London.
        transactions: Transactions in block order.
    """

    number: Optional[int] = None
    hash: Optional[str] = None
    parent_hash: str
    timestamp: int
    miner: Optional[str] = None
    gas_limit: Optional[int] = None
    gas_used: Optional[int] = None
    base_fee_per_gas: Optional[int] = None
    transactions: List[Transaction] = []

    @field_validator(
        "number",
        "timestamp",
        "gas_limit",
        "gas_used",
        "base_fee_per_gas",
        mode="before",
    )
    def parse_quantity(cls, v):
        return hex_to_int(v)

    @property
    def height(self) -> Optional[int]:
        return self.number


class Log(NodeModel):
    address: str
    topics: List[str] = []
    data: str = "0x"
    block_number: Optional[int] = None
    transaction_hash: Optional[str] = None
    log_index: Optional[int] = None
    removed: bool = False

    @field_validator("block_number", "log_index", mode="before")
    def parse_quantity(cls, v):
        return hex_to_int(v)


class TransactionReceipt(NodeModel):
    """
    Post-execution record of a mined transaction.

    The including block is referenced by hash and number only.
    """

    transaction_hash: str
    transaction_index: int
    block_hash: str
    block_number: int
    from_address: str = Field(alias="from")
    to: Optional[str] = None
    contract_address: Optional[str] = None
    gas_used: int
    cumulative_gas_used: int
    effective_gas_price: Optional[int] = None
    status: Optional[int] = None
    logs: List[Log] = []

    @field_validator(
        "transaction_index",
        "block_number",
        "gas_used",
        "cumulative_gas_used",
        "effective_gas_price",
        "status",
        mode="before",
    )
    def parse_quantity(cls, v):
        return hex_to_int(v)

    @property
    def succeeded(self) -> bool:
        return self.status == RECEIPT_STATUS_SUCCESS


class BlockIdKind(str, Enum):
    HEIGHT = "height"
    HASH = "hash"
    TAG = "tag"


@dataclass(frozen=True)
class BlockId:
    """
    Block identifier: a height, a hash or a tag such as "latest".

    Build with by_height / by_hash / by_tag rather than directly.
    """

    kind: BlockIdKind
    value: Union[int, str]

    @classmethod
    def by_height(cls, height: int) -> "BlockId":
        return cls(BlockIdKind.HEIGHT, height)

    @classmethod
    def by_hash(cls, block_hash: str) -> "BlockId":
        return cls(BlockIdKind.HASH, block_hash)

    @classmethod
    def by_tag(cls, tag: str) -> "BlockId":
        if tag not in BLOCK_TAGS:
            raise ValueError(f"Unknown block tag: {tag}")
        return cls(BlockIdKind.TAG, tag)

    @classmethod
    def latest(cls) -> "BlockId":
        return cls.by_tag(BLOCK_LATEST)

    @property
    def rpc_method(self) -> str:
        if self.kind == BlockIdKind.HASH:
            return ETH_GET_BLOCK_BY_HASH
        return ETH_GET_BLOCK_BY_NUMBER

    @property
    def rpc_param(self) -> str:
        if self.kind == BlockIdKind.HEIGHT:
            return hex(self.value)
        return self.value

    def __str__(self):
        return f"{self.kind.value}:{self.value}"
