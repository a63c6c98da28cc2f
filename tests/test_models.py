import pytest

from py_evm_rpc import Block, BlockId, BlockIdKind, Transaction
from py_evm_rpc.utils import hex_to_int, is_raw_transaction_hex, is_valid_address
from tests.conftest import BLOCK_HASH, make_block, make_tx


def test_block_quantities_are_ints():
    block = Block.model_validate(make_block(100))
    assert block.height == 100
    assert block.timestamp == 0x65F1E0A0
    assert block.gas_limit == 30_000_000
    assert block.base_fee_per_gas == 7
    tx = block.transactions[0]
    assert tx.value == 10**18
    assert tx.gas == 21000
    assert tx.from_address.startswith("0x")


def test_contract_creation_has_no_recipient():
    tx = Transaction.model_validate(make_tx(1, to=None))
    assert tx.to is None


def test_pre_london_block_without_base_fee():
    data = make_block(5)
    del data["baseFeePerGas"]
    assert Block.model_validate(data).base_fee_per_gas is None


@pytest.mark.parametrize(
    "block_id, method, param",
    [
        (BlockId.by_height(255), "eth_getBlockByNumber", "0xff"),
        (BlockId.by_hash(BLOCK_HASH), "eth_getBlockByHash", BLOCK_HASH),
        (BlockId.latest(), "eth_getBlockByNumber", "latest"),
    ],
)
def test_block_id_routing(block_id, method, param):
    assert block_id.rpc_method == method
    assert block_id.rpc_param == param


def test_block_id_unknown_tag():
    with pytest.raises(ValueError):
        BlockId.by_tag("newest")
    assert BlockId.by_tag("finalized").kind == BlockIdKind.TAG


@pytest.mark.parametrize("value", ["0x", "12", "0xzz", True, 1.5])
def test_hex_to_int_rejects_garbage(value):
    with pytest.raises(ValueError):
        hex_to_int(value)


def test_raw_transaction_hex():
    assert is_raw_transaction_hex("deadbeef")
    assert is_raw_transaction_hex("0xDEADBEEF")
    assert not is_raw_transaction_hex("not-hex!")


@pytest.mark.parametrize(
    "address, valid",
    [
        ("0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae", True),
        ("0xDE0B295669A9FD93D5F28D9EC85E40F4CB697BAE", True),
        ("0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe", True),
        ("0xDE0B295669a9FD93d5F28D9Ec85E40f4cb697BAe", False),
        ("0xde0b295669a9fd93d5f28d9ec85e40f4cb697BAE", False),
        ("0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed", True),
        ("0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAeD", False),
        ("0x" + "1" * 40, True),
        ("0x" + "1" * 39, False),
        (b"\xde" * 20, False),
    ],
)
def test_address_checksum(address, valid):
    assert is_valid_address(address) is valid
