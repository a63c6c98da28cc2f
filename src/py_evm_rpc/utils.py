from typing import Optional, Union

from eth_utils import (
    add_0x_prefix,
    is_checksum_address,
    is_hex,
    is_hex_address,
    remove_0x_prefix,
    to_int,
)

from py_evm_rpc.constants import ALLOWED_SCHEMES

HASH_HEX_LENGTH = 64


def is_valid_endpoint(endpoint_url) -> bool:
    """
    Check that an endpoint starts with exactly one of http:// or https://.

    Host and path are not inspected here; an unreachable or unparsable host
    surfaces as a TransportError on the first call.
    """
    if not isinstance(endpoint_url, str) or not endpoint_url:
        return False
    matched = [s for s in ALLOWED_SCHEMES if endpoint_url.startswith(s)]
    return len(matched) == 1


def is_valid_address(address) -> bool:
    """
    20-byte hex account address, mixed case must be a valid EIP-55 checksum.
    """
    if not isinstance(address, str) or not is_hex_address(address):
        return False
    digits = remove_0x_prefix(address)
    if digits.islower() or digits.isupper() or digits.isdigit():
        return True
    return is_checksum_address(address)


def is_valid_hash(value) -> bool:
    """
    32-byte 0x-prefixed hex string (block or transaction hash).
    """
    if not isinstance(value, str) or not value.startswith("0x"):
        return False
    return len(remove_0x_prefix(value)) == HASH_HEX_LENGTH and is_hex(value)


def is_raw_transaction_hex(value) -> bool:
    """
    Non-empty hex payload with an even number of digits, prefix optional.
    """
    if not isinstance(value, str):
        return False
    digits = remove_0x_prefix(value)
    if not digits or len(digits) % 2:
        return False
    return is_hex(digits)


def normalize_hex(value: str) -> str:
    return add_0x_prefix(value)


def hex_to_int(value: Union[str, int, None]) -> Optional[int]:
    """
    Convert a JSON-RPC quantity ("0x1b4") to int.

    Ints are passed through, None stays None.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a quantity: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.startswith("0x") and is_hex(value):
        return to_int(hexstr=value)
    raise ValueError(f"Not a hex quantity: {value!r}")
