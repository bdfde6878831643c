"""Decoding utilities: felt access, uint256 reconstruction, and fixed-point formatting."""

from __future__ import annotations

from collections.abc import Sequence

from saleind.constants import DECIMALS
from saleind.core.errors import MalformedEventError

_U128 = 2**128


def strip_hex_prefix(value: str) -> str:
    return value[2:] if value[:2].lower() == "0x" else value


def felt_to_int(value: str) -> int:
    """Parse one 0x-hex felt into an int."""
    if not isinstance(value, str) or value[:2].lower() != "0x":
        raise MalformedEventError(f"felt must be a 0x-prefixed hex string, got {value!r}")
    try:
        return int(value, 16)
    except ValueError as e:
        raise MalformedEventError(f"felt is not valid hex: {value!r}") from e


def field_at(data: Sequence[str], index: int) -> str:
    """Return the `index`-th data field (no padding: out-of-range is an error)."""
    if index < 0 or index >= len(data):
        raise MalformedEventError(f"data field {index} out of range (event has {len(data)} fields)")
    return data[index]


def uint256_to_int(low: str, high: str) -> int:
    """Rebuild a uint256 from its (low, high) 128-bit halves."""
    lo = felt_to_int(low)
    hi = felt_to_int(high)
    if lo >= _U128 or hi >= _U128:
        raise MalformedEventError(f"uint256 halves must fit 128 bits: low={low}, high={high}")
    return lo + (hi << 128)


def format_units(value: int, decimals: int = DECIMALS) -> str:
    """Format an integer amount as a decimal string shifted by `decimals` places.

    Trailing fractional zeros are dropped but one digit is always kept,
    so 10**18 with 18 decimals gives "1.0".
    """
    if value < 0:
        raise MalformedEventError(f"amount cannot be negative: {value}")
    whole, frac = divmod(value, 10**decimals)
    frac_digits = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{whole}.{frac_digits or '0'}"


def decode_amount(low: str, high: str, decimals: int = DECIMALS) -> str:
    return format_units(uint256_to_int(low, high), decimals)
