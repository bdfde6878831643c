"""Primitive decoders shared by every transform.

This package provides:
- Selector computation and per-indexer dispatch tables
- Felt / uint256 access and fixed-point amount formatting
- starknet.id domain label decoding
"""

from saleind.decoding.selectors import SELECTOR_KEYS, SelectorTable, get_selector_from_name
from saleind.decoding.starknetid import decode_domain, decode_root_domain
from saleind.decoding.utils import decode_amount, felt_to_int, field_at, format_units, uint256_to_int

__all__ = [
    "SELECTOR_KEYS",
    "SelectorTable",
    "get_selector_from_name",
    "decode_domain",
    "decode_root_domain",
    "decode_amount",
    "felt_to_int",
    "field_at",
    "format_units",
    "uint256_to_int",
]
