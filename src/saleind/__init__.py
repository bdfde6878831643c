from __future__ import annotations

from .constants import DECIMALS, EventKind
from .core.config import IndexerConfig, load_config
from .core.models import Block, SaleRecord, TaxRecord
from .decoding.selectors import SELECTOR_KEYS, SelectorTable
from .indexers import INDEXERS, build_filter, get_indexer, host_config

__all__ = [
    "DECIMALS",
    "EventKind",
    "IndexerConfig",
    "load_config",
    "Block",
    "SaleRecord",
    "TaxRecord",
    "SELECTOR_KEYS",
    "SelectorTable",
    "INDEXERS",
    "build_filter",
    "get_indexer",
    "host_config",
]
