"""Core data models, configuration, and errors.

This package provides:
- Host payload models (Block, BlockHeader, EventWithTransaction, RawEvent)
- Output records (SaleRecord, TaxRecord)
- Configuration (IndexerConfig, load_config)
"""

from saleind.core.config import IndexerConfig, load_config
from saleind.core.errors import ConfigError, MalformedEventError
from saleind.core.models import (
    Block,
    BlockHeader,
    EventWithTransaction,
    RawEvent,
    SaleRecord,
    TaxRecord,
    Transaction,
    TransferDetails,
)

__all__ = [
    "IndexerConfig",
    "load_config",
    "ConfigError",
    "MalformedEventError",
    "Block",
    "BlockHeader",
    "EventWithTransaction",
    "RawEvent",
    "SaleRecord",
    "TaxRecord",
    "Transaction",
    "TransferDetails",
]
