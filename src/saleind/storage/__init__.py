"""Storage components for replaying transforms locally.

This package provides:
- DocumentSink: entity/append-mode document store with Parquet export
"""

from saleind.storage.sink import DocumentSink

__all__ = [
    "DocumentSink",
]
