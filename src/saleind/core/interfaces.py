from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from saleind.core.config import IndexerConfig
from saleind.core.models import Block

Document = dict[str, Any]


# ---------------------------------------------------------------------------
# IBlockTransform
# ---------------------------------------------------------------------------

@runtime_checkable
class IBlockTransform(Protocol):
    """
    Pure function from one block to the documents it produces.

    Domain expectations:
    - Output order follows event emission order.
    - No state survives between calls; the same block always yields the
      same documents, so the host may redeliver blocks freely.
    - Decode failures propagate; there is no partial output.
    """

    def __call__(self, block: Block, config: IndexerConfig) -> list[Document]:
        ...


# ---------------------------------------------------------------------------
# IDocumentSink
# ---------------------------------------------------------------------------

@runtime_checkable
class IDocumentSink(Protocol):
    """
    Destination for the documents a transform returns.

    Domain expectations:
    - In entity mode each document is `{"entity": {...}, "update": [{"$set": {...}}]}`
      and repeated writes for the same entity upsert in place.
    - In append mode each document is an independent row.
    """

    def write(self, documents: list[Document]) -> int:
        """
        Persist a block's documents.

        Returns
        -------
        int
            Number of documents accepted.

        Implementations:
        - The host's Mongo sink (outside this package)
        - `DocumentSink`, an in-memory store with Parquet export
        """
        ...
