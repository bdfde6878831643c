"""In-memory document sink with Parquet export.

Mirrors the store contract closely enough to replay blocks locally:
- entity mode: `{"entity": {...}, "update": [{"$set": {...}}]}` upserts by
  entity key, merging `$set` fields into the stored row;
- append mode: each document is a new row.

Design notes
------------
- Rows keep first-seen order; an upsert updates in place.
- Arrow columns are sorted by name and every value is stored as a string
  (or None) so uint256 allowances and felt addresses stay exact.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from saleind.core.interfaces import Document, IDocumentSink

EntityKey = tuple[tuple[str, str], ...]


def _entity_key(entity: dict[str, Any]) -> EntityKey:
    return tuple(sorted((k, str(v)) for k, v in entity.items()))


class DocumentSink(IDocumentSink):
    def __init__(self, *, entity_mode: bool, codec: str = "zstd") -> None:
        self.entity_mode = entity_mode
        self.codec = codec
        self._rows: list[Document] = []
        self._index: dict[EntityKey, int] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def write(self, documents: list[Document]) -> int:
        for doc in documents:
            if self.entity_mode:
                self._upsert(doc)
            else:
                self._rows.append(dict(doc))
        return len(documents)

    def _upsert(self, doc: Document) -> None:
        try:
            entity = doc["entity"]
            updates = doc["update"]
        except KeyError as e:
            raise ValueError(f"entity-mode document is missing {e.args[0]!r}") from e

        key = _entity_key(entity)
        idx = self._index.get(key)
        if idx is None:
            idx = len(self._rows)
            self._index[key] = idx
            self._rows.append(dict(entity))
        row = self._rows[idx]
        for update in updates:
            row.update(update.get("$set", {}))

    def rows(self) -> list[Document]:
        return [dict(r) for r in self._rows]

    def to_arrow_table(self) -> pa.Table:
        """Convert the rows to an Arrow table with a deterministic string schema."""
        names = sorted({k for r in self._rows for k in r})
        arrays = {
            name: pa.array([None if r.get(name) is None else str(r[name]) for r in self._rows], type=pa.string())
            for name in names
        }
        schema = pa.schema([pa.field(name, pa.string()) for name in names])
        return pa.Table.from_pydict(arrays, schema=schema)

    def write_parquet(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        pq.write_table(self.to_arrow_table(), out, compression=self.codec)
        return out
