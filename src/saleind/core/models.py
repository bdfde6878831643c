"""Core data models: the block delivered by the host and the documents we emit.

This module defines:
- `Block` / `BlockHeader` / `EventWithTransaction` / `RawEvent` / `Transaction`:
  pydantic models validating the host's block payload (camelCase on the wire).
- `TransferDetails`: a transfer captured while a sale is being correlated.
- `SaleRecord` / `TaxRecord`: finished rows handed to the sink.

Design notes
------------
- Felts stay as the 0x-hex strings the host delivered; decoding to int happens
  at the point of use so addresses pass through byte-identical.
- Events keep emission order; nothing here sorts.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# === Host payload ===


class _HostModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class RawEvent(_HostModel):
    """One contract event as emitted on chain."""

    from_address: str = Field(alias="fromAddress")
    keys: tuple[str, ...] = ()
    data: tuple[str, ...] = ()


class Transaction(_HostModel):
    hash: str

    @model_validator(mode="before")
    @classmethod
    def _lift_meta_hash(cls, value: Any) -> Any:
        # some stream versions nest the hash under `meta`
        if isinstance(value, dict) and "hash" not in value and isinstance(value.get("meta"), dict):
            return {"hash": value["meta"].get("hash")}
        return value


class EventWithTransaction(_HostModel):
    event: RawEvent
    transaction: Transaction


class BlockHeader(_HostModel):
    timestamp: int  # epoch milliseconds


class Block(_HostModel):
    """One block as delivered by the host: header plus pre-filtered events in emission order."""

    header: BlockHeader
    events: tuple[EventWithTransaction, ...] = ()


# === Correlation / output records ===


@dataclass(slots=True, frozen=True)
class TransferDetails:
    """Payment captured from a Transfer addressed to the naming contract."""

    payer: str
    amount: str  # decimal string, exact


@dataclass(slots=True, frozen=True)
class SaleRecord:
    """A completed domain sale."""

    tx_hash: str
    meta_hash: str
    domain: str
    price: float
    payer: str
    timestamp: int
    expiry: int
    auto: bool
    sponsor: int = 0
    sponsor_comm: int = 0

    def to_document(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class TaxRecord:
    """A token transfer into the tax collection address."""

    tx_hash: str
    amount: float
    token: str

    def to_document(self) -> dict[str, Any]:
        return asdict(self)
