"""Sales transform: correlate the events of one purchase into a single sale row.

A purchase emits, in order and within one block:
- `Transfer` of the price from the buyer to the naming contract,
- optionally `SaleMetadata`, `on_commission` (referral) and `domain_renewed`,
- `starknet_id_update`, which finalizes the sale.

The fold carries a `SaleContext` across the block's events. A domain update
only produces a row when a transfer is pending; afterwards the context is
reset, so several sales in one block are emitted independently.

Sales are assumed not to interleave within a block. If they do, the shared
context is last-writer-wins: an interleaved referral or metadata event is
attributed to whichever sale finalizes next.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from saleind.constants import EventKind
from saleind.core.config import IndexerConfig
from saleind.core.models import Block, EventWithTransaction, SaleRecord, TransferDetails
from saleind.decoding.selectors import SelectorTable
from saleind.decoding.starknetid import decode_domain
from saleind.decoding.utils import decode_amount, felt_to_int, field_at, strip_hex_prefix

log = logging.getLogger(__name__)

SALE_EVENT_KINDS: tuple[EventKind, ...] = (
    EventKind.DOMAIN_UPDATE,
    EventKind.SALE_METADATA,
    EventKind.TRANSFER,
    EventKind.REFERRAL,
    EventKind.AUTO_RENEW,
)

SELECTORS = SelectorTable(SALE_EVENT_KINDS)

# starknet_id_update data: [n, label_0 .. label_n-1, owner, <reserved>, expiry]
_EXPIRY_AFTER_LABELS = 2


@dataclass(slots=True, frozen=True)
class SaleContext:
    """Partial sale accumulated since the last finalized sale (or block start)."""

    pending_transfer: TransferDetails | None = None
    auto_renewed: bool = False
    sponsor_addr: int | None = None
    sponsor_comm: int | None = None
    meta_hash: str = "0x0"

    @property
    def awaiting_finalize(self) -> bool:
        return self.pending_transfer is not None


StepResult = tuple[SaleContext, SaleRecord | None]
Handler = Callable[[SaleContext, EventWithTransaction, int, IndexerConfig], StepResult]


# ---------- handlers ----------


def _on_transfer(ctx: SaleContext, item: EventWithTransaction, timestamp: int, config: IndexerConfig) -> StepResult:
    data = item.event.data
    payer, to_address, low, high = (field_at(data, i) for i in range(4))
    if felt_to_int(to_address) != config.naming_contract:
        log.debug("tx %s: transfer to %s is not a purchase", item.transaction.hash, to_address)
        return ctx, None
    transfer = TransferDetails(payer=payer, amount=decode_amount(low, high, config.decimals))
    return replace(ctx, pending_transfer=transfer), None


def _on_sale_metadata(ctx: SaleContext, item: EventWithTransaction, timestamp: int, config: IndexerConfig) -> StepResult:
    return replace(ctx, meta_hash=field_at(item.event.data, 1)), None


def _on_referral(ctx: SaleContext, item: EventWithTransaction, timestamp: int, config: IndexerConfig) -> StepResult:
    data = item.event.data
    # a commission is only paid on the auto-renewal path
    return (
        replace(
            ctx,
            sponsor_comm=felt_to_int(field_at(data, 1)),
            sponsor_addr=felt_to_int(field_at(data, 3)),
            auto_renewed=True,
        ),
        None,
    )


def _on_auto_renew(ctx: SaleContext, item: EventWithTransaction, timestamp: int, config: IndexerConfig) -> StepResult:
    return replace(ctx, auto_renewed=True), None


def _on_domain_update(ctx: SaleContext, item: EventWithTransaction, timestamp: int, config: IndexerConfig) -> StepResult:
    if ctx.pending_transfer is None:
        log.debug("tx %s: domain update without a pending transfer", item.transaction.hash)
        return ctx, None

    data = item.event.data
    n = felt_to_int(field_at(data, 0))
    labels = [felt_to_int(field_at(data, 1 + i)) for i in range(n)]
    expiry = felt_to_int(field_at(data, 1 + n + _EXPIRY_AFTER_LABELS))

    record = SaleRecord(
        tx_hash=item.transaction.hash,
        meta_hash=strip_hex_prefix(ctx.meta_hash),
        domain=decode_domain(labels),
        # float price is lossy for large amounts; the exact value is the transfer amount string
        price=float(ctx.pending_transfer.amount),
        payer=ctx.pending_transfer.payer,
        timestamp=timestamp,
        expiry=expiry,
        auto=ctx.auto_renewed,
        sponsor=ctx.sponsor_addr if ctx.sponsor_addr is not None else 0,
        sponsor_comm=ctx.sponsor_comm if ctx.sponsor_addr is not None and ctx.sponsor_comm is not None else 0,
    )
    return SaleContext(), record


HANDLERS: dict[EventKind, Handler] = {
    EventKind.TRANSFER: _on_transfer,
    EventKind.SALE_METADATA: _on_sale_metadata,
    EventKind.REFERRAL: _on_referral,
    EventKind.AUTO_RENEW: _on_auto_renew,
    EventKind.DOMAIN_UPDATE: _on_domain_update,
}


# ---------- fold ----------


def step(ctx: SaleContext, item: EventWithTransaction, timestamp: int, config: IndexerConfig) -> StepResult:
    """Apply one event to the context; returns the new context and a finished sale, if any."""
    kind = SELECTORS.kind_of(item.event)
    if kind is None:
        log.debug("tx %s: skipping event with unknown selector", item.transaction.hash)
        return ctx, None
    return HANDLERS[kind](ctx, item, timestamp, config)


def transform(block: Block, config: IndexerConfig) -> list[dict]:
    """Return the sale documents of one block, in emission order."""
    timestamp = block.header.timestamp // 1000
    ctx = SaleContext()
    records: list[SaleRecord] = []
    for item in block.events:
        ctx, record = step(ctx, item, timestamp, config)
        if record is not None:
            records.append(record)
    if ctx.awaiting_finalize:
        log.debug("block ended with an unfinalized transfer from %s", ctx.pending_transfer.payer)
    return [record.to_document() for record in records]
