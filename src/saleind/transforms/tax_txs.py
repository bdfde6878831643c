"""Tax transform: token transfers into the tax collection address."""

from __future__ import annotations

import logging

from saleind.constants import EventKind
from saleind.core.config import IndexerConfig
from saleind.core.models import Block, TaxRecord
from saleind.decoding.selectors import SelectorTable
from saleind.decoding.utils import decode_amount, felt_to_int, field_at

log = logging.getLogger(__name__)

TAX_EVENT_KINDS: tuple[EventKind, ...] = (EventKind.TRANSFER,)

SELECTORS = SelectorTable(TAX_EVENT_KINDS)


def transform(block: Block, config: IndexerConfig) -> list[dict]:
    """Return one tax row per transfer addressed to `config.tax_contract`."""
    out: list[dict] = []
    for item in block.events:
        if SELECTORS.kind_of(item.event) is None:
            log.debug("tx %s: skipping event with unknown selector", item.transaction.hash)
            continue
        data = item.event.data
        if felt_to_int(field_at(data, 1)) != config.tax_contract:
            continue
        amount = decode_amount(field_at(data, 2), field_at(data, 3), config.decimals)
        record = TaxRecord(tx_hash=item.transaction.hash, amount=float(amount), token=item.event.from_address)
        out.append(record.to_document())
    return out
