"""Auto-renewal allowance transform: one entity upsert per renewal event.

Rows are keyed by (domain, renewer) so the latest allowance wins in the store.
"""

from __future__ import annotations

import logging

from saleind.constants import EventKind
from saleind.core.config import IndexerConfig
from saleind.core.models import Block, EventWithTransaction
from saleind.decoding.selectors import SelectorTable
from saleind.decoding.starknetid import decode_root_domain
from saleind.decoding.utils import felt_to_int, field_at, uint256_to_int

log = logging.getLogger(__name__)

AUTO_RENEW_EVENT_KINDS: tuple[EventKind, ...] = (
    EventKind.UPDATE_AUTO_RENEW,
    EventKind.DISABLE_AUTO_RENEW,
)

SELECTORS = SelectorTable(AUTO_RENEW_EVENT_KINDS)


def _meta_hash(felt: str) -> str:
    # stored as 31 bytes: the 32-byte hex form minus its leading byte
    return format(felt_to_int(felt), "064x")[2:]


def _upsert(domain: str, renewer: str, fields: dict) -> dict:
    return {
        "entity": {"domain": domain, "renewer": renewer},
        "update": [{"$set": {"domain": domain, "renewer": renewer, **fields}}],
    }


def _domain_of(item: EventWithTransaction) -> str:
    return decode_root_domain(felt_to_int(field_at(item.event.keys, 1)))


def decode_update(item: EventWithTransaction) -> dict:
    """UpdatedRenewal: keys = [selector, domain], data = [renewer, low, high, meta_hash]."""
    data = item.event.data
    renewer, low, high, meta_hash = (field_at(data, i) for i in range(4))
    return _upsert(
        _domain_of(item),
        renewer,
        {
            "allowance": str(uint256_to_int(low, high)),
            "meta_hash": _meta_hash(meta_hash),
            "tx_hash": item.transaction.hash,
        },
    )


def decode_disable(item: EventWithTransaction) -> dict:
    """DisabledRenewal: keys = [selector, domain], data = [renewer]."""
    renewer = field_at(item.event.data, 0)
    return _upsert(_domain_of(item), renewer, {"allowance": "0", "tx_hash": item.transaction.hash})


_DECODERS = {
    EventKind.UPDATE_AUTO_RENEW: decode_update,
    EventKind.DISABLE_AUTO_RENEW: decode_disable,
}


def transform(block: Block, config: IndexerConfig) -> list[dict]:
    """Return one upsert per renewal event in the block, in emission order."""
    out: list[dict] = []
    for item in block.events:
        kind = SELECTORS.kind_of(item.event)
        if kind is None:
            log.debug("tx %s: skipping event with unknown selector", item.transaction.hash)
            continue
        out.append(_DECODERS[kind](item))
    return out
